from config.config import (  # noqa: F401
    DB_CONFIG,
    DEFAULT_PAGE_SIZE,
    PASSWORD_RESET_TTL_MINUTES,
    SESSION_LIFETIME_DAYS,
    env_flag,
)

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
