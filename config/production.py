import os

from config.config import (  # noqa: F401
    DB_CONFIG,
    DEFAULT_PAGE_SIZE,
    LOG_LEVEL,
    PASSWORD_RESET_TTL_MINUTES,
    SESSION_LIFETIME_DAYS,
    env_flag,
)

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
