from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_dashboard.attendance_dashboard.database.bootstrap import apply_seed_sql, ensure_demo_admin


def main() -> None:
    parser = argparse.ArgumentParser(description="Load demo departments, statuses, employees and a super admin.")
    parser.add_argument("--admin-email", default="admin@example.com")
    parser.add_argument("--admin-password", default="admin123")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    user_id = ensure_demo_admin(db_config, email=args.admin_email, password=args.admin_password)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(super admin {args.admin_email}, id={user_id})"
    )


if __name__ == "__main__":
    main()
