"""Load the statutory rate tables and demo data, then (re)create the demo accounts.

Demo logins: admin@demo.mx / admin123 (admin) and hr@demo.mx / hr12345 (hr_manager).
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hris_system.hris_system.database.bootstrap import apply_seed_sql, ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_users(db_config)
    print(f"OK: rate tables and demo users loaded into {db_config.get('database')}")


if __name__ == "__main__":
    main()
