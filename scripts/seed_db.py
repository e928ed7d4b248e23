from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "fingerprint_attendance"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from fingerprint_attendance.database.bootstrap import apply_seed_sql, ensure_demo_admin


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    email = settings.DEMO_ADMIN_EMAIL
    if not email or not settings.DEMO_ADMIN_PASSWORD:
        raise SystemExit("DEMO_ADMIN_EMAIL and DEMO_ADMIN_PASSWORD must be set")

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_admin(db_config, email=email, password=settings.DEMO_ADMIN_PASSWORD)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(admin={email})"
    )


if __name__ == "__main__":
    main()
