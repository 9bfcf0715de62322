from __future__ import annotations

import importlib
import logging
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_backend.hr_backend.core.logging import configure_logging
from src.hr_backend.hr_backend.database.bootstrap import apply_seed_sql, ensure_admin_user

logger = logging.getLogger("hr_backend.scripts.seed_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_admin_user(
        db_config,
        email=os.getenv("ADMIN_EMAIL", "admin@kistr.com"),
        password=os.getenv("ADMIN_PASSWORD", "password"),
    )

    logger.info(
        "seeded %s@%s:%s/%s",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )


if __name__ == "__main__":
    main()
