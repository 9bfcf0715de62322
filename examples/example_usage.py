"""Example: drive the service layer directly, without Flask.

Controllers stay thin; everything here goes through the same container the app uses.
"""

import importlib
import json

from config import get_settings_module

from src.hr_backend.hr_backend.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, jwt_secret=settings.JWT_SECRET)

    history = container.checkin_service.history_for_employee(1, limit=5)
    print(json.dumps([r.to_dict() for r in history], indent=2))


if __name__ == "__main__":
    main()
