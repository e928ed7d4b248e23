"""Example: drive the service layer directly, without Flask.

Controllers stay thin; every rule lives in the services used below.
"""

import importlib
from datetime import datetime

from config import get_settings_module

from fingerprint_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(secret_key=settings.SECRET_KEY, db_config=settings.DB_CONFIG)

    now = datetime.now()
    view = container.attendance_service.record_fingerprint_event("FP-DEMO", now.date(), now)
    print(view.status.value, view.staff_email, view.arrival_time, view.departure_time)

    for dept in container.department_service.list_departments():
        print(dept.name, dept.total_staff, dept.active_staff)


if __name__ == "__main__":
    main()
