from __future__ import annotations

import logging
from typing import List

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from ..database.unit_of_work import UnitOfWorkFactory
from .model import Notification, Report

logger = logging.getLogger(__name__)


class ReportService:
    """Reports owned by a department; removed together with it."""

    def __init__(self, uow: UnitOfWorkFactory):
        self._uow = uow

    def create_report(self, department_id: int, content: str) -> Report:
        content = require_non_empty(content, "Report content")
        with self._uow() as uow:
            if not uow.departments.get_by_id(department_id):
                raise NotFoundError(f"Department not found with ID: {department_id}")
            report_id = uow.reports.create(department_id=int(department_id), content=content)
            logger.info("Report %s created for department ID: %s", report_id, department_id)
            return Report(report_id=report_id, department_id=int(department_id), content=content)

    def get_report(self, report_id: int) -> Report:
        with self._uow() as uow:
            report = uow.reports.get_by_id(report_id)
        if not report:
            raise NotFoundError(f"Report not found with ID: {report_id}")
        return report

    def list_for_department(self, department_id: int) -> List[Report]:
        with self._uow() as uow:
            if not uow.departments.get_by_id(department_id):
                raise NotFoundError(f"Department not found with ID: {department_id}")
            return list(uow.reports.list_by_department(department_id))

    def delete_report(self, report_id: int) -> None:
        with self._uow() as uow:
            if not uow.reports.delete(report_id):
                raise NotFoundError(f"Report not found with ID: {report_id}")
        logger.info("Report deleted with ID: %s", report_id)


class NotificationService:
    """Stored notifications owned by a user. Delivery is not handled here."""

    def __init__(self, uow: UnitOfWorkFactory):
        self._uow = uow

    def send(self, user_id: int, content: str) -> Notification:
        content = require_non_empty(content, "Notification content")
        sent_at = now_local()
        with self._uow() as uow:
            if not uow.users.get_by_id(user_id):
                raise NotFoundError(f"User not found with ID: {user_id}")
            notif_id = uow.notifications.create(user_id=int(user_id), content=content, date_sent=sent_at)
            return Notification(notif_id=notif_id, user_id=int(user_id), content=content, date_sent=sent_at)

    def list_for_user(self, user_id: int) -> List[Notification]:
        with self._uow() as uow:
            if not uow.users.get_by_id(user_id):
                raise NotFoundError(f"User not found with ID: {user_id}")
            return list(uow.notifications.list_for_user(user_id))

    def delete_notification(self, notif_id: int) -> None:
        with self._uow() as uow:
            if not uow.notifications.delete(notif_id):
                raise NotFoundError(f"Notification not found with ID: {notif_id}")
