from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Notification, Report


class ReportRepository(Protocol):
    def get_by_id(self, report_id: int) -> Optional[Report]:
        raise NotImplementedError

    def list_by_department(self, department_id: int) -> Sequence[Report]:
        raise NotImplementedError

    def count_by_department(self, department_id: int) -> int:
        raise NotImplementedError

    def create(self, *, department_id: int, content: str) -> int:
        raise NotImplementedError

    def delete(self, report_id: int) -> bool:
        raise NotImplementedError

    def delete_for_department(self, department_id: int) -> int:
        raise NotImplementedError


class NotificationRepository(Protocol):
    def get_by_id(self, notif_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Notification]:
        raise NotImplementedError

    def create(self, *, user_id: int, content: str, date_sent: datetime) -> int:
        raise NotImplementedError

    def delete(self, notif_id: int) -> bool:
        raise NotImplementedError

    def delete_for_user(self, user_id: int) -> int:
        raise NotImplementedError
