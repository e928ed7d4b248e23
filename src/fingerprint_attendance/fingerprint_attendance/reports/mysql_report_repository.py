from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.mysql_base import fetch_count, fetchall, fetchone
from .model import Notification, Report
from .repository import NotificationRepository, ReportRepository


def _to_report(row) -> Report:
    return Report(
        report_id=int(row["report_id"]),
        department_id=int(row["department_id"]),
        content=row["content"],
    )


def _to_notification(row) -> Notification:
    return Notification(
        notif_id=int(row["notif_id"]),
        user_id=int(row["user_id"]),
        content=row["content"],
        date_sent=row["date_sent"],
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, cur):
        self._cur = cur

    def get_by_id(self, report_id: int) -> Optional[Report]:
        self._cur.execute(
            "SELECT report_id, department_id, content FROM reports WHERE report_id=%s",
            (int(report_id),),
        )
        row = fetchone(self._cur)
        return _to_report(row) if row else None

    def list_by_department(self, department_id: int) -> Sequence[Report]:
        self._cur.execute(
            "SELECT report_id, department_id, content FROM reports WHERE department_id=%s ORDER BY report_id",
            (int(department_id),),
        )
        return [_to_report(r) for r in fetchall(self._cur)]

    def count_by_department(self, department_id: int) -> int:
        self._cur.execute("SELECT COUNT(*) AS n FROM reports WHERE department_id=%s", (int(department_id),))
        return fetch_count(self._cur)

    def create(self, *, department_id: int, content: str) -> int:
        self._cur.execute(
            "INSERT INTO reports(department_id, content) VALUES(%s,%s)",
            (int(department_id), content),
        )
        return int(self._cur.lastrowid)

    def delete(self, report_id: int) -> bool:
        self._cur.execute("DELETE FROM reports WHERE report_id=%s", (int(report_id),))
        return self._cur.rowcount > 0

    def delete_for_department(self, department_id: int) -> int:
        self._cur.execute("DELETE FROM reports WHERE department_id=%s", (int(department_id),))
        return int(self._cur.rowcount)


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, cur):
        self._cur = cur

    def get_by_id(self, notif_id: int) -> Optional[Notification]:
        self._cur.execute(
            "SELECT notif_id, user_id, content, date_sent FROM notifications WHERE notif_id=%s",
            (int(notif_id),),
        )
        row = fetchone(self._cur)
        return _to_notification(row) if row else None

    def list_for_user(self, user_id: int) -> Sequence[Notification]:
        self._cur.execute(
            """
            SELECT notif_id, user_id, content, date_sent
            FROM notifications
            WHERE user_id=%s
            ORDER BY date_sent DESC, notif_id DESC
            """,
            (int(user_id),),
        )
        return [_to_notification(r) for r in fetchall(self._cur)]

    def create(self, *, user_id: int, content: str, date_sent: datetime) -> int:
        self._cur.execute(
            "INSERT INTO notifications(user_id, content, date_sent) VALUES(%s,%s,%s)",
            (int(user_id), content, date_sent),
        )
        return int(self._cur.lastrowid)

    def delete(self, notif_id: int) -> bool:
        self._cur.execute("DELETE FROM notifications WHERE notif_id=%s", (int(notif_id),))
        return self._cur.rowcount > 0

    def delete_for_user(self, user_id: int) -> int:
        self._cur.execute("DELETE FROM notifications WHERE user_id=%s", (int(user_id),))
        return int(self._cur.rowcount)
