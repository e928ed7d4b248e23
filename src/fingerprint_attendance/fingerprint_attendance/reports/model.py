from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Report:
    report_id: int
    department_id: int
    content: str


@dataclass(frozen=True)
class Notification:
    notif_id: int
    user_id: int
    content: str
    date_sent: datetime
