from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Contract:
    contract_id: int
    staff_id: int
    days_per_week: int
    start_time: datetime
    end_time: datetime
    contract_date: date
