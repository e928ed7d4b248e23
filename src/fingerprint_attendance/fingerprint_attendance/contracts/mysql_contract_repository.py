from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.mysql_base import fetchall, fetchone
from .model import Contract
from .repository import ContractRepository

_SELECT = """
    SELECT c.contract_id, c.staff_id, c.days_per_week, c.start_time, c.end_time, c.contract_date
    FROM contracts c
"""


def _to_contract(row) -> Contract:
    return Contract(
        contract_id=int(row["contract_id"]),
        staff_id=int(row["staff_id"]),
        days_per_week=int(row["days_per_week"]),
        start_time=row["start_time"],
        end_time=row["end_time"],
        contract_date=row["contract_date"],
    )


class MySQLContractRepository(ContractRepository):
    def __init__(self, cur):
        self._cur = cur

    def get_by_id(self, contract_id: int) -> Optional[Contract]:
        self._cur.execute(_SELECT + " WHERE c.contract_id=%s", (int(contract_id),))
        row = fetchone(self._cur)
        return _to_contract(row) if row else None

    def get_for_staff(self, staff_id: int) -> Optional[Contract]:
        self._cur.execute(_SELECT + " WHERE c.staff_id=%s", (int(staff_id),))
        row = fetchone(self._cur)
        return _to_contract(row) if row else None

    def list_all(self) -> Sequence[Contract]:
        self._cur.execute(_SELECT + " ORDER BY c.contract_date ASC, c.contract_id ASC")
        return [_to_contract(r) for r in fetchall(self._cur)]

    def list_by_days_per_week(self, days_per_week: int) -> Sequence[Contract]:
        self._cur.execute(
            _SELECT + " WHERE c.days_per_week=%s ORDER BY c.contract_id",
            (int(days_per_week),),
        )
        return [_to_contract(r) for r in fetchall(self._cur)]

    def list_by_department(self, department_id: int) -> Sequence[Contract]:
        self._cur.execute(
            _SELECT
            + """
            JOIN staff s ON s.user_id = c.staff_id
            WHERE s.department_id=%s
            ORDER BY c.contract_id
            """,
            (int(department_id),),
        )
        return [_to_contract(r) for r in fetchall(self._cur)]

    def create(
        self,
        *,
        staff_id: int,
        days_per_week: int,
        start_time: datetime,
        end_time: datetime,
        contract_date: date,
    ) -> int:
        self._cur.execute(
            """
            INSERT INTO contracts(staff_id, days_per_week, start_time, end_time, contract_date)
            VALUES(%s,%s,%s,%s,%s)
            """,
            (int(staff_id), int(days_per_week), start_time, end_time, contract_date),
        )
        return int(self._cur.lastrowid)

    def delete_for_staff(self, staff_id: int) -> int:
        self._cur.execute("DELETE FROM contracts WHERE staff_id=%s", (int(staff_id),))
        return int(self._cur.rowcount)
