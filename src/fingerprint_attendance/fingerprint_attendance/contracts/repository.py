from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import Contract


class ContractRepository(Protocol):
    def get_by_id(self, contract_id: int) -> Optional[Contract]:
        raise NotImplementedError

    def get_for_staff(self, staff_id: int) -> Optional[Contract]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Contract]:
        """All contracts ordered by contract date."""

        raise NotImplementedError

    def list_by_days_per_week(self, days_per_week: int) -> Sequence[Contract]:
        raise NotImplementedError

    def list_by_department(self, department_id: int) -> Sequence[Contract]:
        raise NotImplementedError

    def create(
        self,
        *,
        staff_id: int,
        days_per_week: int,
        start_time: datetime,
        end_time: datetime,
        contract_date: date,
    ) -> int:
        raise NotImplementedError

    def delete_for_staff(self, staff_id: int) -> int:
        raise NotImplementedError
