from __future__ import annotations

import logging
from typing import List, Optional

from ..core.exceptions import NotFoundError
from ..database.unit_of_work import UnitOfWorkFactory
from .model import Contract

logger = logging.getLogger(__name__)


class ContractService:
    """Read access to contracts. Contracts are written only by StaffService."""

    def __init__(self, uow: UnitOfWorkFactory):
        self._uow = uow

    def get_contract(self, contract_id: int) -> Contract:
        with self._uow() as uow:
            contract = uow.contracts.get_by_id(contract_id)
        if not contract:
            raise NotFoundError(f"Contract not found with ID: {contract_id}")
        return contract

    def get_staff_contract(self, staff_id: int) -> Optional[Contract]:
        with self._uow() as uow:
            if not uow.staff.get_by_id(staff_id):
                raise NotFoundError(f"Staff not found with ID: {staff_id}")
            return uow.contracts.get_for_staff(staff_id)

    def list_contracts(self) -> List[Contract]:
        logger.debug("Fetching all contracts")
        with self._uow() as uow:
            return list(uow.contracts.list_all())

    def list_by_days_per_week(self, days_per_week: int) -> List[Contract]:
        with self._uow() as uow:
            return list(uow.contracts.list_by_days_per_week(int(days_per_week)))

    def list_by_department(self, department_id: int) -> List[Contract]:
        with self._uow() as uow:
            if not uow.departments.get_by_id(department_id):
                raise NotFoundError(f"Department not found with ID: {department_id}")
            return list(uow.contracts.list_by_department(department_id))
