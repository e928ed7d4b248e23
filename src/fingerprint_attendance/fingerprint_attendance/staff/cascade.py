from __future__ import annotations

from typing import Dict

from ..core.exceptions import NotFoundError
from ..database.unit_of_work import UnitOfWork


def delete_staff_cascade(uow: UnitOfWork, staff_id: int) -> Dict[str, int]:
    """Delete a staff member and every row it owns inside the caller's transaction.

    Children go first so no attendance, contract, fingerprint or notification
    row ever references a missing staff member.
    """

    removed = {
        "attendances": uow.attendance.delete_for_staff(staff_id),
        "contracts": uow.contracts.delete_for_staff(staff_id),
        "fingerprints": uow.fingerprints.delete_for_user(staff_id),
        "notifications": uow.notifications.delete_for_user(staff_id),
    }
    if not uow.staff.delete(staff_id):
        raise NotFoundError(f"Staff not found with ID: {staff_id}")
    return removed
