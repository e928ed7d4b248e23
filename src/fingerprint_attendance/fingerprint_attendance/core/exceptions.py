class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity id does not exist."""


class DuplicateError(DomainError):
    """Raised on a uniqueness violation (email, department name, fingerprint code)."""


class ConflictError(DomainError):
    """Raised when the current state forbids the transition."""


class DepartmentNotEmptyError(ConflictError):
    """Raised when a guarded delete hits a department that still owns staff."""

    def __init__(self, department_id: int, staff_count: int):
        self.department_id = department_id
        self.staff_count = staff_count
        super().__init__(
            f"Cannot delete department {department_id}: {staff_count} staff member(s) still assigned. "
            "Reassign or remove them first, or use force delete."
        )


class TransientError(DomainError):
    """Raised when the store aborted the transaction; the caller may retry."""


class AuthenticationError(DomainError):
    """Raised when login credentials or tokens are invalid."""


class AuthorizationError(DomainError):
    """Raised when a principal lacks permission for an action."""
