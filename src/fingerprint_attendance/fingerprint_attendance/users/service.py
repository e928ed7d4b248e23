from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import (
    LONG_TOKEN_EXPIRY_SECONDS,
    MIN_PASSWORD_LENGTH,
    SHORT_TOKEN_EXPIRY_SECONDS,
    TOKEN_ALGORITHM,
)
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DuplicateError, NotFoundError, ValidationError
from ..database.unit_of_work import UnitOfWork, UnitOfWorkFactory
from .model import AdminUpdate, AdminView, IssuedToken, Person, Principal

logger = logging.getLogger(__name__)


def _to_admin_view(person: Person) -> AdminView:
    return AdminView(
        user_id=person.user_id,
        name=person.name,
        surname=person.surname,
        full_name=person.full_name,
        email=person.email,
        role=person.role,
        active=person.active,
    )


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password or "")
    except ValueError:
        # e.g. placeholder hashes or corrupted values
        return False


class AuthService:
    """Use case: authenticate an admin and issue / verify bearer tokens."""

    def __init__(
        self,
        uow: UnitOfWorkFactory,
        *,
        secret_key: str,
        short_expiry_seconds: int = SHORT_TOKEN_EXPIRY_SECONDS,
        long_expiry_seconds: int = LONG_TOKEN_EXPIRY_SECONDS,
    ):
        self._uow = uow
        self._secret_key = secret_key
        self._short_expiry = int(short_expiry_seconds)
        self._long_expiry = int(long_expiry_seconds)

    def authenticate(self, email: str, password: str, *, remember_me: bool = False) -> IssuedToken:
        logger.info("Authentication attempt for admin with email: %s", email)
        with self._uow() as uow:
            admin = uow.users.get_by_email((email or "").strip())

        if not admin or not admin.is_admin:
            logger.warning("Authentication failed: Admin not found with email: %s", email)
            raise AuthenticationError("Invalid email or password")
        if not admin.active:
            logger.warning("Authentication failed: Admin account is inactive for email: %s", email)
            raise AuthenticationError("Account is inactive. Please contact administrator.")

        if not _password_matches(admin.details.password_hash, password):
            logger.warning("Authentication failed: Invalid password for email: %s", email)
            raise AuthenticationError("Invalid email or password")

        expires_in = self._long_expiry if remember_me else self._short_expiry
        issued_at = datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(seconds=expires_in)
        token = jwt.encode(
            {
                "sub": str(admin.user_id),
                "email": admin.email,
                "role": admin.role.value,
                "iat": int(issued_at.timestamp()),
                "exp": int(expires_at.timestamp()),
            },
            self._secret_key,
            algorithm=TOKEN_ALGORITHM,
        )
        logger.info("Authentication successful for admin: %s (ID: %s)", admin.email, admin.user_id)
        return IssuedToken(
            access_token=token,
            token_type="Bearer",
            expires_in=expires_in,
            issued_at=issued_at,
            expires_at=expires_at,
            user_id=admin.user_id,
            email=admin.email,
            full_name=admin.full_name,
            role=admin.role,
        )

    def verify_token(self, token: str) -> Principal:
        try:
            payload = jwt.decode(token or "", self._secret_key, algorithms=[TOKEN_ALGORITHM])
            principal = Principal(
                user_id=int(payload["sub"]),
                email=str(payload["email"]),
                role=Role(payload["role"]),
            )
        except (JWTError, KeyError, ValueError):
            raise AuthenticationError("Could not validate credentials")

        with self._uow() as uow:
            user = uow.users.get_by_id(principal.user_id)
        if not user or not user.active:
            raise AuthenticationError("Could not validate credentials")
        return principal


class AdminService:
    """Use case: manage admin accounts. Admins never cascade into staff data."""

    def __init__(self, uow: UnitOfWorkFactory):
        self._uow = uow

    def register_admin(self, *, name: str, surname: str, email: str, password: str, active: bool = True) -> AdminView:
        name = require_non_empty(name, "Name")
        surname = require_non_empty(surname, "Surname")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        logger.info("Attempting to register new admin with email: %s", email)
        with self._uow() as uow:
            if uow.users.email_exists(email):
                logger.warning("Registration failed: Email already exists: %s", email)
                raise DuplicateError(f"Email already registered: {email}")
            user_id = uow.users.create_admin(
                name=name,
                surname=surname,
                email=email,
                password_hash=generate_password_hash(password),
                active=bool(active),
            )
            logger.info("Admin registered: %s (ID: %s)", email, user_id)
            return _to_admin_view(self._require(uow, user_id))

    def get_admin(self, admin_id: int) -> AdminView:
        with self._uow() as uow:
            return _to_admin_view(self._require(uow, admin_id))

    def find_admin_by_email(self, email: str) -> Optional[AdminView]:
        with self._uow() as uow:
            person = uow.users.get_by_email(email)
        if not person or not person.is_admin:
            return None
        return _to_admin_view(person)

    def list_admins(self) -> List[AdminView]:
        with self._uow() as uow:
            return [_to_admin_view(p) for p in uow.users.list_admins()]

    def email_exists(self, email: str) -> bool:
        with self._uow() as uow:
            return uow.users.email_exists(email)

    def update_admin(self, admin_id: int, update: AdminUpdate) -> AdminView:
        logger.info("Updating admin with ID: %s", admin_id)
        with self._uow() as uow:
            admin = self._require(uow, admin_id)
            name = require_non_empty(update.name, "Name") if update.name is not None else admin.name
            surname = require_non_empty(update.surname, "Surname") if update.surname is not None else admin.surname
            email = admin.email
            if update.email is not None:
                email = require_email(update.email)
                if email != admin.email and uow.users.email_exists(email, exclude_user_id=admin.user_id):
                    raise DuplicateError(f"Email already in use: {email}")
            active = admin.active if update.active is None else bool(update.active)

            uow.users.update_identity(user_id=admin.user_id, name=name, surname=surname, email=email, active=active)
            logger.info("Admin updated: %s (ID: %s)", email, admin_id)
            return _to_admin_view(self._require(uow, admin_id))

    def change_password(self, admin_id: int, old_password: str, new_password: str) -> None:
        logger.info("Password change request for admin ID: %s", admin_id)
        with self._uow() as uow:
            admin = self._require(uow, admin_id)
            if not _password_matches(admin.details.password_hash, old_password):
                logger.warning("Password change failed: Incorrect old password for admin ID: %s", admin_id)
                raise ValidationError("Current password is incorrect")
            if new_password is None or len(new_password) < MIN_PASSWORD_LENGTH:
                raise ValidationError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters")
            uow.users.set_password_hash(admin.user_id, generate_password_hash(new_password))
        logger.info("Password changed for admin ID: %s", admin_id)

    def deactivate_admin(self, admin_id: int) -> AdminView:
        return self._set_active(admin_id, active=False)

    def reactivate_admin(self, admin_id: int) -> AdminView:
        return self._set_active(admin_id, active=True)

    def _set_active(self, admin_id: int, *, active: bool) -> AdminView:
        with self._uow() as uow:
            admin = self._require(uow, admin_id)
            uow.users.set_active(admin.user_id, active=active)
            logger.info("Admin %s: %s (ID: %s)", "reactivated" if active else "deactivated", admin.email, admin_id)
            return _to_admin_view(self._require(uow, admin_id))

    def delete_admin(self, admin_id: int) -> None:
        logger.info("Deleting admin with ID: %s", admin_id)
        with self._uow() as uow:
            admin = self._require(uow, admin_id)
            uow.notifications.delete_for_user(admin.user_id)
            uow.fingerprints.delete_for_user(admin.user_id)
            uow.users.delete_admin(admin.user_id)
        logger.info("Admin deleted with ID: %s", admin_id)

    @staticmethod
    def _require(uow: UnitOfWork, admin_id: int) -> Person:
        person = uow.users.get_by_id(admin_id)
        if not person or not person.is_admin:
            logger.warning("Admin not found with ID: %s", admin_id)
            raise NotFoundError(f"Admin not found with ID: {admin_id}")
        return person
