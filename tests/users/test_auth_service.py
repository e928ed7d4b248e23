from __future__ import annotations

import pytest
from jose import jwt

from fingerprint_attendance.core.enums import Role
from fingerprint_attendance.core.exceptions import (
    AuthenticationError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from fingerprint_attendance.users.model import AdminUpdate
from fingerprint_attendance.users.service import AuthService


def _register(container, email="root@example.com", password="s3cret!"):
    return container.admin_service.register_admin(name="Root", surname="Admin", email=email, password=password)


def test_login_issues_short_and_long_tokens(container):
    admin = _register(container)
    auth = container.auth_service

    short = auth.authenticate("root@example.com", "s3cret!")
    long = auth.authenticate("root@example.com", "s3cret!", remember_me=True)

    assert short.expires_in == 900
    assert long.expires_in == 604800
    assert short.token_type == "Bearer"
    claims = jwt.get_unverified_claims(short.access_token)
    assert claims["sub"] == str(admin.user_id)
    assert claims["role"] == "ADMIN"

    principal = auth.verify_token(short.access_token)
    assert principal.user_id == admin.user_id
    assert principal.role == Role.ADMIN


def test_password_is_hashed(container, store):
    admin = _register(container)
    stored = store.people[admin.user_id].details.password_hash
    assert stored != "s3cret!"
    assert not hasattr(admin, "password_hash")


@pytest.mark.parametrize(
    "email,password",
    [("root@example.com", "wrong"), ("nobody@example.com", "s3cret!"), ("", "")],
)
def test_bad_credentials(container, email, password):
    _register(container)
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(email, password)


def test_inactive_admin_cannot_log_in_and_token_stops_working(container):
    admin = _register(container)
    token = container.auth_service.authenticate("root@example.com", "s3cret!").access_token

    container.admin_service.deactivate_admin(admin.user_id)

    with pytest.raises(AuthenticationError, match="inactive"):
        container.auth_service.authenticate("root@example.com", "s3cret!")
    with pytest.raises(AuthenticationError):
        container.auth_service.verify_token(token)


def test_staff_cannot_log_in(container, hire):
    hire("ada@example.com")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("ada@example.com", "anything")


def test_tampered_and_expired_tokens_are_rejected(container, uow_factory):
    _register(container)
    token = container.auth_service.authenticate("root@example.com", "s3cret!").access_token

    other = AuthService(uow_factory, secret_key="other-secret")
    with pytest.raises(AuthenticationError):
        other.verify_token(token)
    with pytest.raises(AuthenticationError):
        container.auth_service.verify_token("garbage")

    expired = AuthService(uow_factory, secret_key="test-secret", short_expiry_seconds=-60)
    stale = expired.authenticate("root@example.com", "s3cret!").access_token
    with pytest.raises(AuthenticationError):
        container.auth_service.verify_token(stale)


def test_register_validation_and_duplicates(container, hire):
    hire("ada@example.com")
    with pytest.raises(DuplicateError):
        _register(container, email="ada@example.com")
    with pytest.raises(ValidationError):
        _register(container, password="123")
    with pytest.raises(ValidationError):
        _register(container, email="bad")


def test_admin_management(container):
    admin = _register(container)
    other = _register(container, email="second@example.com")
    svc = container.admin_service

    updated = svc.update_admin(admin.user_id, AdminUpdate(name="Chief"))
    assert updated.full_name == "Chief Admin"
    with pytest.raises(DuplicateError):
        svc.update_admin(admin.user_id, AdminUpdate(email="second@example.com"))

    with pytest.raises(ValidationError):
        svc.change_password(admin.user_id, "wrong", "newpass1")
    svc.change_password(admin.user_id, "s3cret!", "newpass1")
    container.auth_service.authenticate("root@example.com", "newpass1")

    assert svc.find_admin_by_email("second@example.com").user_id == other.user_id
    assert len(svc.list_admins()) == 2

    svc.delete_admin(other.user_id)
    with pytest.raises(NotFoundError):
        svc.get_admin(other.user_id)


def test_notifications(container, hire):
    staff = hire("ada@example.com")
    notes = container.notification_service

    sent = notes.send(staff.user_id, "Contract renewed")
    assert notes.list_for_user(staff.user_id) == [sent]

    notes.delete_notification(sent.notif_id)
    assert notes.list_for_user(staff.user_id) == []
    with pytest.raises(NotFoundError):
        notes.send(999, "hello")


def test_change_password_with_unreadable_hash(container, store):
    from dataclasses import replace

    from fingerprint_attendance.users.model import AdminDetails

    admin = _register(container)
    store.people[admin.user_id] = replace(
        store.people[admin.user_id], details=AdminDetails(password_hash="placeholder$salt$value")
    )

    with pytest.raises(ValidationError, match="Current password is incorrect"):
        container.admin_service.change_password(admin.user_id, "s3cret!", "newpass1")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("root@example.com", "s3cret!")
