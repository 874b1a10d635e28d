from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from classroom_attendance.core.enums import Role
from classroom_attendance.core.exceptions import AuthenticationError, ValidationError


def test_login_issues_token_resolving_to_principal(seeded, container):
    issued = container.auth_service.login("teacher1", "teacher123", "teacher")

    assert len(issued.token) == 64
    principal = container.auth_service.resolve(issued.token)
    assert principal.role == Role.TEACHER
    assert principal.class_id == seeded.class_id
    assert principal.to_dict()["username"] == "teacher1"


def test_wrong_password(seeded, container):
    with pytest.raises(AuthenticationError, match="Invalid username or password"):
        container.auth_service.login("teacher1", "nope", "teacher")


def test_unknown_user(seeded, container):
    with pytest.raises(AuthenticationError, match="Invalid username or password"):
        container.auth_service.login("nobody", "whatever", "admin")


def test_role_mismatch(seeded, container):
    with pytest.raises(ValidationError, match="Incorrect role selected"):
        container.auth_service.login("teacher1", "teacher123", "admin")


@pytest.mark.parametrize("username, password, role", [("", "x", "admin"), ("admin", "", "admin"), ("admin", "x", None)])
def test_missing_fields(seeded, container, username, password, role):
    with pytest.raises(ValidationError, match="Username, password, and role are required"):
        container.auth_service.login(username, password, role)


def test_legacy_plain_text_password_is_rehashed(seeded, container):
    legacy = seeded.data.add_user("oldteacher", "secret1", Role.TEACHER, hashed=False)

    principal = container.auth_service.authenticate("oldteacher", "secret1", "teacher")

    assert principal.user_id == legacy.user_id
    stored = seeded.data.users[legacy.user_id].password_hash
    assert stored != "secret1"
    assert check_password_hash(stored, "secret1")
    # The upgraded hash keeps working.
    container.auth_service.authenticate("oldteacher", "secret1", "teacher")
    assert container.users_repo.rehashed == [legacy.user_id]


def test_logout_revokes_token(seeded, container):
    issued = container.auth_service.login("admin", "admin123", "admin")
    container.auth_service.logout(issued.token)
    assert container.auth_service.resolve(issued.token) is None


def test_resolve_without_token(container):
    assert container.auth_service.resolve(None) is None
    assert container.auth_service.resolve("") is None
