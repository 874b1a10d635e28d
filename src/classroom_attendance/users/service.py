from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..access.policy import authorize
from ..common.validators import (
    coerce_positive_int,
    optional_text,
    require_length_between,
    require_min_length,
    require_non_empty,
)
from ..core.constants import PASSWORD_MIN_LENGTH, USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH
from ..core.enums import Action, Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..classes.repository import ClassRepository
from .model import Principal, User
from .repository import UserRepository
from .session_store import IssuedToken, SessionStore

logger = logging.getLogger(__name__)

# Werkzeug hash prefixes; anything else is a legacy plain-text password.
_HASH_PREFIXES = ("pbkdf2:", "scrypt:")


def _is_hashed(value: str) -> bool:
    return bool(value) and value.startswith(_HASH_PREFIXES)


class AuthService:
    """Use case: log in / resolve / log out principals."""

    def __init__(self, users: UserRepository, sessions: SessionStore):
        self._users = users
        self._sessions = sessions

    def authenticate(self, username: str, password: str, role: str) -> Principal:
        if not username or not password or not role:
            raise ValidationError("Username, password, and role are required")

        user = self._users.get_by_username(username)
        if not user or not self._password_matches(user, password):
            logger.info("Failed login for username=%s", username)
            raise AuthenticationError("Invalid username or password")

        if user.role.value != str(role):
            raise ValidationError("Incorrect role selected. Please choose the correct role.")

        return Principal.from_user(user)

    def _password_matches(self, user: User, password: str) -> bool:
        if _is_hashed(user.password_hash):
            try:
                return check_password_hash(user.password_hash, password)
            except ValueError:
                # e.g. corrupted or unsupported hash method
                return False

        # Legacy plain-text row: accept once, then store a proper hash.
        if user.password_hash != password:
            return False
        self._users.update_password_hash(user.user_id, generate_password_hash(password))
        logger.info("Upgraded legacy password storage for user_id=%s", user.user_id)
        return True

    def login(self, username: str, password: str, role: str) -> IssuedToken:
        principal = self.authenticate(username, password, role)
        issued = self._sessions.create(principal)
        logger.info("Login user_id=%s role=%s", principal.user_id, principal.role.value)
        return issued

    def resolve(self, token: Optional[str]) -> Optional[Principal]:
        if not token:
            return None
        return self._sessions.resolve(token)

    def logout(self, token: Optional[str]) -> None:
        if token:
            self._sessions.revoke(token)


class TeacherService:
    """Use case: admins manage teacher accounts."""

    def __init__(self, users: UserRepository, classes: ClassRepository):
        self._users = users
        self._classes = classes

    def list_teachers(self, principal: Optional[Principal], *, class_id=None):
        authorize(principal, Action.LIST_TEACHERS)
        cid = coerce_positive_int(class_id) if class_id not in (None, "") else None
        return self._users.list_teachers(class_id=cid)

    def create_teacher(
        self,
        principal: Optional[Principal],
        *,
        username: str,
        password: str,
        display_name: Optional[str] = None,
        class_id=None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        subject: Optional[str] = None,
        experience: Optional[str] = None,
    ) -> dict:
        authorize(principal, Action.CREATE_TEACHER)

        if not username or not password:
            raise ValidationError("username and password are required for a teacher account")
        username = require_non_empty(username, "Username")
        require_length_between(username, "Username", USERNAME_MIN_LENGTH, USERNAME_MAX_LENGTH)
        require_min_length(password, "Password", PASSWORD_MIN_LENGTH)

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        cid = None
        if class_id not in (None, ""):
            cid = coerce_positive_int(class_id)
            if cid is None:
                raise ValidationError("Invalid class_id")
            if not self._classes.get_by_id(cid):
                raise NotFoundError("Invalid class_id: class does not exist")

        fields = {
            "display_name": optional_text(display_name),
            "class_id": cid,
            "email": optional_text(email),
            "phone": optional_text(phone),
            "subject": optional_text(subject),
            "experience": optional_text(experience),
        }
        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            role=Role.TEACHER,
            **fields,
        )
        logger.info("Created teacher user_id=%s username=%s", user_id, username)
        return {"id": user_id, "username": username, **fields}
