from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Mapping

from werkzeug.security import check_password_hash

from ..core.constants import PRIVILEGED_PROFILE_FIELDS, SELF_PROFILE_FIELDS
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..core.identity import Identity
from ..core.policy import authorize, is_allowed
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login) and resolve the signed-in user."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, identifier: str, password: str) -> Identity:
        identifier = (identifier or "").strip()
        if not identifier or not password:
            raise ValidationError("Username/email and password are required")

        user = self._users.get_by_login(identifier)
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return Identity(user_id=user.user_id, role=user.role)

    def me(self, identity: Identity) -> dict:
        employee = self._users.get_employee(identity.user_id)
        if not employee:
            raise AuthenticationError("Session user no longer exists")
        return employee


class EmployeeService:
    """Use case: employee directory (list, view, edit profiles)."""

    def __init__(self, users: UserRepository, *, transaction: Callable[[], ContextManager] = nullcontext):
        self._users = users
        self._transaction = transaction

    def list(self, caller: Identity) -> list[dict]:
        authorize(caller.role, "employee", "list")
        return list(self._users.list_employees())

    def get(self, caller: Identity, user_id: int) -> dict:
        authorize(caller.role, "employee", "read", owner=caller.owns(user_id))
        employee = self._users.get_employee(int(user_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def update(self, caller: Identity, user_id: int, fields: Mapping[str, Any]) -> str:
        """Write the profile fields the caller is allowed to write.

        Privileged fields sent by a non-privileged caller are dropped, not
        rejected. The username follows the explicit value, else the submitted
        first and last name; a failure to store it is only logged.
        """

        user_id = int(user_id)
        authorize(caller.role, "employee", "update", owner=caller.owns(user_id))

        if not self._users.get_by_id(user_id):
            raise NotFoundError("Employee not found")

        writable = SELF_PROFILE_FIELDS
        if is_allowed(caller.role, "employee", "update_privileged"):
            writable = SELF_PROFILE_FIELDS + PRIVILEGED_PROFILE_FIELDS

        changes = {k: fields[k] for k in writable if k in fields}
        if "salary" in changes:
            changes["salary"] = self._parse_salary(changes["salary"])
        username = str(fields.get("username") or "").strip()
        if not username:
            username = f"{fields.get('first_name') or ''} {fields.get('last_name') or ''}".strip()

        with self._transaction():
            self._users.update_profile(user_id, changes)
            if username and not self._users.update_username(user_id, username):
                logger.warning("Could not update username for user %s to %r", user_id, username)

        return "Profile updated successfully"

    @staticmethod
    def _parse_salary(value: Any):
        if value is None or value == "":
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ValidationError("salary must be a number")
