from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for users and their profiles.

    Note (DIP): the service layer depends on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_login(self, identifier: str) -> Optional[User]:
        """Look a user up by username or email."""

        raise NotImplementedError

    def create_user(
        self,
        *,
        employee_id: str,
        username: Optional[str],
        email: str,
        password_hash: str,
        role: Role,
        profile: Optional[Mapping[str, Any]] = None,
    ) -> int:
        raise NotImplementedError

    def get_employee(self, user_id: int) -> Optional[dict]:
        """Return the user joined with its profile."""

        raise NotImplementedError

    def list_employees(self) -> Sequence[dict]:
        raise NotImplementedError

    def update_profile(self, user_id: int, fields: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def update_username(self, user_id: int, username: str) -> bool:
        """Return False when the username cannot be stored (e.g. already taken)."""

        raise NotImplementedError
