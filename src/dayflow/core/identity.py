from __future__ import annotations

from dataclasses import dataclass

from .enums import Role


@dataclass(frozen=True)
class Identity:
    """The authenticated caller of a request."""

    user_id: int
    role: Role

    @property
    def is_privileged(self) -> bool:
        return self.role.is_privileged

    def owns(self, user_id: int) -> bool:
        return int(user_id) == self.user_id
