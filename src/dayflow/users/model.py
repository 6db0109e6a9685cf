from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object; no database access here.
    """

    user_id: int
    employee_id: str
    username: Optional[str]
    email: str
    password_hash: str
    role: Role
