"""Authorization policy.

Every (resource, action) pair maps to one rule; handlers and services call
:func:`authorize` instead of checking roles inline.
"""

from __future__ import annotations

from enum import Enum

from .enums import Role
from .exceptions import AuthorizationError


class Rule(str, Enum):
    ANY = "any"
    OWN = "own"
    PRIVILEGED = "privileged"


POLICY: dict[tuple[str, str], Rule] = {
    ("employee", "list"): Rule.PRIVILEGED,
    ("employee", "read"): Rule.OWN,
    ("employee", "update"): Rule.OWN,
    ("employee", "update_privileged"): Rule.PRIVILEGED,
    ("leave", "submit"): Rule.ANY,
    ("leave", "list_own"): Rule.ANY,
    ("leave", "list_all"): Rule.PRIVILEGED,
    ("leave", "decide"): Rule.PRIVILEGED,
    ("attendance", "list_own"): Rule.ANY,
    ("attendance", "list_all"): Rule.PRIVILEGED,
    ("payroll", "list_own"): Rule.ANY,
    ("payroll", "list_all"): Rule.PRIVILEGED,
    ("payroll", "create"): Rule.PRIVILEGED,
    ("payroll", "set_status"): Rule.PRIVILEGED,
    ("salary_slip", "read"): Rule.OWN,
}


def is_allowed(role: Role, resource: str, action: str, *, owner: bool = False) -> bool:
    """Return whether ``role`` may perform ``action`` on ``resource``.

    ``owner`` tells whether the caller owns the target row; it only matters
    for ``OWN`` rules. Unknown pairs are denied.
    """

    rule = POLICY.get((resource, action))
    if rule is None:
        return False
    if rule is Rule.ANY:
        return True
    if Role(role).is_privileged:
        return True
    return rule is Rule.OWN and owner


def authorize(role: Role, resource: str, action: str, *, owner: bool = False) -> None:
    if not is_allowed(role, resource, action, owner=owner):
        raise AuthorizationError("Access denied")
