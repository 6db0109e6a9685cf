from __future__ import annotations

import math
from datetime import date
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_enum(value: Any, enum_cls: Type[E], message: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(message)


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    text = require_non_empty(value, field_name)
    try:
        return parse_iso_date(text)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def optional_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_date(value, field_name)


def require_int(value: Any, field_name: str, *, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if min_value is not None and number < min_value:
        raise ValidationError(f"{field_name} must be >= {min_value}")
    if max_value is not None and number > max_value:
        raise ValidationError(f"{field_name} must be <= {max_value}")
    return number


def optional_int(value: Any, field_name: str, **bounds: int) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_int(value, field_name, **bounds)


def require_amount(value: Any, field_name: str, *, default: Optional[float] = None) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return float(default)
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(amount) or amount < 0:
        raise ValidationError(f"{field_name} must be a non-negative number")
    return amount
