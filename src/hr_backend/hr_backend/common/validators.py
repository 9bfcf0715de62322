from __future__ import annotations

import re
from datetime import date
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str, *, max_len: Optional[int] = None) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required", [{"field": field_name, "message": "required"}])
    value = str(value).strip()
    if max_len is not None and len(value) > max_len:
        raise ValidationError(
            f"{field_name} must be at most {max_len} characters",
            [{"field": field_name, "message": f"max {max_len} characters"}],
        )
    return value


def optional_text(value: Optional[str], field_name: str, *, max_len: Optional[int] = None) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not value:
        return None
    if max_len is not None and len(value) > max_len:
        raise ValidationError(
            f"{field_name} must be at most {max_len} characters",
            [{"field": field_name, "message": f"max {max_len} characters"}],
        )
    return value


def require_email(value: Optional[str], field_name: str = "email") -> str:
    value = require_non_empty(value, field_name, max_len=255).lower()
    if not _EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} is not a valid e-mail address", [{"field": field_name, "message": "invalid e-mail"}])
    return value


def require_int(value: Any, field_name: str, *, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer", [{"field": field_name, "message": "integer expected"}])
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer", [{"field": field_name, "message": "integer expected"}])
    if min_value is not None and number < min_value:
        raise ValidationError(f"{field_name} must be >= {min_value}", [{"field": field_name, "message": f"min {min_value}"}])
    if max_value is not None and number > max_value:
        raise ValidationError(f"{field_name} must be <= {max_value}", [{"field": field_name, "message": f"max {max_value}"}])
    return number


def require_float(value: Any, field_name: str, *, min_value: float, max_value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number", [{"field": field_name, "message": "number expected"}])
    if number < min_value or number > max_value:
        raise ValidationError(
            f"{field_name} must be between {min_value:g} and {max_value:g}",
            [{"field": field_name, "message": f"range {min_value:g}..{max_value:g}"}],
        )
    return number


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value or "").strip()[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)", [{"field": field_name, "message": "ISO date expected"}])


def require_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}", [{"field": field_name, "message": "invalid choice"}])


def require_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, str)) and str(value).strip().lower() in {"1", "true", "0", "false"}:
        return str(value).strip().lower() in {"1", "true"}
    raise ValidationError(f"{field_name} must be a boolean", [{"field": field_name, "message": "boolean expected"}])
