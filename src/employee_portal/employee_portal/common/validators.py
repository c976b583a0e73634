from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(body: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Raise one ValidationError naming every required field that is missing."""
    fields = list(fields)
    missing = [f for f in fields if is_blank(body.get(f))]
    if missing:
        raise ValidationError(f"{', '.join(fields)} are required (missing: {', '.join(missing)})")


def require_non_empty(value: Any, field_name: str) -> str:
    if is_blank(value):
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_enum(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def require_int(value: Any, field_name: str, *, min_value: int | None = None, max_value: int | None = None) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, float) and value != number:
        raise ValidationError(f"{field_name} must be an integer")
    if min_value is not None and number < min_value:
        raise ValidationError(f"{field_name} must be >= {min_value}")
    if max_value is not None and number > max_value:
        raise ValidationError(f"{field_name} must be <= {max_value}")
    return number


def reject_unknown_fields(body: Mapping[str, Any], allowed: Iterable[str]) -> None:
    """Partial updates only accept keys from a fixed allow-list."""
    unknown = sorted(set(body) - set(allowed))
    if unknown:
        raise ValidationError(f"Unrecognized fields: {', '.join(unknown)}")
