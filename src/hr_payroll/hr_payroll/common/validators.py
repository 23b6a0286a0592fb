from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..core.exceptions import ValidationError
from .money import to_decimal


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_max_length(value: Optional[str], field_name: str, max_len: int) -> Optional[str]:
    if value is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must be max {max_len} characters")
    return value


def require_positive_amount(value, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount <= 0:
        raise ValidationError(f"{field_name} must be a positive number")
    return amount


def require_positive_int(value, field_name: str) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}")
    if n < 1:
        raise ValidationError(f"Invalid {field_name}")
    return n
