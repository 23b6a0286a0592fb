from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ..core.exceptions import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value, field_name: str = "Amount") -> Decimal:
    """Coerce user/DB input into Decimal without passing through binary float."""
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number")
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return result


def round_money(value: Decimal) -> Decimal:
    """Round half away from zero to 2 decimal places (currency rounding)."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
