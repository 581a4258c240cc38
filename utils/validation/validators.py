from datetime import date, datetime
from typing import Any, Optional, Union

from utils.exceptions import ValidationException


def is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_name(value: Any, field_name: str = "Product name", max_length: int = 100) -> str:
    """Validate a display name and normalise its internal whitespace."""
    if not isinstance(value, str):
        raise ValidationException(f"{field_name} must be a string")

    value = " ".join(value.split())

    if not value:
        raise ValidationException(f"{field_name} is required")

    if len(value) > max_length:
        raise ValidationException(f"{field_name} cannot exceed {max_length} characters")

    return value


def validate_integer(value: Any, min_value: Optional[int] = None, max_value: Optional[int] = None,
                     field_name: str = "Value") -> int:
    """
    Validate an integer amount (prices, stock levels, quantities sold).

    Whole-number floats such as ``3.0`` are accepted and converted; booleans and
    fractional values are rejected.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive)
        field_name: Name used in error messages

    Returns:
        int: Validated integer value

    Raises:
        ValidationException: If validation fails
    """
    if isinstance(value, bool) or not is_numeric(value):
        raise ValidationException(f"{field_name} must be an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationException(f"{field_name} must be a whole number, got {value!r}")
        value = int(value)
    if min_value is not None and value < min_value:
        raise ValidationException(f"{field_name} must be greater than or equal to {min_value}")
    if max_value is not None and value > max_value:
        raise ValidationException(f"{field_name} must be less than or equal to {max_value}")
    return value


def validate_non_negative_int(value: Any, field_name: str = "Value") -> int:
    return validate_integer(value, min_value=0, field_name=field_name)


def validate_positive_int(value: Any, field_name: str = "Value") -> int:
    return validate_integer(value, min_value=1, field_name=field_name)


def validate_rate(value: Any, field_name: str = "Rate", lower_inclusive: bool = True) -> float:
    """Validate a fraction in [0, 1), or (0, 1) when ``lower_inclusive`` is False."""
    if not is_numeric(value):
        raise ValidationException(f"{field_name} must be a number, got {value!r}")
    value = float(value)
    lower_ok = value >= 0 if lower_inclusive else value > 0
    if not lower_ok or value >= 1:
        bounds = "[0, 1)" if lower_inclusive else "(0, 1)"
        raise ValidationException(f"{field_name} must be within {bounds}, got {value}")
    return value


def validate_date(value: Union[date, str], format: str = "%Y-%m-%d") -> date:
    """Accept a ``date`` (or ``datetime``) or a string in ``format`` and return a ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value, format).date()
        except ValueError:
            raise ValidationException(f"Invalid date format. Expected format: {format}")
    raise ValidationException(f"Invalid date value: {value!r}")

