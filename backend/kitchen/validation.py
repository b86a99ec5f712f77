# Overview: Input coercion helpers shared by the service layer.

from __future__ import annotations

import math
from typing import Any


class ValidationError(ValueError):
    """400-level input problem."""


def parse_number(value: Any, field: str) -> float:
    """
    Coerce value to a finite float.

    Rejects booleans, blanks, non-numeric strings, NaN and infinities.
    """
    if value is None or value == "":
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")
    return number


def parse_positive_number(value: Any, field: str) -> float:
    number = parse_number(value, field)
    if number <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return number
