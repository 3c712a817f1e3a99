"""Validation utilities for student records."""

import math
from typing import Any


def as_count(value: Any) -> float:
    """Coerce a solve count for ordering; missing or non-numeric becomes 0."""
    if isinstance(value, bool) or value is None:
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number):
        return 0
    return int(number) if number.is_integer() else number
