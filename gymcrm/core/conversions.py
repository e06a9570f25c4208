"""Conversion helpers for common type coercion."""

from typing import Optional


def coerce_int(value: object) -> Optional[int]:
    """Return an int for valid string/int inputs, otherwise None."""
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except (TypeError, ValueError):
            return None
    return None


def coerce_positive_int(value: object, default: int) -> int:
    """Parse pagination style parameters, falling back to ``default``."""
    parsed = coerce_int(value)
    if parsed is None or parsed < 1:
        return default
    return parsed


def money(value: object) -> float:
    """Round a numeric amount to two decimals; None counts as zero."""
    if value is None:
        return 0.0
    return round(float(value), 2)
