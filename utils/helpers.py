"""
Conversion helpers for loading API payloads into work order records.

The API sends numbers as JSON numbers, but older exports carry them as
strings ("12.50", "3.0"), so every loader goes through these helpers.
"""

import logging

logger = logging.getLogger(__name__)


def safe_int_conversion(value, default=0):
    """
    Safely convert a value to integer, handling various input types.

    Args:
        value: Value to convert (string, int, float, None, etc.)
        default: Value returned when the input is empty or invalid

    Returns:
        int: Converted value, or ``default``

    Example:
        qty = safe_int_conversion(payload.get("cable_qty"))
    """
    if value is None or value == "" or isinstance(value, bool):
        return default

    try:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return default

        # Convert to float first, then int (handles decimal strings like "1.0")
        return int(float(value))

    except (ValueError, TypeError, OverflowError):
        logger.warning(f"Could not convert {value!r} to int, defaulting to {default}")
        return default


def safe_number_conversion(value, default=None):
    """
    Safely convert a value to float for money fields.

    Returns ``default`` (None unless given) for empty or invalid values.
    Unlike prices entered on forms, negative amounts are kept: refunds and
    credits are legitimate on a work order.
    """
    if value is None or value == "" or isinstance(value, bool):
        return default

    try:
        if isinstance(value, str):
            value = value.strip().replace("$", "").replace(",", "")
            if not value:
                return default

        number = float(value)
        if number != number or number in (float("inf"), float("-inf")):
            raise ValueError("not a finite number")
        return number

    except (ValueError, TypeError):
        logger.warning(f"Could not convert {value!r} to a number, defaulting to {default}")
        return default


def safe_optional_str(value):
    """Return ``value`` as a string, or None when it is missing."""
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def safe_str_tuple(values):
    """Normalize a list of names into a tuple of strings, dropping None entries."""
    if not values:
        return ()
    if isinstance(values, str):
        return (values,)
    try:
        return tuple(str(v) for v in values if v is not None)
    except TypeError:
        return ()
