"""
Display formatters for the printed work order forms.

Every function here is total: any missing or malformed value maps to a
fixed fallback ("-" for text and dates, "$0.00" for money) so the form
renderers never have to handle an exception from a field value.
"""

import re
from datetime import datetime, date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

DASH = "-"
ZERO_MONEY = "$0.00"

_CENTS = Decimal("0.01")

# Fractional seconds after HH:MM:SS; the API trims trailing zeros and may send nanoseconds
_FRACTION = re.compile(r"(?<=:\d{2})\.(\d+)")


def text_or_dash(value):
    """Trimmed text, or "-" when the value is missing or blank."""
    if value is None:
        return DASH
    text = value if isinstance(value, str) else str(value)
    text = text.strip()
    return text or DASH


def full_name(first, last):
    """Join first and last name with a single space, "-" if both are blank."""
    parts = [text.strip() for text in (first or "", last or "") if text and text.strip()]
    return " ".join(parts) or DASH


def address(*parts):
    """Join the non-blank address components with ", "."""
    cleaned = [str(p).strip() for p in parts if p is not None and str(p).strip()]
    return ", ".join(cleaned) if cleaned else DASH


def join_or_dash(values):
    """Comma-join a list of names (brands, payment methods, technicians)."""
    if not values:
        return DASH
    return ", ".join(str(v) for v in values)


def _parse_timestamp(value):
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    text = str(value).strip()
    if not text:
        return None

    # ISO-8601 from the API, with "Z" meaning UTC
    iso_text = text[:-1] + "+00:00" if text[-1] in "zZ" else text
    iso_text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), iso_text)
    try:
        return datetime.fromisoformat(iso_text)
    except ValueError:
        pass

    # Legacy exports
    for fmt in ("%m/%d/%y %H:%M:%S", "%m/%d/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def date_only(value):
    """
    Format a timestamp as MM/DD/YYYY.

    The calendar date is taken as written in the timestamp; no timezone
    conversion is applied, so the printed date never depends on the
    machine rendering the form.

    Returns "-" for None, empty, or unparsable input.
    """
    if value is None:
        return DASH
    try:
        parsed = _parse_timestamp(value)
    except (TypeError, ValueError, OverflowError):
        return DASH
    if parsed is None:
        return DASH
    return parsed.strftime("%m/%d/%Y")


def money(value):
    """
    Format an amount as Canadian dollars: "$1,234.50", "-$5.00".

    None and anything that is not a finite number render as "$0.00".
    """
    if value is None or isinstance(value, bool):
        return ZERO_MONEY
    try:
        amount = Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return ZERO_MONEY
    if not amount.is_finite():
        return ZERO_MONEY

    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def accessories_summary(item):
    """One-line summary of the accessory counters, in the form's fixed order."""
    return " | ".join(
        [
            f"Remote Control: {item.remote_control_qty}",
            f"Cables: {item.cable_qty}",
            f"Cord: {item.cord_qty}",
            f"Albums/CDs/Cassettes: {item.album_cd_cassette_qty}",
        ]
    )


def generated_timestamp(now=None):
    """Footer timestamp in the en-CA style, e.g. "2024-03-05, 2:30:15 p.m."."""
    now = now or datetime.now()
    hour = now.hour % 12 or 12
    meridiem = "a.m." if now.hour < 12 else "p.m."
    return f"{now:%Y-%m-%d}, {hour}:{now:%M:%S} {meridiem}"
