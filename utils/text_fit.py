import re

ELLIPSIS = "..."

_WHITESPACE = re.compile(r"\s+")


def fit_text(value, max_width, measure):
    """
    Truncate ``value`` so that it renders within ``max_width``.

    Whitespace runs collapse to a single space first. Text that already fits
    is returned unchanged; otherwise trailing characters are dropped one at a
    time until the candidate plus "..." fits. Truncation is per character,
    never per word, so long values fill the field right up to its edge.

    Args:
        value: Text to fit. None and blank text become "-".
        max_width: Available width, in the units ``measure`` returns.
        measure: Callable returning the rendered width of a string in the
            backend's active font.

    Returns:
        str: The fitted text. When not even one character fits next to the
        ellipsis, the result is just "...".
    """
    clean = _WHITESPACE.sub(" ", "" if value is None else str(value)).strip()
    if not clean:
        return "-"
    if measure(clean) <= max_width:
        return clean

    out = clean
    while len(out) > 1 and measure(out + ELLIPSIS) > max_width:
        out = out[:-1]

    if measure(out + ELLIPSIS) > max_width:
        return ELLIPSIS
    return out + ELLIPSIS
