"""Human-readable formatting helpers."""

_UNITS = ["B", "kB", "MB", "GB", "TB", "PB", "EB"]


def format_bytes(size: int) -> str:
    """Format a byte count using decimal (SI) units.

    Values below 10 of a unit keep one decimal place, larger ones are
    rounded to a whole number:

    >>> format_bytes(150)
    '150 B'
    >>> format_bytes(1500)
    '1.5 kB'
    >>> format_bytes(12_000_000)
    '12 MB'
    """
    if size < 0:
        raise ValueError(f"size must not be negative: {size}")

    value = float(size)
    unit = _UNITS[0]
    for unit in _UNITS:
        if value < 1000 or unit == _UNITS[-1]:
            break
        value /= 1000

    if unit == "B":
        return f"{size} B"
    if value < 10:
        return f"{value:.1f} {unit}"
    return f"{value:.0f} {unit}"
