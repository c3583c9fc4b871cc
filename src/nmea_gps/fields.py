import re

# Leading integer, the way most receivers' firmware reads "08" or "12.9".
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

# Plain decimal numeral; no inf/nan spellings or "_" digit separators.
_FLOAT = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*")


def parse_float_field(value: str | None) -> float | None:
    """Parse a field as float, returning None if empty or not a decimal numeral."""
    if not value or not _FLOAT.fullmatch(value):
        return None
    return float(value)


def parse_int_field(value: str | None) -> int | None:
    """Parse the leading integer of a field ("12.9" -> 12), or None."""
    if not value:
        return None
    m = _INT_PREFIX.match(value)
    if not m:
        return None
    return int(m.group(1))


def safe_float(value: str | None, default: float = 0.0) -> float:
    result = parse_float_field(value)
    return default if result is None else result


def safe_int(value: str | None, default: int = 0) -> int:
    result = parse_int_field(value)
    return default if result is None else result


def strip_checksum(value: str | None) -> str:
    """Drop a trailing ``*HH`` checksum suffix from a field."""
    if not value:
        return ""
    return value.split("*", 1)[0]


def convert_coordinate(value: str | None, hemisphere: str | None) -> float:
    """Convert ``ddmm.mmmm`` / ``dddmm.mmmm`` plus N/S/E/W to decimal degrees.

    The degree digits are everything before the two whole-minute digits that
    precede the decimal point, so ``4807.038`` has two and ``01131.000`` has
    three. Southern and western hemispheres are negative. Malformed input
    yields 0.
    """
    if not value or len(value) < 3:
        return 0.0

    dot = value.find(".")
    if dot < 0:
        return 0.0

    deg_len = max(dot - 2, 0)
    degrees = safe_float(value[:deg_len])
    minutes = safe_float(value[deg_len:])

    decimal = degrees + minutes / 60
    if hemisphere in ("S", "W"):
        decimal = -decimal
    return decimal
