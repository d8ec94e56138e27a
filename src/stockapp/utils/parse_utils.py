import math


def parse_number(value):
    """
    Convert a feed value such as "1,23,456.70" to float.

    Thousands separators are stripped. Raises ValueError for missing,
    boolean, non-numeric or non-finite ("nan", "inf") values.
    """
    if value is None:
        raise ValueError("Missing numeric value")
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        cleaned = str(value).replace(",", "").strip()
        if not cleaned:
            raise ValueError(f"Empty numeric value: {value!r}")
        number = float(cleaned)
    if not math.isfinite(number):
        raise ValueError(f"Non-finite numeric value: {value!r}")
    return number


def parse_id_list(value):
    """Parse "1,2,3" into [1, 2, 3]. Returns None when empty or malformed."""
    if not value:
        return None
    try:
        return [int(part) for part in value.split(",")]
    except ValueError:
        return None
