# edudesk/console/stats.py
import math
from typing import Any, Iterable, Optional

# Shown wherever a derived value has nothing to derive from
NO_DATA = "N/A"


def to_number(value: Any) -> Optional[float]:
    """Coerce backend numerics (often strings like "3.75") to float, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def average(values: Iterable[Any]) -> Optional[float]:
    numbers = [n for n in (to_number(v) for v in values) if n is not None]
    if not numbers:
        return None
    return sum(numbers) / len(numbers)


def percentage(part: Any, whole: Any) -> Optional[float]:
    part_n, whole_n = to_number(part), to_number(whole)
    if part_n is None or not whole_n:
        return None
    return part_n / whole_n * 100


def count_unique(values: Iterable[Any]) -> int:
    return len({v for v in values if v not in (None, "")})


def fmt(value: Any, digits: int = 2, suffix: str = "") -> str:
    """Format a derived value for display; anything non-numeric becomes NO_DATA."""
    number = to_number(value)
    if number is None:
        return NO_DATA
    return f"{number:.{digits}f}{suffix}"
