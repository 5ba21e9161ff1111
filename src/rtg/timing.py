"""Shared timing arithmetic.

Every duration that lands on a timeline passes through these helpers so the
allocator and the assembler agree on rounding. Values are carried as
``Decimal`` while accumulating and converted back to ``float`` at the edges,
which keeps sums such as 2 + 5 x 5.2 + 2 exactly equal to 30.0.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

from .errors import ComputationError

Number = Union[int, float, Decimal]

TENTH = Decimal("0.1")
MIN_SLOT_SECONDS = Decimal("1")


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal through its shortest repr."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_tenth(value: Number) -> float:
    """Round to one decimal place, halves away from zero."""
    return float(to_decimal(value).quantize(TENTH, rounding=ROUND_HALF_UP))


def round_duration(value: Number) -> float:
    """Round a slot duration to one decimal and floor it at one second."""
    rounded = to_decimal(value).quantize(TENTH, rounding=ROUND_HALF_UP)
    return float(max(MIN_SLOT_SECONDS, rounded))


def sum_durations(durations: Iterable[Number]) -> float:
    """Sum durations exactly (decimal arithmetic on their float reprs)."""
    total = sum((to_decimal(d) for d in durations), Decimal("0"))
    return float(total)


def require_positive_duration(duration: Number, what: str = "duration") -> float:
    """Validate a total duration.

    Raises:
        ComputationError: If the duration is not a finite positive number.
    """
    try:
        value = float(duration)
    except (TypeError, ValueError) as e:
        raise ComputationError(f"Invalid {what}: {duration!r}") from e
    if not value > 0 or value == float("inf"):
        raise ComputationError(f"{what.capitalize()} must be positive, got {duration!r}")
    return value
