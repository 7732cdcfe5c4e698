import math
import numbers
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from src.errors import ComputationError


def classify_by_bands(value: float, bands: Sequence[Tuple[float, str]], floor: str) -> str:
    """First label whose (exclusive) lower bound `value` exceeds; bands are ordered high to low."""
    for lower_bound, label in bands:
        if value > lower_bound:
            return label
    return floor


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def as_utc(moment: Union[datetime, date]) -> datetime:
    if not isinstance(moment, datetime):
        moment = datetime(moment.year, moment.month, moment.day)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def months_between(start: Union[datetime, date], end: datetime, days_per_month: int = 30) -> int:
    elapsed = as_utc(end) - as_utc(start)
    return math.floor(elapsed.total_seconds() / timedelta(days=days_per_month).total_seconds())


def date_after(reference_time: datetime, days: int) -> str:
    return (as_utc(reference_time) + timedelta(days=days)).date().isoformat()


def finite_readings(name: str, values: Optional[Iterable[Any]]) -> Optional[np.ndarray]:
    """
    Sensor series as a float array, or None when the series is absent or empty.
    Non-numeric or non-finite values raise ComputationError instead of being coerced.
    """
    if values is None:
        return None
    values = list(values)
    if any(isinstance(v, bool) or not isinstance(v, numbers.Real) for v in values):
        raise ComputationError(f"{name} contains non-numeric values")
    readings = np.asarray(values, dtype=float)
    if readings.size == 0:
        return None
    if not np.all(np.isfinite(readings)):
        raise ComputationError(f"{name} contains non-finite values")
    return readings


def format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
