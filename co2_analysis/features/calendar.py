"""
Calendar helpers and the forecast horizon builder.

Timestamps are month-start, midnight, timezone-naive (read as UTC). Numeric
dates follow two conventions:

- days since 1970-01-01, the unit of the period regressions (slope in ppm/day)
- decimal years, ``year + (month - 1) / 12``, the unit of the full-series trend
"""
import numpy as np
import pandas as pd
from typing import Union

from ..core.errors import InvalidHorizon, NonMonotoneTimestamps, UnknownFrequency
from ..core.logging_utils import get_logger

EPOCH = pd.Timestamp("1970-01-01")
DAYS_PER_MONTH = 30.4375
DAYS_PER_YEAR = 365.25

# Horizon cadence -> pd.DateOffset keyword
FREQUENCIES = {
    'monthly': 'months',
    'weekly': 'weeks',
    'daily': 'days',
}

DateLike = Union[str, pd.Timestamp, np.datetime64]


def to_timestamp(value: DateLike) -> pd.Timestamp:
    """Parse a date bound (``'1964-12-01'``, Timestamp, datetime64)."""
    return pd.Timestamp(value)


def monthly_stamps(start_year: int, start_month: int, periods: int) -> pd.DatetimeIndex:
    """Month-start stamps beginning at ``start_year``-``start_month``."""
    start = pd.Timestamp(year=start_year, month=start_month, day=1)
    return pd.date_range(start=start, periods=periods, freq='MS')


def days_since_epoch(ds) -> np.ndarray:
    """Days since 1970-01-01 for each timestamp (negative before the epoch)."""
    index = pd.DatetimeIndex(ds)
    return ((index - EPOCH) / pd.Timedelta(days=1)).to_numpy(dtype=float)


def decimal_year(ds) -> np.ndarray:
    """Decimal year with months at twelfths, e.g. 1959-04-01 -> 1959.25."""
    index = pd.DatetimeIndex(ds)
    return (index.year + (index.month - 1) / 12.0).to_numpy(dtype=float)


def build_horizon(
    table: pd.DataFrame,
    periods: int,
    freq: str = 'monthly'
) -> pd.DataFrame:
    """
    Extend the historical timestamps by ``periods`` future stamps.

    Future stamp k is ``last + k * step`` with civil-calendar arithmetic, so
    2024-01-31 plus one month is 2024-02-29.

    Args:
        table: SeriesTable with a ``ds`` column
        periods: Number of future periods (>= 0)
        freq: One of 'monthly', 'weekly', 'daily'

    Returns:
        DataFrame with a single ``ds`` column, history first
    """
    logger = get_logger()

    if freq not in FREQUENCIES:
        raise UnknownFrequency(
            f"Unsupported horizon frequency. Expected one of {sorted(FREQUENCIES)}",
            {'freq': freq}
        )
    if isinstance(periods, bool) or not isinstance(periods, (int, np.integer)) or periods < 0:
        raise InvalidHorizon(
            "Horizon periods must be a non-negative integer",
            {'periods': periods}
        )

    history = pd.DatetimeIndex(table['ds'])
    if len(history) == 0:
        raise InvalidHorizon("Cannot extend an empty series", {'rows': 0})
    if not (history.is_monotonic_increasing and history.is_unique):
        raise NonMonotoneTimestamps(
            "Historical timestamps must be strictly increasing",
            {'first': str(history[0]), 'last': str(history[-1])}
        )

    unit = FREQUENCIES[freq]
    last = history[-1]
    future = [last + pd.DateOffset(**{unit: k}) for k in range(1, int(periods) + 1)]

    ds = history.append(pd.DatetimeIndex(future)) if future else history
    logger.info(
        f"Horizon: {len(history)} historical + {int(periods)} {freq} stamps "
        f"({ds[0].date()} to {ds[-1].date()})"
    )
    return pd.DataFrame({'ds': ds.to_numpy()})
