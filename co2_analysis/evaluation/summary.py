"""
Descriptive statistics for value columns.
"""
import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Dict, Any, Optional

from ..core.logging_utils import get_logger


@dataclass(frozen=True)
class SummaryStats:
    """Five-number summary plus mean, sample standard deviation and NA count."""
    name: str
    minimum: float
    q1: float
    median: float
    mean: float
    q3: float
    maximum: float
    std: float
    n: int
    n_missing: int
    date_start: Optional[pd.Timestamp] = None
    date_end: Optional[pd.Timestamp] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'min': self.minimum,
            'q1': self.q1,
            'median': self.median,
            'mean': self.mean,
            'q3': self.q3,
            'max': self.maximum,
            'std': self.std,
            'n': self.n,
            'n_missing': self.n_missing,
            'date_start': self.date_start.isoformat() if self.date_start is not None else None,
            'date_end': self.date_end.isoformat() if self.date_end is not None else None
        }


def summarize_column(
    values,
    dates=None,
    name: str = 'value'
) -> SummaryStats:
    """
    Summarize a numeric column.

    Quartiles interpolate linearly between order statistics at the 1-based
    position ``1 + p * (n - 1)``; the standard deviation uses ``n - 1``.
    Statistics are computed over non-missing entries.

    Args:
        values: Numeric values (NaN marks an absent entry)
        dates: Optional timestamps for the date range
        name: Label used in reports

    Returns:
        SummaryStats
    """
    series = pd.to_numeric(pd.Series(values), errors='coerce')
    valid = series.dropna()
    n_missing = int(series.isna().sum())

    date_start = date_end = None
    if dates is not None and len(dates):
        ds = pd.DatetimeIndex(dates)
        date_start, date_end = ds.min(), ds.max()

    if valid.empty:
        nan = float('nan')
        return SummaryStats(name, nan, nan, nan, nan, nan, nan, nan, 0, n_missing, date_start, date_end)

    q1, median, q3 = valid.quantile([0.25, 0.5, 0.75], interpolation='linear').to_numpy()

    return SummaryStats(
        name=name,
        minimum=float(valid.min()),
        q1=float(q1),
        median=float(median),
        mean=float(valid.mean()),
        q3=float(q3),
        maximum=float(valid.max()),
        std=float(valid.std(ddof=1)) if len(valid) > 1 else float('nan'),
        n=int(len(valid)),
        n_missing=n_missing,
        date_start=date_start,
        date_end=date_end
    )


def summarize_table(table: pd.DataFrame, column: str) -> SummaryStats:
    """Summarize ``column`` of a table, with the ``ds`` range when present."""
    logger = get_logger()

    if column not in table.columns:
        raise ValueError(f"Column '{column}' not found. Columns: {list(table.columns)}")

    dates = table['ds'] if 'ds' in table.columns else None
    stats = summarize_column(table[column], dates=dates, name=column)

    logger.info(
        f"Summary of {column}: mean={stats.mean:.3f}, sd={stats.std:.3f}, "
        f"range=[{stats.minimum:.2f}, {stats.maximum:.2f}], missing={stats.n_missing}"
    )
    return stats


def summary_frame(*stats: SummaryStats) -> pd.DataFrame:
    """Side-by-side table of summaries, one row per column summarized."""
    rows = []
    for s in stats:
        rows.append({
            'Min.': s.minimum,
            '1st Qu.': s.q1,
            'Median': s.median,
            'Mean': s.mean,
            '3rd Qu.': s.q3,
            'Max.': s.maximum,
            'Std.': s.std,
            "NA's": s.n_missing
        })
    return pd.DataFrame(rows, index=[s.name for s in stats])

    """Later slope over earlier slope (``last / first``), NaN when ``first`` is zero."""
def slope_ratio(first: float, last: float) -> float:
    """``last / first``, NaN when ``first`` is zero."""
    return float(last / first) if first != 0 else np.nan
