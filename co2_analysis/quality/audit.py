"""
Data quality audit for the monthly CO2 series.
"""
import pandas as pd
import numpy as np
from typing import Dict, Any

from ..core.errors import LengthMismatch, MissingValue, NonMonotoneTimestamps, NonPositiveValue
from ..core.logging_utils import get_logger


def check_missing_values(df: pd.DataFrame) -> pd.DataFrame:
    """
    Check for missing values in DataFrame.

    Args:
        df: Input DataFrame

    Returns:
        DataFrame with missing value statistics per column
    """
    missing = df.isnull().sum()
    missing_pct = (missing / len(df)) * 100 if len(df) else missing * 0.0

    report = pd.DataFrame({
        'column': df.columns,
        'missing_count': missing.values,
        'missing_pct': missing_pct.values,
        'dtype': df.dtypes.astype(str).values
    })

    return report.sort_values('missing_pct', ascending=False).reset_index(drop=True)


def _month_number(ds: pd.DatetimeIndex) -> np.ndarray:
    return (ds.year * 12 + ds.month).to_numpy()


def check_temporal_gaps(ds) -> Dict[str, Any]:
    """
    Check a monthly timestamp sequence for gaps, repeats and misaligned days.

    Args:
        ds: Sequence of timestamps

    Returns:
        Dictionary with gap information
    """
    ds = pd.DatetimeIndex(ds)
    steps = np.diff(_month_number(ds))

    gaps = []
    for i in np.flatnonzero(steps != 1):
        gaps.append({
            'from': ds[i],
            'to': ds[i + 1],
            'gap_months': int(steps[i])
        })

    off_anchor = ds[(ds.day != 1) | (ds.hour != 0) | (ds.minute != 0)]

    return {
        'n_gaps': len(gaps),
        'gaps': gaps,
        'n_off_anchor': len(off_anchor),
        'date_range': {
            'start': ds.min() if len(ds) else None,
            'end': ds.max() if len(ds) else None,
            'n_periods': len(ds)
        }
    }


def check_outliers(values: pd.Series, threshold: float = 1.5) -> Dict[str, Any]:
    """
    Flag observations outside the Tukey fences ``[Q1 - t*IQR, Q3 + t*IQR]``.

    Args:
        values: Numeric series
        threshold: Fence multiplier

    Returns:
        Dictionary with fence bounds and outlier count
    """
    values = pd.Series(values).dropna()
    if values.empty:
        return {'lower': None, 'upper': None, 'n_outliers': 0}

    q1 = values.quantile(0.25)
    q3 = values.quantile(0.75)
    iqr = q3 - q1
    lower = q1 - threshold * iqr
    upper = q3 + threshold * iqr
    outliers = (values < lower) | (values > upper)

    return {'lower': float(lower), 'upper': float(upper), 'n_outliers': int(outliers.sum())}


def validate_series_table(table: pd.DataFrame) -> None:
    """
    Enforce the SeriesTable invariants.

    Raises:
        LengthMismatch: if the table has no rows
        MissingValue: if any ``y`` is absent
        NonPositiveValue: if any ``y`` is zero or negative
        NonMonotoneTimestamps: if ``ds`` is not strictly increasing month by month
    """
    if len(table) == 0:
        raise LengthMismatch("Series is empty", {'rows': 0})

    missing = table['y'].isna()
    if missing.any():
        positions = np.flatnonzero(missing.to_numpy())
        raise MissingValue(
            f"{len(positions)} absent observation(s); imputation is not performed",
            {'positions': positions[:10].tolist()}
        )
    non_positive = table['y'].to_numpy(dtype=float) <= 0
    if non_positive.any():
        positions = np.flatnonzero(non_positive)
        raise NonPositiveValue(
            f"{len(positions)} non-positive observation(s)",
            {'positions': positions[:10].tolist()}
        )

    ds = pd.DatetimeIndex(table['ds'])
    if not (ds.is_monotonic_increasing and ds.is_unique):
        raise NonMonotoneTimestamps(
            "Timestamps are not strictly increasing",
            {'first': str(ds[0]), 'last': str(ds[-1])}
        )

    gaps = check_temporal_gaps(ds)
    if gaps['n_gaps'] or gaps['n_off_anchor']:
        first = gaps['gaps'][0] if gaps['gaps'] else None
        raise NonMonotoneTimestamps(
            "Timestamps must be month starts exactly one calendar month apart",
            {'n_gaps': gaps['n_gaps'], 'n_off_anchor': gaps['n_off_anchor'], 'first_gap': first}
        )


def generate_quality_report(table: pd.DataFrame) -> Dict[str, Any]:
    """
    Generate a descriptive quality report for a SeriesTable.

    Args:
        table: SeriesTable with ``ds`` and ``y`` columns

    Returns:
        Dictionary with quality report
    """
    logger = get_logger()

    gaps = check_temporal_gaps(table['ds'])
    outliers = check_outliers(table['y'])
    missing = check_missing_values(table)

    report = {
        'summary': {
            'n_rows': len(table),
            'date_range': {
                'start': str(gaps['date_range']['start']),
                'end': str(gaps['date_range']['end'])
            }
        },
        'missing_values': missing.to_dict(orient='records'),
        'temporal_gaps': gaps['n_gaps'],
        'outliers': outliers
    }

    logger.info(
        f"Quality: {len(table)} rows, {int(missing['missing_count'].sum())} missing, "
        f"{gaps['n_gaps']} gaps, {outliers['n_outliers']} IQR outliers"
    )

    return report
