"""
Seasonal aggregation of the monthly series.
"""
import numpy as np
import pandas as pd

from ..core.logging_utils import get_logger

MONTHS = list(range(1, 13))


def month_year_matrix(table: pd.DataFrame) -> pd.DataFrame:
    """
    Mean value per (month, year) cell.

    Args:
        table: SeriesTable with ``ds`` and ``y`` columns

    Returns:
        DataFrame indexed by month 1..12 with one column per year present;
        NaN marks a month absent for that year
    """
    logger = get_logger()

    ds = pd.DatetimeIndex(table['ds'])
    frame = pd.DataFrame({
        'year': ds.year,
        'month': ds.month,
        'y': table['y'].to_numpy(dtype=float)
    })
    matrix = frame.pivot_table(index='month', columns='year', values='y', aggfunc='mean')
    matrix = matrix.reindex(MONTHS)
    matrix.index.name = 'month'
    matrix.columns.name = 'year'

    absent = int(matrix.isna().sum().sum())
    logger.info(f"Month-year matrix: 12 months x {matrix.shape[1]} years, {absent} absent cells")
    return matrix


def first_difference(table: pd.DataFrame) -> pd.DataFrame:
    """
    Month-over-month change, ``diff[i] = y[i] - y[i-1]``; ``diff[0]`` is NaN.

    Args:
        table: SeriesTable with ``ds`` and ``y`` columns

    Returns:
        DataFrame with ``ds`` and ``diff`` columns, same length as ``table``
    """
    values = table['y'].to_numpy(dtype=float)
    diff = np.full(len(values), np.nan)
    diff[1:] = values[1:] - values[:-1]
    return pd.DataFrame({'ds': table['ds'].to_numpy(), 'diff': diff})


def annual_means(table: pd.DataFrame) -> pd.Series:
    """Mean value per calendar year."""
    ds = pd.DatetimeIndex(table['ds'])
    means = table['y'].groupby(ds.year).mean()
    means.index.name = 'year'
    means.name = 'annual_mean'
    return means


def monthly_climatology(table: pd.DataFrame) -> pd.DataFrame:
    """
    Average seasonal cycle across all years.

    Returns:
        DataFrame indexed by month 1..12 with ``mean`` (ppm) and ``anomaly``
        (mean minus the overall mean of the monthly means)
    """
    ds = pd.DatetimeIndex(table['ds'])
    means = table['y'].groupby(ds.month).mean().reindex(MONTHS)
    climatology = pd.DataFrame({'mean': means, 'anomaly': means - means.mean()})
    climatology.index.name = 'month'
    return climatology
