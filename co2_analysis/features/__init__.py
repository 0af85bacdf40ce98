"""
Calendar and seasonal feature module for the CO2 analysis pipeline.
"""
from .calendar import (
    EPOCH,
    DAYS_PER_MONTH,
    DAYS_PER_YEAR,
    FREQUENCIES,
    to_timestamp,
    monthly_stamps,
    days_since_epoch,
    decimal_year,
    build_horizon
)
from .seasonal import (
    month_year_matrix,
    first_difference,
    annual_means,
    monthly_climatology
)

__all__ = [
    'EPOCH', 'DAYS_PER_MONTH', 'DAYS_PER_YEAR', 'FREQUENCIES',
    'to_timestamp', 'monthly_stamps', 'days_since_epoch', 'decimal_year',
    'build_horizon',
    'month_year_matrix', 'first_difference', 'annual_means', 'monthly_climatology'
]
