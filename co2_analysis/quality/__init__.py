"""
Data quality module for the CO2 analysis pipeline.
"""
from .audit import (
    check_missing_values,
    check_temporal_gaps,
    check_outliers,
    validate_series_table,
    generate_quality_report
)

__all__ = [
    'check_missing_values',
    'check_temporal_gaps',
    'check_outliers',
    'validate_series_table',
    'generate_quality_report'
]
