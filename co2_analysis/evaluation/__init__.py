"""
Evaluation module for the CO2 analysis pipeline.
"""
from .summary import (
    SummaryStats,
    summarize_column,
    summarize_table,
    summary_frame,
    slope_ratio
)
from .metrics import (
    ForecastMetrics,
    calculate_mae,
    calculate_rmse,
    calculate_mape,
    calculate_r2,
    calculate_bias,
    calculate_coverage,
    compute_fit_metrics
)

__all__ = [
    'SummaryStats', 'summarize_column', 'summarize_table', 'summary_frame', 'slope_ratio',
    'ForecastMetrics', 'calculate_mae', 'calculate_rmse', 'calculate_mape', 'calculate_r2',
    'calculate_bias', 'calculate_coverage', 'compute_fit_metrics'
]
