"""
Reporting module for the CO2 analysis pipeline.
"""
from .plots import (
    PLOT_STYLE,
    plot_forecast,
    plot_forecast_components,
    plot_regression_window,
    plot_month_year_matrix,
    plot_monthly_difference,
    create_all_plots
)
from .interactive import build_forecast_figure, write_forecast_html
from .report import render_text_report

__all__ = [
    'PLOT_STYLE', 'plot_forecast', 'plot_forecast_components', 'plot_regression_window',
    'plot_month_year_matrix', 'plot_monthly_difference', 'create_all_plots',
    'build_forecast_figure', 'write_forecast_html', 'render_text_report'
]
