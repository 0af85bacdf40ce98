"""
Forecasting and regression models for the CO2 analysis pipeline.
"""
from .base import BaseForecaster, ModelRegistry, FORECAST_COLUMNS
from .prophet_model import ProphetForecaster
from .state_space import StateSpaceForecaster
from .driver import create_forecaster, run_forecast
from .regression import (
    RegressionFit,
    TrendDiagnostics,
    select_window,
    fit_period,
    fit_linear_trend
)

__all__ = [
    'BaseForecaster', 'ModelRegistry', 'FORECAST_COLUMNS',
    'ProphetForecaster', 'StateSpaceForecaster',
    'create_forecaster', 'run_forecast',
    'RegressionFit', 'TrendDiagnostics', 'select_window', 'fit_period', 'fit_linear_trend'
]
