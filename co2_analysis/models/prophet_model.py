"""
Prophet forecaster: piecewise-linear trend with automatic changepoints plus
additive yearly seasonality.
"""
import pandas as pd
from typing import Dict, Any

from .base import BaseForecaster, ModelRegistry, FORECAST_COLUMNS
from ..core.logging_utils import get_logger


@ModelRegistry.register('prophet')
class ProphetForecaster(BaseForecaster):
    """Prophet with weekly and daily seasonality disabled for monthly data."""

    def __init__(self, params: Dict[str, Any] = None):
        default_params = {
            'growth': 'linear',
            'seasonality_mode': 'additive',
            'yearly_seasonality': True,
            'weekly_seasonality': False,
            'daily_seasonality': False
        }
        params = {**default_params, **(params or {})}
        super().__init__('prophet', params)

    def fit(self, table: pd.DataFrame) -> 'ProphetForecaster':
        from prophet import Prophet

        logger = get_logger()

        self.model = Prophet(**self.params)
        self.model.fit(table[['ds', 'y']])
        self.is_fitted = True

        logger.info(
            f"Prophet fitted on {len(table)} rows "
            f"({len(self.model.changepoints)} candidate changepoints)"
        )
        return self

    def predict(self, future: pd.DataFrame) -> pd.DataFrame:
        self._check_fitted()

        forecast = self.model.predict(future[['ds']])
        if 'yearly' in forecast.columns:
            forecast = forecast.rename(columns={'yearly': 'seasonal_year'})
        else:
            forecast['seasonal_year'] = 0.0
        return forecast[FORECAST_COLUMNS].reset_index(drop=True)
