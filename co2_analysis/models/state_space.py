"""
Structural time series forecaster (statsmodels UnobservedComponents).

The observation is level + seasonal + noise: a local linear trend supplies
the level, a 12-period stochastic seasonal the annual cycle. Historical rows
use smoothed estimates, future rows the model forecast.
"""
import numpy as np
import pandas as pd
from typing import Dict, Any
from scipy.stats import norm
from statsmodels.tsa.statespace.structural import UnobservedComponents

from .base import BaseForecaster, ModelRegistry, FORECAST_COLUMNS
from ..core.logging_utils import get_logger


@ModelRegistry.register('unobserved_components')
class StateSpaceForecaster(BaseForecaster):
    """Local linear trend plus monthly seasonal; monthly cadence only."""

    def __init__(self, params: Dict[str, Any] = None):
        default_params = {
            'level': 'local linear trend',
            'seasonal': 12,
            'alpha': 0.2,  # 80% bands, matching Prophet's default interval width
            'maxiter': 200
        }
        params = {**default_params, **(params or {})}
        super().__init__('unobserved_components', params)
        self._history = None

    def fit(self, table: pd.DataFrame) -> 'StateSpaceForecaster':
        logger = get_logger()

        self._history = pd.DatetimeIndex(table['ds'])
        y = table['y'].to_numpy(dtype=float)

        model = UnobservedComponents(y, level=self.params['level'], seasonal=self.params['seasonal'])
        self.model = model.fit(disp=False, maxiter=self.params['maxiter'])
        self.is_fitted = True

        logger.info(f"UnobservedComponents fitted on {len(y)} rows (AIC={self.model.aic:.2f})")
        return self

    def _future_steps(self, ds: pd.DatetimeIndex) -> int:
        n = len(self._history)
        if len(ds) < n or not ds[:n].equals(self._history):
            raise ValueError("Prediction stamps must start with the fitted history")

        steps = len(ds) - n
        expected = pd.DatetimeIndex(
            [self._history[-1] + pd.DateOffset(months=k) for k in range(1, steps + 1)]
        )
        if steps and not ds[n:].equals(expected):
            raise ValueError("UnobservedComponents forecaster supports monthly horizons only")
        return steps

    def predict(self, future: pd.DataFrame) -> pd.DataFrame:
        self._check_fitted()

        ds = pd.DatetimeIndex(future['ds'])
        steps = self._future_steps(ds)
        alpha = self.params['alpha']
        period = self.params['seasonal']

        insample = self.model.get_prediction(information_set='smoothed')
        yhat = np.asarray(insample.predicted_mean, dtype=float)
        variance = np.asarray(insample.var_pred_mean, dtype=float)
        trend = np.asarray(self.model.level['smoothed'], dtype=float)
        seasonal = np.asarray(self.model.seasonal['smoothed'], dtype=float)

        if steps:
            forecast = self.model.get_forecast(steps)
            f_mean = np.asarray(forecast.predicted_mean, dtype=float)
            f_variance = np.asarray(forecast.var_pred_mean, dtype=float)
            # The seasonal forecast repeats the last smoothed cycle
            last_cycle = seasonal[-period:]
            f_seasonal = np.array([last_cycle[k % period] for k in range(steps)])

            yhat = np.concatenate([yhat, f_mean])
            variance = np.concatenate([variance, f_variance])
            seasonal = np.concatenate([seasonal, f_seasonal])
            trend = np.concatenate([trend, f_mean - f_seasonal])

        # Smoothed variances can come out slightly negative in floating point
        half_width = norm.ppf(1 - alpha / 2) * np.sqrt(np.clip(variance, 0.0, None))

        return pd.DataFrame({
            'ds': ds.to_numpy(),
            'yhat': yhat,
            'yhat_lower': yhat - half_width,
            'yhat_upper': yhat + half_width,
            'trend': trend,
            'seasonal_year': seasonal
        })[FORECAST_COLUMNS]
