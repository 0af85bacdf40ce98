"""
Shared fixtures for the CO2 analysis tests.
"""
import pytest
import numpy as np
import pandas as pd

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from co2_analysis.data_io import load_and_prepare_series
from co2_analysis.models.base import BaseForecaster, FORECAST_COLUMNS


class LinearStubForecaster(BaseForecaster):
    """Straight-line forecaster with a fixed +/-1 ppm band; fast and deterministic."""

    def __init__(self, params=None):
        super().__init__('linear_stub', params)

    def fit(self, table):
        x = pd.DatetimeIndex(table['ds']).asi8 / 8.64e13
        self.model = np.polyfit(x, table['y'].to_numpy(dtype=float), 1)
        self.is_fitted = True
        return self

    def predict(self, future):
        self._check_fitted()
        x = pd.DatetimeIndex(future['ds']).asi8 / 8.64e13
        yhat = np.polyval(self.model, x)
        return pd.DataFrame({
            'ds': future['ds'].to_numpy(),
            'yhat': yhat,
            'yhat_lower': yhat - 1.0,
            'yhat_upper': yhat + 1.0,
            'trend': yhat,
            'seasonal_year': np.zeros(len(yhat))
        })[FORECAST_COLUMNS]


class FailingForecaster(BaseForecaster):
    """Raises from ``fit`` the way a broken backend would."""

    def __init__(self, params=None):
        super().__init__('failing', params)

    def fit(self, table):
        raise RuntimeError("optimizer did not converge")

    def predict(self, future):
        raise AssertionError("predict must not be reached")


@pytest.fixture(scope='session')
def co2_table():
    """Bundled Mauna Loa series, 1959-01 to 1997-12."""
    table, _ = load_and_prepare_series()
    return table


@pytest.fixture
def stub_forecaster():
    return LinearStubForecaster()


@pytest.fixture
def failing_forecaster():
    return FailingForecaster()
