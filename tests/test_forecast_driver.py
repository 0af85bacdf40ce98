"""
Tests for the forecasters and the forecast driver.
"""
import pytest
import numpy as np
import pandas as pd

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from co2_analysis.core import ForecastConfig
from co2_analysis.evaluation import summarize_table
from co2_analysis.features import build_horizon
from co2_analysis.models import (
    FORECAST_COLUMNS, ModelRegistry, ProphetForecaster, StateSpaceForecaster,
    create_forecaster, run_forecast
)


class TestModelRegistry:
    """Tests for forecaster lookup."""

    def test_registered_models(self):
        models = ModelRegistry.list_models()
        assert 'prophet' in models
        assert 'unobserved_components' in models

    def test_unknown_model(self):
        with pytest.raises(ValueError):
            ModelRegistry.get('arima')

    def test_prophet_from_config(self):
        forecaster = create_forecaster(ForecastConfig())
        assert isinstance(forecaster, ProphetForecaster)
        assert forecaster.get_params() == {
            'growth': 'linear',
            'seasonality_mode': 'additive',
            'yearly_seasonality': True,
            'weekly_seasonality': False,
            'daily_seasonality': False
        }

    def test_state_space_from_config(self):
        forecaster = create_forecaster(ForecastConfig(model='unobserved_components'))
        assert isinstance(forecaster, StateSpaceForecaster)

    def test_predict_before_fit(self):
        with pytest.raises(ValueError):
            StateSpaceForecaster().predict(pd.DataFrame({'ds': []}))


class TestRunForecast:
    """Tests for the driver contract, using a deterministic stub."""

    def test_row_count_and_order(self, co2_table, stub_forecaster):
        future = build_horizon(co2_table, 12)
        forecast = run_forecast(stub_forecaster, co2_table, future)

        assert list(forecast.columns) == FORECAST_COLUMNS
        assert len(forecast) == len(co2_table) + 12
        assert (forecast['ds'].to_numpy() == future['ds'].to_numpy()).all()

    def test_zero_horizon(self, co2_table, stub_forecaster):
        future = build_horizon(co2_table, 0)
        forecast = run_forecast(stub_forecaster, co2_table, future)
        assert (forecast['ds'].to_numpy() == co2_table['ds'].to_numpy()).all()

    def test_failure_propagates_unchanged(self, co2_table, failing_forecaster):
        future = build_horizon(co2_table, 12)
        with pytest.raises(RuntimeError, match='optimizer did not converge'):
            run_forecast(failing_forecaster, co2_table, future)


class TestStateSpaceForecaster:
    """Tests for the statsmodels UnobservedComponents forecaster."""

    @pytest.fixture(scope='class')
    def fitted(self):
        table = pd.DataFrame({
            'ds': pd.date_range('1980-01-01', periods=120, freq='MS'),
        })
        t = np.arange(120)
        noise = np.random.RandomState(0).normal(0.0, 0.3, 120)
        table['y'] = 338.0 + 0.12 * t + 3.0 * np.sin(2 * np.pi * t / 12) + noise
        future = build_horizon(table, 12)
        forecast = run_forecast(StateSpaceForecaster(), table, future)
        return table, forecast

    def test_shape(self, fitted):
        table, forecast = fitted
        assert list(forecast.columns) == FORECAST_COLUMNS
        assert len(forecast) == len(table) + 12

    def test_bounds_ordered(self, fitted):
        _, forecast = fitted
        assert not forecast['yhat_lower'].isna().any()
        assert not forecast['yhat_upper'].isna().any()
        assert (forecast['yhat_lower'] <= forecast['yhat']).all()
        assert (forecast['yhat'] <= forecast['yhat_upper']).all()

    def test_band_widens_over_horizon(self, fitted):
        table, forecast = fitted
        horizon = forecast.iloc[len(table):]
        width = (horizon['yhat_upper'] - horizon['yhat_lower']).to_numpy()
        assert (width > 0).all()
        assert width[-1] > width[0]

    def test_continues_trend(self, fitted):
        table, forecast = fitted
        horizon = forecast.iloc[len(table):]
        assert horizon['yhat'].mean() == pytest.approx(
            338.0 + 0.12 * np.arange(120, 132).mean(), abs=1.0
        )

    def test_rejects_non_monthly_horizon(self, fitted):
        table, _ = fitted
        forecaster = StateSpaceForecaster().fit(table)
        with pytest.raises(ValueError):
            forecaster.predict(build_horizon(table, 4, freq='weekly'))


class TestProphetForecaster:
    """Scenario run against the real Prophet backend."""

    @pytest.fixture(scope='class')
    def forecast(self, co2_table):
        pytest.importorskip('prophet')
        np.random.seed(42)
        future = build_horizon(co2_table, 12)
        return run_forecast(ProphetForecaster(), co2_table, future)

    def test_row_count(self, co2_table, forecast):
        assert len(forecast) == len(co2_table) + 12

    def test_bounds_ordered(self, forecast):
        assert (forecast['yhat_lower'] <= forecast['yhat']).all()
        assert (forecast['yhat'] <= forecast['yhat_upper']).all()

    def test_forecast_summary(self, forecast):
        stats = summarize_table(forecast, 'yhat')
        assert stats.mean == pytest.approx(337.75, abs=0.3)
        assert stats.std == pytest.approx(15.41, abs=0.3)
        assert stats.maximum == pytest.approx(367.8, abs=1.0)
        assert stats.q1 == pytest.approx(323.7, abs=1.0)
        assert stats.q3 == pytest.approx(351.5, abs=1.0)

    def test_seasonal_component_present(self, forecast):
        assert forecast['seasonal_year'].abs().max() > 1.0
