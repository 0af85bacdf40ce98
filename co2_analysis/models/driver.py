"""
Forecast driver: fit a forecaster on the SeriesTable and predict over the
extended horizon.
"""
import pandas as pd
from typing import Optional

from .base import BaseForecaster, ModelRegistry
from ..core.config import ForecastConfig
from ..core.logging_utils import get_logger


def create_forecaster(config: Optional[ForecastConfig] = None) -> BaseForecaster:
    """
    Build the configured forecaster.

    Prophet receives the trend and seasonality switches from the config; the
    state-space alternative has its own fixed structure.
    """
    config = config or ForecastConfig()
    if config.model == 'prophet':
        params = {
            'growth': config.growth,
            'seasonality_mode': config.seasonality_mode,
            'yearly_seasonality': config.yearly_seasonality,
            'weekly_seasonality': config.weekly_seasonality,
            'daily_seasonality': config.daily_seasonality
        }
        return ModelRegistry.create('prophet', params)
    return ModelRegistry.create(config.model)


def run_forecast(
    forecaster: BaseForecaster,
    table: pd.DataFrame,
    future: pd.DataFrame
) -> pd.DataFrame:
    """
    Fit ``forecaster`` on ``table`` and predict at every stamp in ``future``.

    Errors raised by the forecaster propagate unchanged; nothing is retried.

    Args:
        forecaster: Unfitted forecaster
        table: SeriesTable (``ds``, ``y``)
        future: Timestamps to predict (``ds``), history first

    Returns:
        ForecastTable ordered by ``ds``
    """
    logger = get_logger()

    forecaster.fit(table)
    forecast = forecaster.predict(future)

    logger.info(
        f"{forecaster.name}: {len(forecast)} forecast rows "
        f"({len(forecast) - len(table)} beyond history)"
    )
    return forecast
