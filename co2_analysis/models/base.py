"""
Forecaster interface for the CO2 analysis pipeline.
"""
from abc import ABC, abstractmethod
import pandas as pd
from typing import Dict, Any, List

# Columns every forecaster returns, in order
FORECAST_COLUMNS = ['ds', 'yhat', 'yhat_lower', 'yhat_upper', 'trend', 'seasonal_year']


class BaseForecaster(ABC):
    """
    Additive decomposable forecaster.

    ``fit`` takes a SeriesTable (``ds``, ``y``); ``predict`` takes a frame of
    timestamps (``ds``) covering the history and any future stamps and
    returns a ForecastTable with ``FORECAST_COLUMNS`` in the order of the
    input stamps.
    """

    def __init__(self, name: str, params: Dict[str, Any] = None):
        self.name = name
        self.params = params or {}
        self.model = None
        self.is_fitted = False

    @abstractmethod
    def fit(self, table: pd.DataFrame) -> 'BaseForecaster':
        """Fit on a SeriesTable."""

    @abstractmethod
    def predict(self, future: pd.DataFrame) -> pd.DataFrame:
        """ForecastTable at every stamp of ``future``."""

    def get_params(self) -> Dict[str, Any]:
        return dict(self.params)

    def _check_fitted(self):
        if not self.is_fitted:
            raise ValueError(f"{self.name} forecaster is not fitted")

    def __repr__(self):
        return f"{self.__class__.__name__}({self.params})"


class ModelRegistry:
    """Forecaster classes by configuration name."""

    _models: Dict[str, type] = {}

    @classmethod
    def register(cls, name: str):
        """Class decorator adding a forecaster under ``name``."""
        def decorator(forecaster_class):
            cls._models[name] = forecaster_class
            return forecaster_class
        return decorator

    @classmethod
    def get(cls, name: str) -> type:
        try:
            return cls._models[name]
        except KeyError:
            raise ValueError(
                f"Unknown forecaster '{name}'. Available: {cls.list_models()}"
            ) from None

    @classmethod
    def create(cls, name: str, params: Dict[str, Any] = None) -> BaseForecaster:
        return cls.get(name)(params=params)

    @classmethod
    def list_models(cls) -> List[str]:
        return sorted(cls._models)
