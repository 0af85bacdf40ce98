"""
In-sample accuracy of a forecast against the observed series.
"""
import numpy as np
import pandas as pd
from typing import Dict
from dataclasses import asdict, dataclass

from ..core.logging_utils import get_logger


@dataclass
class ForecastMetrics:
    """In-sample accuracy of ``yhat`` against ``y``; ``coverage`` is the share inside the band."""
    mae: float = 0.0
    rmse: float = 0.0
    mape: float = 0.0
    r2: float = 0.0
    bias: float = 0.0
    coverage: float = 0.0
    n_samples: int = 0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def calculate_mae(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Mean Absolute Error."""
    return float(np.mean(np.abs(y_true - y_pred)))


def calculate_rmse(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Root Mean Squared Error."""
    return float(np.sqrt(np.mean((y_true - y_pred) ** 2)))


def calculate_mape(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Mean Absolute Percentage Error. Concentrations are strictly positive."""
    return float(np.mean(np.abs((y_true - y_pred) / y_true)) * 100)


def calculate_r2(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """R-squared (coefficient of determination)."""
    ss_res = np.sum((y_true - y_pred) ** 2)
    ss_tot = np.sum((y_true - np.mean(y_true)) ** 2)
    if ss_tot == 0:
        return 0.0
    return float(1 - (ss_res / ss_tot))


def calculate_bias(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Mean Bias (systematic error)."""
    return float(np.mean(y_pred - y_true))


def calculate_coverage(y_true: np.ndarray, lower: np.ndarray, upper: np.ndarray) -> float:
    """Share of observations inside ``[lower, upper]``."""
    return float(np.mean((y_true >= lower) & (y_true <= upper)))


def compute_fit_metrics(series: pd.DataFrame, forecast: pd.DataFrame) -> ForecastMetrics:
    """
    Compare forecast rows against observations at the same timestamps.

    Args:
        series: SeriesTable (``ds``, ``y``)
        forecast: ForecastTable (``ds``, ``yhat``, ``yhat_lower``, ``yhat_upper``)

    Returns:
        ForecastMetrics over the overlapping rows
    """
    logger = get_logger()

    joined = series[['ds', 'y']].merge(
        forecast[['ds', 'yhat', 'yhat_lower', 'yhat_upper']], on='ds', how='inner'
    )
    if joined.empty:
        logger.warning("Forecast has no rows overlapping the history")
        return ForecastMetrics()

    y_true = joined['y'].to_numpy(dtype=float)
    y_pred = joined['yhat'].to_numpy(dtype=float)

    metrics = ForecastMetrics(
        mae=calculate_mae(y_true, y_pred),
        rmse=calculate_rmse(y_true, y_pred),
        mape=calculate_mape(y_true, y_pred),
        r2=calculate_r2(y_true, y_pred),
        bias=calculate_bias(y_true, y_pred),
        coverage=calculate_coverage(
            y_true,
            joined['yhat_lower'].to_numpy(dtype=float),
            joined['yhat_upper'].to_numpy(dtype=float)
        ),
        n_samples=len(joined)
    )
    logger.info(
        f"In-sample fit: MAE={metrics.mae:.3f}, RMSE={metrics.rmse:.3f}, "
        f"coverage={metrics.coverage:.1%}"
    )
    return metrics
