"""
End-to-end analysis of the monthly CO2 series.

``run_analysis`` executes the components in order (load, horizon, forecast,
regressions, seasonal aggregation, summaries); ``render_outputs`` writes the
figures. The first failure stops the run and propagates to the caller.
"""
import pandas as pd
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional

from .core.config import Config
from .core.logging_utils import get_logger, LogContext
from .data_io.loader import load_and_prepare_series
from .evaluation.metrics import ForecastMetrics, compute_fit_metrics
from .evaluation.summary import SummaryStats, summarize_table, slope_ratio
from .features.calendar import build_horizon
from .features.seasonal import (
    month_year_matrix, first_difference, annual_means, monthly_climatology
)
from .models.base import BaseForecaster
from .models.driver import create_forecaster, run_forecast
from .models.regression import RegressionFit, TrendDiagnostics, fit_period, fit_linear_trend
from .quality.audit import generate_quality_report, validate_series_table
from .reporting.interactive import write_forecast_html
from .reporting.plots import create_all_plots


@dataclass
class PipelineResult:
    """Everything one run produces, ready for rendering and serialisation."""
    series: pd.DataFrame
    metadata: Dict[str, Any]
    quality: Dict[str, Any]
    future: pd.DataFrame
    forecast: pd.DataFrame
    regressions: Dict[str, RegressionFit]
    trend: TrendDiagnostics
    month_year: pd.DataFrame
    climatology: pd.DataFrame
    annual_means: pd.Series
    differences: pd.DataFrame
    series_summary: SummaryStats
    forecast_summary: SummaryStats
    fit_metrics: ForecastMetrics


def run_analysis(
    config: Optional[Config] = None,
    table: Optional[pd.DataFrame] = None,
    forecaster: Optional[BaseForecaster] = None
) -> PipelineResult:
    """
    Run every analysis component on the configured series.

    Args:
        config: Run configuration (defaults apply when None)
        table: Pre-built SeriesTable; loaded from ``config.data`` when None
        forecaster: Unfitted forecaster; built from ``config.forecast`` when None

    Returns:
        PipelineResult
    """
    config = config or Config()
    logger = get_logger()

    with LogContext(logger, "Series Loader"):
        if table is None:
            table, metadata = load_and_prepare_series(config.data)
        else:
            validate_series_table(table)
            metadata = {
                'source': 'in-memory',
                'n_rows': len(table),
                'date_range': {
                    'start': str(table['ds'].iloc[0].date()),
                    'end': str(table['ds'].iloc[-1].date())
                }
            }
        quality = generate_quality_report(table)

    with LogContext(logger, "Horizon Builder"):
        future = build_horizon(table, config.horizon.periods, config.horizon.freq)

    with LogContext(logger, "Forecast Driver"):
        if forecaster is None:
            forecaster = create_forecaster(config.forecast)
        forecast = run_forecast(forecaster, table, future)

    with LogContext(logger, "Period Regressor"):
        regressions = {}
        for window in config.regression.windows:
            regressions[window.name] = fit_period(table, window.lo, window.hi, name=window.name)
        trend = fit_linear_trend(table)

        fits = list(regressions.values())
        if len(fits) >= 2:
            ratio = slope_ratio(fits[0].slope, fits[-1].slope)
            logger.info(f"Slope ratio {fits[-1].name}/{fits[0].name}: {ratio:.3f}")

    with LogContext(logger, "Seasonal Aggregator"):
        month_year = month_year_matrix(table)
        climatology = monthly_climatology(table)
        yearly = annual_means(table)
        differences = first_difference(table)

    with LogContext(logger, "Summary Reporter"):
        series_summary = summarize_table(table, 'y')
        forecast_summary = summarize_table(forecast, 'yhat')
        fit_metrics = compute_fit_metrics(table, forecast)

    return PipelineResult(
        series=table,
        metadata=metadata,
        quality=quality,
        future=future,
        forecast=forecast,
        regressions=regressions,
        trend=trend,
        month_year=month_year,
        climatology=climatology,
        annual_means=yearly,
        differences=differences,
        series_summary=series_summary,
        forecast_summary=forecast_summary,
        fit_metrics=fit_metrics
    )


def render_outputs(
    result: PipelineResult,
    config: Config,
    figures_dir: Path
) -> Dict[str, Path]:
    """
    Write the static figures and, when enabled, the interactive forecast page.

    Returns:
        Figure name -> saved path
    """
    logger = get_logger()

    with LogContext(logger, "Renderer"):
        point_colors = {w.name: w.color for w in config.regression.windows}
        paths = create_all_plots(
            result,
            figures_dir,
            point_colors=point_colors,
            line_color=config.regression.fit_color,
            fmt=config.output.figure_format,
            dpi=config.output.figure_dpi
        )
        if config.output.interactive:
            paths['forecast_interactive'] = write_forecast_html(
                result.series, result.forecast, Path(figures_dir) / 'forecast.html'
            )

    return paths


def result_to_dict(result: PipelineResult) -> Dict[str, Any]:
    """JSON-ready digest of a run (tables are summarised, not dumped)."""
    fits = list(result.regressions.values())
    ratio = slope_ratio(fits[0].slope, fits[-1].slope) if len(fits) >= 2 else None

    horizon = result.forecast.iloc[len(result.series):]
    return {
        'metadata': result.metadata,
        'quality': result.quality,
        'series_summary': result.series_summary.to_dict(),
        'forecast_summary': result.forecast_summary.to_dict(),
        'regressions': {name: fit.to_dict() for name, fit in result.regressions.items()},
        'slope_ratio': ratio,
        'trend': result.trend.to_dict(),
        'fit_metrics': result.fit_metrics.to_dict(),
        'climatology': {
            int(month): {'mean': row['mean'], 'anomaly': row['anomaly']}
            for month, row in result.climatology.iterrows()
        },
        'annual_means': {int(year): value for year, value in result.annual_means.items()},
        'horizon_forecast': [
            {
                'ds': row.ds.isoformat(),
                'yhat': row.yhat,
                'yhat_lower': row.yhat_lower,
                'yhat_upper': row.yhat_upper
            }
            for row in horizon.itertuples(index=False)
        ]
    }
