"""
Static figures for the CO2 report.

Every function renders one figure, saves it, closes it and returns the path.
Styling is applied per call through ``plt.rc_context``.
"""
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.dates as mdates
import numpy as np
import pandas as pd
from pathlib import Path
from typing import Dict, Tuple, Union

from ..core.logging_utils import get_logger
from ..models.regression import RegressionFit

PLOT_STYLE = {
    'font.size': 12,
    'axes.labelsize': 13,
    'axes.titlesize': 15,
    'axes.titleweight': 'bold',
    'legend.fontsize': 10,
    'axes.grid': True,
    'grid.alpha': 0.3,
}

X_LABEL = "Date"
Y_LABEL = "CO2 levels ppm"


def _save(fig: plt.Figure, output_path: Union[str, Path], dpi: int) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        fig.savefig(output_path, dpi=dpi, bbox_inches='tight', facecolor='white')
    finally:
        plt.close(fig)
    get_logger().debug(f"Saved figure: {output_path}")
    return output_path


def plot_forecast(
    series: pd.DataFrame,
    forecast: pd.DataFrame,
    output_path: Union[str, Path],
    title: str = "CO2 Forecast",
    figsize: Tuple[int, int] = (12, 6),
    dpi: int = 150
) -> Path:
    """
    Historical observations, forecast line and shaded uncertainty band.

    Args:
        series: SeriesTable (``ds``, ``y``)
        forecast: ForecastTable (``ds``, ``yhat``, ``yhat_lower``, ``yhat_upper``)
        output_path: Path to save figure
        title: Plot title
        figsize: Figure size
        dpi: Output resolution

    Returns:
        Path of the saved figure
    """
    with plt.rc_context(PLOT_STYLE):
        fig, ax = plt.subplots(figsize=figsize)

        ax.plot(series['ds'], series['y'], 'k.', markersize=3, label='Observed')
        ax.plot(forecast['ds'], forecast['yhat'], color='#0072B2', linewidth=1.5, label='Forecast')
        ax.fill_between(
            forecast['ds'], forecast['yhat_lower'], forecast['yhat_upper'],
            color='#0072B2', alpha=0.2, label='Uncertainty interval'
        )

        last_observed = series['ds'].iloc[-1]
        if forecast['ds'].iloc[-1] > last_observed:
            ax.axvline(last_observed, color='gray', linestyle=':', linewidth=1)

        ax.set_xlabel(X_LABEL)
        ax.set_ylabel(Y_LABEL)
        ax.set_title(title)
        ax.legend(loc='upper left')
        ax.xaxis.set_major_locator(mdates.YearLocator(5))
        ax.xaxis.set_major_formatter(mdates.DateFormatter('%Y'))
        fig.tight_layout()

        return _save(fig, output_path, dpi)


def plot_forecast_components(
    forecast: pd.DataFrame,
    output_path: Union[str, Path],
    figsize: Tuple[int, int] = (12, 8),
    dpi: int = 150
) -> Path:
    """Trend and yearly seasonal components of the forecast."""
    with plt.rc_context(PLOT_STYLE):
        fig, axes = plt.subplots(2, 1, figsize=figsize)

        axes[0].plot(forecast['ds'], forecast['trend'], color='#0072B2')
        axes[0].set_xlabel(X_LABEL)
        axes[0].set_ylabel('Trend (ppm)')
        axes[0].set_title('Trend')

        # One seasonal cycle, taken from the first twelve monthly rows
        cycle = forecast.head(12)
        months = pd.DatetimeIndex(cycle['ds']).month
        order = np.argsort(months)
        axes[1].plot(months[order], cycle['seasonal_year'].to_numpy()[order], marker='o', color='#0072B2')
        axes[1].axhline(y=0, color='black', linewidth=0.5)
        axes[1].set_xticks(range(1, 13))
        axes[1].set_xlabel('Month')
        axes[1].set_ylabel('Yearly seasonal (ppm)')
        axes[1].set_title('Yearly seasonality')

        fig.tight_layout()
        return _save(fig, output_path, dpi)


def plot_regression_window(
    series: pd.DataFrame,
    fit: RegressionFit,
    output_path: Union[str, Path],
    point_color: str = 'blue',
    line_color: str = 'red',
    figsize: Tuple[int, int] = (10, 6),
    dpi: int = 150
) -> Path:
    """
    Scatter of the observations inside the fit's window with the fitted line.

    Args:
        series: SeriesTable (``ds``, ``y``)
        fit: Period regression over a window of ``series``
        output_path: Path to save figure
        point_color: Scatter color
        line_color: Fitted line color
        figsize: Figure size
        dpi: Output resolution

    Returns:
        Path of the saved figure
    """
    mask = (series['ds'] >= fit.domain_start) & (series['ds'] <= fit.domain_end)
    window = series.loc[mask]

    with plt.rc_context(PLOT_STYLE):
        fig, ax = plt.subplots(figsize=figsize)

        ax.scatter(window['ds'], window['y'], color=point_color, s=18, label='Observed')
        ax.plot(
            window['ds'], fit.predict(window['ds']), color=line_color, linewidth=2,
            label=f"OLS fit ({fit.slope:.5f} ppm/day, {fit.slope_per_year:.3f} ppm/year)"
        )

        ax.set_xlabel(X_LABEL)
        ax.set_ylabel(Y_LABEL)
        ax.set_title(
            f"CO2 levels {fit.domain_start.strftime('%Y-%m')} to {fit.domain_end.strftime('%Y-%m')}"
        )
        ax.legend(loc='upper left')
        fig.tight_layout()

        return _save(fig, output_path, dpi)


def plot_month_year_matrix(
    matrix: pd.DataFrame,
    output_path: Union[str, Path],
    cmap: str = 'viridis',
    figsize: Tuple[int, int] = (12, 7),
    dpi: int = 150
) -> Path:
    """
    One line per year across months 1..12.

    Args:
        matrix: Month-by-year matrix from ``month_year_matrix``
        output_path: Path to save figure
        cmap: Colormap spanning the years
        figsize: Figure size
        dpi: Output resolution

    Returns:
        Path of the saved figure
    """
    years = list(matrix.columns)

    with plt.rc_context(PLOT_STYLE):
        fig, ax = plt.subplots(figsize=figsize)
        colormap = plt.get_cmap(cmap)
        norm = matplotlib.colors.Normalize(vmin=min(years), vmax=max(years))

        for year in years:
            ax.plot(matrix.index, matrix[year], color=colormap(norm(year)), linewidth=1)

        sm = matplotlib.cm.ScalarMappable(norm=norm, cmap=colormap)
        sm.set_array([])
        fig.colorbar(sm, ax=ax, label='Year')

        ax.set_xticks(range(1, 13))
        ax.set_xlabel('Month')
        ax.set_ylabel(Y_LABEL)
        ax.set_title('Monthly CO2 levels by year')
        fig.tight_layout()

        return _save(fig, output_path, dpi)


def plot_monthly_difference(
    differences: pd.DataFrame,
    output_path: Union[str, Path],
    figsize: Tuple[int, int] = (12, 5),
    dpi: int = 150
) -> Path:
    """Month-over-month change with a dashed zero reference."""
    with plt.rc_context(PLOT_STYLE):
        fig, ax = plt.subplots(figsize=figsize)

        ax.plot(differences['ds'], differences['diff'], color='steelblue', linewidth=1)
        ax.axhline(y=0, color='red', linestyle='--', linewidth=1)

        ax.set_xlabel(X_LABEL)
        ax.set_ylabel('Monthly change (ppm)')
        ax.set_title('Month-over-month change in CO2 levels')
        fig.tight_layout()

        return _save(fig, output_path, dpi)


def create_all_plots(
    result,
    output_dir: Union[str, Path],
    point_colors: Dict[str, str],
    line_color: str = 'red',
    fmt: str = 'png',
    dpi: int = 150
) -> Dict[str, Path]:
    """
    Render every static figure for a pipeline result.

    Args:
        result: PipelineResult
        output_dir: Directory for the figures
        point_colors: Scatter color per regression window name
        line_color: Fitted line color for the regression windows
        fmt: Image format extension
        dpi: Output resolution

    Returns:
        Figure name -> saved path
    """
    logger = get_logger()
    output_dir = Path(output_dir)
    paths = {}

    paths['forecast'] = plot_forecast(
        result.series, result.forecast, output_dir / f'forecast.{fmt}', dpi=dpi
    )
    paths['forecast_components'] = plot_forecast_components(
        result.forecast, output_dir / f'forecast_components.{fmt}', dpi=dpi
    )
    for name, fit in result.regressions.items():
        paths[f'regression_{name}'] = plot_regression_window(
            result.series, fit, output_dir / f'regression_{name}.{fmt}',
            point_color=point_colors.get(name, 'blue'), line_color=line_color, dpi=dpi
        )
    paths['month_year'] = plot_month_year_matrix(
        result.month_year, output_dir / f'month_year.{fmt}', dpi=dpi
    )
    paths['monthly_difference'] = plot_monthly_difference(
        result.differences, output_dir / f'monthly_difference.{fmt}', dpi=dpi
    )

    logger.info(f"Saved {len(paths)} figures to: {output_dir}")
    return paths
