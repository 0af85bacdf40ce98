"""
Interactive HTML version of the forecast figure.
"""
import pandas as pd
import plotly.graph_objects as go
from pathlib import Path
from typing import Optional, Union

from ..core.logging_utils import get_logger


def build_forecast_figure(
    series: pd.DataFrame,
    forecast: pd.DataFrame,
    title: str = 'CO2 Forecast'
) -> go.Figure:
    """
    Observations, forecast line and a filled uncertainty band with hover.

    Args:
        series: SeriesTable (``ds``, ``y``)
        forecast: ForecastTable
        title: Figure title

    Returns:
        Plotly figure object
    """
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=forecast['ds'],
        y=forecast['yhat_upper'],
        mode='lines',
        name='Upper bound',
        line=dict(width=0),
        showlegend=False,
        hoverinfo='skip'
    ))
    fig.add_trace(go.Scatter(
        x=forecast['ds'],
        y=forecast['yhat_lower'],
        mode='lines',
        name='Uncertainty interval',
        line=dict(width=0),
        fill='tonexty',
        fillcolor='rgba(0,114,178,0.2)',
        hoverinfo='skip'
    ))
    fig.add_trace(go.Scatter(
        x=forecast['ds'],
        y=forecast['yhat'],
        mode='lines',
        name='Forecast',
        line=dict(color='#0072B2'),
        hovertemplate='%{x|%Y-%m}: %{y:.2f} ppm<extra>forecast</extra>'
    ))
    fig.add_trace(go.Scatter(
        x=series['ds'],
        y=series['y'],
        mode='lines',
        name='Observed',
        line=dict(color='black', width=1),
        hovertemplate='%{x|%Y-%m}: %{y:.2f} ppm<extra>observed</extra>'
    ))

    fig.update_layout(
        title=title,
        xaxis_title='Date',
        yaxis_title='CO2 levels ppm',
        hovermode='x unified',
        template='plotly_white'
    )
    return fig


def write_forecast_html(
    series: pd.DataFrame,
    forecast: pd.DataFrame,
    output_path: Union[str, Path],
    title: Optional[str] = None
) -> Path:
    """Write the interactive forecast figure as a standalone HTML page."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig = build_forecast_figure(series, forecast, title=title or 'CO2 Forecast')
    fig.write_html(str(output_path), include_plotlyjs='cdn')

    get_logger().info(f"Saved interactive forecast: {output_path}")
    return output_path
