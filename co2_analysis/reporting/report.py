"""
Plain-text report for a pipeline run.
"""
import pandas as pd
from typing import List

from ..evaluation.summary import summary_frame, slope_ratio

RULE = "=" * 72
SUBRULE = "-" * 72


def _format_pvalue(p: float) -> str:
    if p < 2.2e-16:
        return "< 2.2e-16"
    return f"{p:.4g}"


def _section(title: str) -> List[str]:
    return ["", title, SUBRULE]


def render_text_report(result) -> str:
    """
    Render the summaries, regression slopes and trend diagnostics of a run.

    Args:
        result: PipelineResult

    Returns:
        Multi-line report text
    """
    lines = [RULE, "CO2 CONCENTRATION ANALYSIS", RULE]

    meta = result.metadata
    lines.append(f"Source:     {meta.get('source')}")
    lines.append(f"Rows:       {meta.get('n_rows')}")
    lines.append(f"Date range: {meta.get('date_range')}")

    # Summaries
    lines += _section("Summary statistics")
    with pd.option_context('display.width', 120, 'display.float_format', '{:.3f}'.format):
        lines.append(summary_frame(result.series_summary, result.forecast_summary).to_string())
    for stats in (result.series_summary, result.forecast_summary):
        if stats.date_start is not None:
            lines.append(
                f"{stats.name}: {stats.date_start.strftime('%Y-%m-%d')} to "
                f"{stats.date_end.strftime('%Y-%m-%d')} (n={stats.n})"
            )

    # Period regressions
    lines += _section("Period regressions (x = days since 1970-01-01)")
    fits = list(result.regressions.values())
    for fit in fits:
        lines.append(
            f"{fit.name:<8} {fit.domain_start.strftime('%Y-%m')}..{fit.domain_end.strftime('%Y-%m')}  "
            f"n={fit.n:<4d} intercept={fit.intercept:.4f}"
        )
        lines.append(
            f"{'':<8} slope={fit.slope:.6f} ppm/day  "
            f"{fit.slope_per_month:.4f} ppm/month  {fit.slope_per_year:.4f} ppm/year"
        )
    if len(fits) >= 2:
        ratio = slope_ratio(fits[0].slope, fits[-1].slope)
        lines.append(f"Slope ratio {fits[-1].name}/{fits[0].name}: {ratio:.3f}")

    # Full-series trend
    trend = result.trend
    lines += _section("Full-series linear trend (x = decimal year)")
    lines.append(f"Intercept:  {trend.intercept:.4f}")
    lines.append(f"Slope:      {trend.slope:.4f} ppm/year (SE {trend.slope_stderr:.5f})")
    lines.append(
        f"Residual standard error: {trend.residual_std_error:.4f} on {trend.df_resid} degrees of freedom"
    )
    lines.append(
        f"Multiple R-squared: {trend.r_squared:.5f}, Adjusted R-squared: {trend.adj_r_squared:.5f}"
    )
    lines.append(
        f"F-statistic: {trend.f_statistic:.1f} on 1 and {trend.df_resid} DF, "
        f"p-value: {_format_pvalue(trend.f_pvalue)}"
    )

    # Forecast fit
    metrics = result.fit_metrics
    lines += _section("In-sample forecast fit")
    if metrics.n_samples:
        lines.append(
            f"MAE={metrics.mae:.3f}  RMSE={metrics.rmse:.3f}  MAPE={metrics.mape:.3f}%  "
            f"R2={metrics.r2:.4f}  bias={metrics.bias:.4f}"
        )
        lines.append(f"Interval coverage: {metrics.coverage:.1%} over {metrics.n_samples} rows")
    else:
        lines.append("No overlapping rows")

    horizon_rows = len(result.forecast) - len(result.series)
    lines.append(f"Forecast rows beyond history: {horizon_rows}")

    lines.append(RULE)
    return "\n".join(lines)
