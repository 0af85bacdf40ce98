"""
Linear trend fits over the monthly series.

``fit_period`` regresses concentration on days since 1970-01-01 within an
inclusive date window, so its native slope unit is ppm/day. The rescaled
ppm/month (30.4375 days) and ppm/year (365.25 days) figures are derived from
that slope and labelled separately in the report.

``fit_linear_trend`` is the full-series OLS on decimal years with the
usual diagnostics.
"""
import numpy as np
import pandas as pd
import statsmodels.api as sm
from dataclasses import dataclass
from typing import Dict, Any, Optional

from ..core.errors import DegenerateFit, EmptySubset
from ..core.logging_utils import get_logger
from ..features.calendar import (
    DAYS_PER_MONTH, DAYS_PER_YEAR, DateLike, days_since_epoch, decimal_year, to_timestamp
)


@dataclass(frozen=True)
class RegressionFit:
    """OLS line ``y = slope * days_since_epoch + intercept`` over a date window."""
    name: str
    slope: float
    intercept: float
    n: int
    domain_start: pd.Timestamp
    domain_end: pd.Timestamp

    @property
    def slope_per_month(self) -> float:
        return self.slope * DAYS_PER_MONTH

    @property
    def slope_per_year(self) -> float:
        return self.slope * DAYS_PER_YEAR

    def predict(self, ds) -> np.ndarray:
        """Fitted values at the given timestamps."""
        return self.slope * days_since_epoch(ds) + self.intercept

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'slope_ppm_per_day': self.slope,
            'slope_ppm_per_month': self.slope_per_month,
            'slope_ppm_per_year': self.slope_per_year,
            'intercept': self.intercept,
            'n': self.n,
            'domain_start': self.domain_start.isoformat(),
            'domain_end': self.domain_end.isoformat()
        }


@dataclass(frozen=True)
class TrendDiagnostics:
    """Full-series OLS of concentration on decimal year."""
    intercept: float
    slope: float  # ppm/year
    slope_stderr: float
    r_squared: float
    adj_r_squared: float
    residual_std_error: float
    df_resid: int
    f_statistic: float
    f_pvalue: float
    n: int
    summary_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'intercept': self.intercept,
            'slope_ppm_per_year': self.slope,
            'slope_stderr': self.slope_stderr,
            'r_squared': self.r_squared,
            'adj_r_squared': self.adj_r_squared,
            'residual_std_error': self.residual_std_error,
            'df_resid': self.df_resid,
            'f_statistic': self.f_statistic,
            'f_pvalue': self.f_pvalue,
            'n': self.n
        }


def select_window(table: pd.DataFrame, lo: DateLike, hi: DateLike) -> pd.DataFrame:
    """Rows with ``lo <= ds <= hi``."""
    lo, hi = to_timestamp(lo), to_timestamp(hi)
    mask = (table['ds'] >= lo) & (table['ds'] <= hi)
    return table.loc[mask].reset_index(drop=True)


def fit_period(
    table: pd.DataFrame,
    lo: DateLike,
    hi: DateLike,
    name: Optional[str] = None
) -> RegressionFit:
    """
    Ordinary least squares over an inclusive date window.

    Args:
        table: SeriesTable with ``ds`` and ``y`` columns
        lo: First date in the window
        hi: Last date in the window
        name: Label for the fit (defaults to ``'lo..hi'``)

    Returns:
        RegressionFit with the slope in ppm/day

    Raises:
        EmptySubset: if no rows fall in the window
        DegenerateFit: if only one row falls in the window
    """
    logger = get_logger()
    lo_ts, hi_ts = to_timestamp(lo), to_timestamp(hi)
    label = name or f"{lo_ts.date()}..{hi_ts.date()}"

    subset = select_window(table, lo_ts, hi_ts)
    if subset.empty:
        raise EmptySubset(
            "Regression window selects no rows",
            {'window': label, 'lo': str(lo_ts.date()), 'hi': str(hi_ts.date())}
        )
    if len(subset) < 2:
        raise DegenerateFit(
            "Regression window needs at least 2 rows for a slope",
            {'window': label, 'rows': len(subset)}
        )

    x = days_since_epoch(subset['ds'])
    y = subset['y'].to_numpy(dtype=float)

    # Normal equations in centered form
    x_mean = x.mean()
    y_mean = y.mean()
    dx = x - x_mean
    slope = float(np.dot(dx, y - y_mean) / np.dot(dx, dx))
    intercept = float(y_mean - slope * x_mean)

    fit = RegressionFit(
        name=label,
        slope=slope,
        intercept=intercept,
        n=len(subset),
        domain_start=pd.Timestamp(subset['ds'].iloc[0]),
        domain_end=pd.Timestamp(subset['ds'].iloc[-1])
    )
    logger.info(
        f"Window {label}: n={fit.n}, slope={fit.slope:.6f} ppm/day "
        f"({fit.slope_per_year:.4f} ppm/year)"
    )
    return fit


def fit_linear_trend(table: pd.DataFrame) -> TrendDiagnostics:
    """
    OLS of ``y`` on decimal year over the whole series.

    Args:
        table: SeriesTable with ``ds`` and ``y`` columns

    Returns:
        TrendDiagnostics with coefficients, R², residual standard error and
        the F test
    """
    logger = get_logger()

    if len(table) < 3:
        raise DegenerateFit("Full-series trend needs at least 3 rows", {'rows': len(table)})

    exog = sm.add_constant(pd.Series(decimal_year(table['ds']), name='decimal_year'))
    endog = pd.Series(table['y'].to_numpy(dtype=float), name='co2')
    results = sm.OLS(endog, exog).fit()

    diagnostics = TrendDiagnostics(
        intercept=float(results.params['const']),
        slope=float(results.params['decimal_year']),
        slope_stderr=float(results.bse['decimal_year']),
        r_squared=float(results.rsquared),
        adj_r_squared=float(results.rsquared_adj),
        residual_std_error=float(np.sqrt(results.mse_resid)),
        df_resid=int(results.df_resid),
        f_statistic=float(results.fvalue),
        f_pvalue=float(results.f_pvalue),
        n=int(results.nobs),
        summary_text=results.summary().as_text()
    )
    logger.info(
        f"Full-series trend: {diagnostics.slope:.4f} ppm/year, "
        f"R²={diagnostics.r_squared:.4f}, RSE={diagnostics.residual_std_error:.3f}"
    )
    return diagnostics
