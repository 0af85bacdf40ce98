"""
CO2 Analysis
============

Analysis of the monthly Mauna Loa atmospheric CO2 series with:
- Validated loading of the fixed-cadence series
- Prophet forecasting over an extended horizon (statsmodels state-space alternative)
- Period regressions comparing the trend slope of two windows
- Month-by-year seasonal aggregation and first differences
- Descriptive summaries, static and interactive figures

Modules:
    core: Configuration, errors, logging and utilities
    data_io: Series schema and loading
    quality: Series validation and quality report
    features: Calendar arithmetic, horizon and seasonal aggregation
    models: Forecasters and linear regressions
    evaluation: Summary statistics and in-sample fit metrics
    reporting: Figures and the text report
    pipeline: End-to-end run
"""

__version__ = "1.0.0"
__author__ = "CO2 Analysis Team"

from . import core
from . import data_io
from . import quality
from . import features
from . import models
from . import evaluation
from . import reporting
from . import pipeline
