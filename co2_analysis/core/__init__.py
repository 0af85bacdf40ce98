"""
Core module for the CO2 analysis pipeline.
"""
from .config import (
    Config,
    DataConfig,
    HorizonConfig,
    RegressionWindow,
    RegressionConfig,
    ForecastConfig,
    OutputConfig,
    create_run_directories,
    get_default_config
)
from .errors import (
    PipelineError,
    InvalidCadence,
    LengthMismatch,
    MissingValue,
    NonMonotoneTimestamps,
    NonPositiveValue,
    UnknownFrequency,
    InvalidHorizon,
    EmptySubset,
    DegenerateFit
)
from .logging_utils import setup_logging, get_logger, LogContext
from .utils import set_seed, save_json_numpy

__all__ = [
    'Config', 'DataConfig', 'HorizonConfig', 'RegressionWindow', 'RegressionConfig',
    'ForecastConfig', 'OutputConfig', 'create_run_directories', 'get_default_config',
    'PipelineError', 'InvalidCadence', 'LengthMismatch', 'MissingValue',
    'NonMonotoneTimestamps', 'NonPositiveValue', 'UnknownFrequency', 'InvalidHorizon',
    'EmptySubset', 'DegenerateFit',
    'setup_logging', 'get_logger', 'LogContext',
    'set_seed', 'save_json_numpy'
]
