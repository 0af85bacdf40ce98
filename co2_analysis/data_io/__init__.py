"""
Data I/O module for the CO2 analysis pipeline.
"""
from .schema import SeriesSchema, create_default_schema, SUPPORTED_CADENCES
from .loader import (
    BUNDLED_DATA_PATH,
    load_series_csv,
    load_bundled_values,
    build_series_table,
    load_and_prepare_series
)

__all__ = [
    'SeriesSchema', 'create_default_schema', 'SUPPORTED_CADENCES',
    'BUNDLED_DATA_PATH', 'load_series_csv', 'load_bundled_values',
    'build_series_table', 'load_and_prepare_series'
]
