"""
Series loading for the CO2 analysis pipeline.
"""
import pandas as pd
import numpy as np
from pathlib import Path
from typing import Optional, Tuple, Dict, Any, Sequence, Union

from ..core.config import DataConfig
from ..core.errors import InvalidCadence, LengthMismatch, MissingValue, NonPositiveValue
from ..core.logging_utils import get_logger
from ..features.calendar import monthly_stamps
from ..quality.audit import validate_series_table
from .schema import SeriesSchema, SUPPORTED_CADENCES

BUNDLED_DATA_PATH = Path(__file__).parent / 'data' / 'co2_mauna_loa_monthly.csv'


def load_series_csv(path: Union[str, Path], column: str = 'co2') -> pd.Series:
    """
    Load a one-column monthly series from CSV.

    Args:
        path: CSV file path
        column: Name of the value column

    Returns:
        Values in file order; unparseable cells become NaN
    """
    logger = get_logger()
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    df = pd.read_csv(path)
    if column not in df.columns:
        raise ValueError(f"Column '{column}' not found in {path}. Columns: {list(df.columns)}")

    values = pd.to_numeric(df[column], errors='coerce')
    values.name = column
    logger.info(f"Loaded {len(values)} values from: {path}")
    return values


def load_bundled_values() -> pd.Series:
    """Monthly Mauna Loa CO2 concentrations (ppm), January 1959 to December 1997."""
    return load_series_csv(BUNDLED_DATA_PATH, column='co2')


def build_series_table(
    values: Union[pd.Series, Sequence[float], np.ndarray],
    schema: SeriesSchema
) -> pd.DataFrame:
    """
    Turn a bare vector of monthly observations into a SeriesTable.

    Row i gets ``ds = start + i months`` and ``y = values[i]``.

    Args:
        values: Observations in time order
        schema: Declared start, cadence and length

    Returns:
        DataFrame with ``ds`` (month start) and ``y`` (float) columns
    """
    logger = get_logger()

    if schema.cadence not in SUPPORTED_CADENCES:
        raise InvalidCadence(
            f"Declared cadence must be one of {list(SUPPORTED_CADENCES)}",
            {'cadence': schema.cadence}
        )

    y = pd.to_numeric(pd.Series(values, dtype=object), errors='coerce').to_numpy(dtype=float)

    if len(y) == 0:
        raise LengthMismatch("Series is empty", {'declared': schema.length, 'actual': 0})
    if schema.length is not None and schema.length != len(y):
        raise LengthMismatch(
            "Declared length does not match the number of values",
            {'declared': schema.length, 'actual': len(y)}
        )

    missing = np.isnan(y)
    if missing.any():
        positions = np.flatnonzero(missing)
        raise MissingValue(
            f"{len(positions)} absent observation(s); imputation is not performed",
            {'positions': positions[:10].tolist()}
        )
    non_positive = y <= 0
    if non_positive.any():
        positions = np.flatnonzero(non_positive)
        raise NonPositiveValue(
            f"{len(positions)} non-positive observation(s)",
            {'positions': positions[:10].tolist()}
        )

    ds = monthly_stamps(schema.start_year, schema.start_month, len(y))
    table = pd.DataFrame({'ds': ds.to_numpy(), 'y': y})
    validate_series_table(table)

    logger.info(
        f"Series '{schema.name}': {len(table)} {schema.cadence} observations "
        f"({ds[0].strftime('%Y-%m')} to {ds[-1].strftime('%Y-%m')}), unit {schema.unit}"
    )
    return table


def load_and_prepare_series(
    config: Optional[DataConfig] = None
) -> Tuple[pd.DataFrame, Dict[str, Any]]:
    """
    Main function to load and prepare the series.

    Args:
        config: Data configuration (defaults to the bundled series)

    Returns:
        Tuple of (SeriesTable, metadata dict)
    """
    config = config or DataConfig()
    schema = SeriesSchema.from_config(config)

    if config.input_path:
        values = load_series_csv(config.input_path, column=config.value_column)
        source = str(config.input_path)
    else:
        values = load_bundled_values()
        source = 'bundled'

    table = build_series_table(values, schema)

    metadata = {
        'source': source,
        'schema': schema.to_dict(),
        'n_rows': len(table),
        'date_range': {
            'start': str(table['ds'].iloc[0].date()),
            'end': str(table['ds'].iloc[-1].date())
        }
    }
    return table, metadata
