"""
Declared layout of an input series.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional

from ..core.config import DataConfig

SUPPORTED_CADENCES = ('monthly',)


@dataclass(frozen=True)
class SeriesSchema:
    """
    Declaration that accompanies a bare vector of observations.

    The values carry no timestamps of their own; the schema says where the
    series starts, how far apart observations are, and how many there are.
    """
    name: str = "co2"
    start_year: int = 1959
    start_month: int = 1
    cadence: str = "monthly"
    length: Optional[int] = 468
    unit: str = "ppm"

    @classmethod
    def from_config(cls, config: DataConfig) -> 'SeriesSchema':
        return cls(
            name=config.value_column,
            start_year=config.start_year,
            start_month=config.start_month,
            cadence=config.cadence,
            length=config.expected_length,
            unit=config.unit
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def create_default_schema() -> SeriesSchema:
    """Schema of the bundled Mauna Loa series, January 1959 to December 1997."""
    return SeriesSchema()
