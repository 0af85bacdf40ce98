"""
Configuration management for the CO2 analysis pipeline.
"""
import yaml
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional
from pathlib import Path
from datetime import datetime


@dataclass
class DataConfig:
    """Input series configuration."""
    input_path: Optional[str] = None  # None -> bundled Mauna Loa series
    value_column: str = "co2"
    start_year: int = 1959
    start_month: int = 1
    cadence: str = "monthly"
    expected_length: Optional[int] = 468  # None -> taken from the data
    unit: str = "ppm"


@dataclass
class HorizonConfig:
    """Forecast horizon configuration."""
    periods: int = 12
    freq: str = "monthly"  # "monthly", "weekly" or "daily"


@dataclass
class RegressionWindow:
    """Inclusive date window for a period regression."""
    name: str
    lo: str
    hi: str
    color: str = "blue"


def _default_windows() -> List[RegressionWindow]:
    return [
        RegressionWindow(name="early", lo="1959-01-01", hi="1964-12-01", color="blue"),
        RegressionWindow(name="late", lo="1993-01-01", hi="1997-12-01", color="green"),
    ]


@dataclass
class RegressionConfig:
    """Period regression configuration."""
    windows: List[RegressionWindow] = field(default_factory=_default_windows)
    fit_color: str = "red"


@dataclass
class ForecastConfig:
    """Forecaster configuration. Unlisted hyperparameters keep library defaults."""
    model: str = "prophet"  # "prophet" or "unobserved_components"
    growth: str = "linear"
    seasonality_mode: str = "additive"
    yearly_seasonality: bool = True
    weekly_seasonality: bool = False
    daily_seasonality: bool = False


@dataclass
class OutputConfig:
    """Output configuration."""
    base_dir: str = "outputs"
    figure_dpi: int = 150
    figure_format: str = "png"
    interactive: bool = True


@dataclass
class Config:
    """Main configuration container."""
    data: DataConfig = field(default_factory=DataConfig)
    horizon: HorizonConfig = field(default_factory=HorizonConfig)
    regression: RegressionConfig = field(default_factory=RegressionConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int = 42
    run_id: Optional[str] = None

    def __post_init__(self):
        if self.run_id is None:
            self.run_id = datetime.now().strftime("run_%Y%m%d_%H%M")

    @property
    def run_dir(self) -> Path:
        return Path(self.output.base_dir) / "runs" / self.run_id

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, path: Optional[str] = None):
        if path is None:
            path = self.run_dir / "configs_snapshot" / "config.yaml"
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        regression = dict(data.get('regression') or {})
        if 'windows' in regression:
            regression['windows'] = [RegressionWindow(**w) for w in regression['windows']]
        return cls(
            data=DataConfig(**(data.get('data') or {})),
            horizon=HorizonConfig(**(data.get('horizon') or {})),
            regression=RegressionConfig(**regression),
            forecast=ForecastConfig(**(data.get('forecast') or {})),
            output=OutputConfig(**(data.get('output') or {})),
            seed=data.get('seed', 42),
            run_id=data.get('run_id')
        )

    @classmethod
    def load(cls, path: str) -> 'Config':
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)


def create_run_directories(config: Config) -> Dict[str, Path]:
    """Create all output directories for a run."""
    run_dir = config.run_dir
    dirs = {
        'root': run_dir,
        'logs': run_dir / 'logs',
        'tables': run_dir / 'tables',
        'figures': run_dir / 'figures',
        'configs_snapshot': run_dir / 'configs_snapshot'
    }
    for d in dirs.values():
        d.mkdir(parents=True, exist_ok=True)
    return dirs


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()
