"""
Seeding and JSON output helpers.
"""
import json
import math
import numpy as np
import pandas as pd
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Union


def set_seed(seed: int = 42):
    """Seed numpy, which Prophet uses to sample its uncertainty intervals."""
    np.random.seed(seed)


def _json_key(key: Any) -> Union[str, int]:
    if isinstance(key, (int, np.integer)) and not isinstance(key, bool):
        return int(key)
    return str(key)


def to_jsonable(obj: Any) -> Any:
    """
    Recursively convert report values to plain JSON types.

    NaN becomes ``None``; timestamps become ISO strings; frames become lists of
    records; dataclasses become dicts.
    """
    if isinstance(obj, dict):
        return {_json_key(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    if isinstance(obj, pd.DataFrame):
        return to_jsonable(obj.to_dict(orient='records'))
    if isinstance(obj, pd.Series):
        return to_jsonable(obj.to_dict())
    if isinstance(obj, np.ndarray):
        return to_jsonable(obj.tolist())
    if isinstance(obj, (pd.Timestamp, np.datetime64)):
        return pd.Timestamp(obj).isoformat()
    if isinstance(obj, (bool, np.bool_)):
        return bool(obj)
    if isinstance(obj, (int, np.integer)):
        return int(obj)
    if isinstance(obj, (float, np.floating)):
        return None if math.isnan(obj) else float(obj)
    if is_dataclass(obj) and not isinstance(obj, type):
        return to_jsonable(asdict(obj))
    if isinstance(obj, Path):
        return str(obj)
    return obj


def save_json_numpy(data: Any, path: Union[str, Path], indent: int = 2):
    """Write ``data`` as JSON, converting numpy and pandas values first."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(to_jsonable(data), f, indent=indent)
