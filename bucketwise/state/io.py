from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd
import yaml

from bucketwise.errors import ConfigError
from bucketwise.schemas import (
    CONFIG_FILE_NAME,
    JOURNAL_FIELDS,
    PLAN_CSV_FIELDS,
    STATE_DIR_NAME,
    BucketPlan,
    SortOptions,
)
from bucketwise.strategy.planner import plan_rows

# Options that only make sense per invocation, never from a config file
_RUNTIME_ONLY = {"path", "current_depth"}


def get_state_dir(root: Path) -> Path:
    """Return <root>/.bucketwise, creating it if needed."""
    state_dir = Path(root) / STATE_DIR_NAME
    state_dir.mkdir(parents=True, exist_ok=True)
    return state_dir


def find_config(root: Path, override_path: Optional[str] = None) -> Optional[Path]:
    """
    Locate the config file: an explicit path wins, otherwise
    <root>/bucketwise.yaml when it exists.
    """
    if override_path:
        return Path(override_path)
    candidate = Path(root) / CONFIG_FILE_NAME
    return candidate if candidate.exists() else None


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Load sort options from a YAML file.

    Keys are SortOptions field names; dashes are accepted in place of
    underscores (include-count: true). Example:

        split: true
        combine: true
        threshold: 25
        upper: true
        prefix: "_"

    Raises:
        ConfigError: unreadable file, invalid YAML, non-mapping document,
            unknown keys or values of the wrong type
    """
    try:
        with Path(config_path).open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {config_path} must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(SortOptions)}
    options: Dict[str, Any] = {}
    for raw_key, value in data.items():
        key = str(raw_key).replace("-", "_")
        if key not in known or key in _RUNTIME_ONLY:
            raise ConfigError(f"unknown option '{raw_key}' in {config_path}")

        default = getattr(SortOptions(), key)
        if isinstance(default, bool):
            if not isinstance(value, bool):
                raise ConfigError(f"option '{raw_key}' must be true or false")
        elif isinstance(default, int):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"option '{raw_key}' must be a non-negative integer")
        elif isinstance(default, str):
            value = "" if value is None else str(value)
        options[key] = value

    return options


def write_plan(plan: BucketPlan, out_path: Optional[Path] = None) -> Path:
    """
    Write Plan.csv: one row per file with its bucket, folder and target.

    Defaults to <root>/.bucketwise/Plan.csv.
    """
    path = Path(out_path) if out_path else get_state_dir(plan.root) / "Plan.csv"
    path.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(plan_rows(plan), columns=PLAN_CSV_FIELDS)
    df.to_csv(path, index=False)
    return path


def load_journal(root: Path) -> pd.DataFrame:
    """Load <root>/.bucketwise/journal.log into a DataFrame."""
    path = Path(root) / STATE_DIR_NAME / "journal.log"
    if not path.exists():
        raise FileNotFoundError(f"journal not found at: {path}")

    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    missing = [c for c in JOURNAL_FIELDS if c not in df.columns]
    if missing:
        raise ValueError(f"journal {path} missing required columns: {', '.join(missing)}")
    return df


def summarize_journal(df: pd.DataFrame) -> Dict[str, Dict[str, int]]:
    """Counts per Operation, then per Status: {"Move": {"OK": 10, "Error": 1}}."""
    if df.empty:
        return {}
    counts = df.groupby(["Operation", "Status"]).size()
    summary: Dict[str, Dict[str, int]] = {}
    for (operation, status), n in counts.items():
        summary.setdefault(operation, {})[status] = int(n)
    return summary
