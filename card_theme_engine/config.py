"""
Load CLI / batch configuration (YAML). Library functions take plain
arguments; only the command line tools read this.
"""
import copy
from pathlib import Path

import yaml

from .errors import ConfigError

_DEFAULTS = {
    "variations": {"max_variants": 10, "max_attempts": 15},
    "preview": {"scale": 1.0, "columns": 5, "padding": 16},
    "report": {"large_text_size": 18},
    "logging": {"level": "WARNING"},
}


def default_config():
    return copy.deepcopy(_DEFAULTS)


def _merge(base, override):
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path=None):
    """Load config from YAML merged over the defaults.

    A missing file (or no path) gives the defaults; a file that is not valid
    YAML or not a mapping raises ConfigError.
    """
    if config_path is None:
        return default_config()
    path = Path(config_path)
    if not path.exists():
        return default_config()
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    return _merge(default_config(), data)
