"""Configuration management."""
import os
import yaml
from pathlib import Path

from models.enums import Frequency

_config = None
_DEFAULT_CONFIG = Path(__file__).parent / "default_config.yaml"


def load_config(path=None):
    """Load config from YAML, merging defaults with optional overrides."""
    global _config

    with open(_DEFAULT_CONFIG, encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if path and Path(path).exists():
        with open(path, encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        config = _deep_merge(config, overrides)

    # Environment variable overrides: (section, key, type)
    env_map = {
        "DCASIM_SYMBOL": ("provider", "symbol", str),
        "DCASIM_MIN_POINTS": ("provider", "min_points", int),
        "DCASIM_SEED": ("provider", "seed", int),
        "DCASIM_FREQUENCY": ("simulation", "frequency", str),
        "DCASIM_LOG_LEVEL": ("logging", "level", str),
        "DCASIM_PORT": ("web", "port", int),
    }
    for env_key, (section, key, cast) in env_map.items():
        val = os.environ.get(env_key)
        if val:
            try:
                config.setdefault(section, {})[key] = cast(val)
            except ValueError:
                raise ValueError(f"{env_key} must be an integer, got {val!r}")

    _validate_config(config)
    _config = config
    return config


def get_config():
    """Return cached config, loading defaults if needed."""
    if _config is None:
        return load_config()
    return _config


def _deep_merge(base, override):
    """Recursively merge override into base dict."""
    result = base.copy()
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _validate_config(config):
    """Basic config validation."""
    required_sections = ["provider", "simulation", "web", "logging"]
    for section in required_sections:
        if section not in config:
            raise ValueError(f"Missing required config section: {section}")

    if config["provider"]["min_points"] < 1:
        raise ValueError("min_points must be >= 1")

    valid = {f.value for f in Frequency}
    if config["simulation"]["frequency"] not in valid:
        raise ValueError(f"frequency must be one of {sorted(valid)}")
