"""Configuration loading with layered overrides."""

from pathlib import Path
from typing import Any

import yaml


class ConfigError(Exception):
    """Error loading or validating a config file."""

    pass


DEFAULT_EXCLUDE = "tmpfs|devtmpfs|squashfs|overlay|proc|sysfs|devpts|cgroup|cgroup2|efivarfs|fuse.lxcfs"

# Built-in defaults; also the set of accepted keys
DEFAULTS: dict[str, Any] = {
    "time": 12.0,
    "exclude": DEFAULT_EXCLUDE,
    "data_dir": "/tmp/disktrend",
    "fluctuation_threshold": 1.0,
    "retention_days": 7,
    "log_dir": None,
}


def user_config_path() -> Path:
    """Location of the per-user config file."""
    return Path.home() / ".config" / "disktrend" / "config.yaml"


def load_config_file(path: Path, required: bool = False) -> dict[str, Any]:
    """
    Load a YAML config file.

    Args:
        path: Path to the config file
        required: Raise if the file does not exist

    Returns:
        Mapping of config keys found in the file (empty if absent)

    Raises:
        ConfigError: If the file is unreadable or not a mapping, or has unknown
            keys or values of the wrong type
    """
    path = Path(path)
    if not path.exists():
        if required:
            raise ConfigError(f"Config file not found: {path}")
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a YAML mapping: {path}")

    unknown = set(data) - set(DEFAULTS)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(sorted(unknown))}")

    _check_types(data, path)
    return data


def _check_types(data: dict[str, Any], path: Path) -> None:
    """Reject values the loaders downstream cannot use."""
    if "exclude" in data:
        exclude = data["exclude"]
        is_list = isinstance(exclude, list) and all(isinstance(t, str) for t in exclude)
        if exclude is not None and not isinstance(exclude, str) and not is_list:
            raise ConfigError(f"'exclude' must be a string or a list of strings in {path}")

    if "data_dir" in data and not isinstance(data["data_dir"], str):
        raise ConfigError(f"'data_dir' must be a string in {path}")

    if data.get("log_dir") is not None and not isinstance(data["log_dir"], str):
        raise ConfigError(f"'log_dir' must be a string in {path}")


def load_config(config_path: Path | None = None, user_config: Path | None = None) -> dict[str, Any]:
    """
    Build the effective config: defaults -> user file -> explicit file.

    Args:
        config_path: Explicit config file (must exist when given)
        user_config: Override for the user config location

    Returns:
        Complete config mapping with every key in DEFAULTS
    """
    config = dict(DEFAULTS)

    if user_config is None:
        user_config = user_config_path()
    config.update(load_config_file(user_config))

    if config_path is not None:
        config.update(load_config_file(config_path, required=True))

    return config
