"""Core disktrend functionality."""

from disktrend.core.config import ConfigError, load_config
from disktrend.core.context import Context
from disktrend.core.logging import CheckLogger
from disktrend.core.output import Output

__all__ = [
    "CheckLogger",
    "ConfigError",
    "Context",
    "Output",
    "load_config",
]
