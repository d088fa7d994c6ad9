"""disktrend - predict disk exhaustion from usage history."""

__version__ = "0.1.0"
