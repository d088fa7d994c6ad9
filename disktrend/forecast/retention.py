"""Retention window for sample histories."""

from disktrend.forecast.samples import History

RETENTION_DAYS = 7
RETENTION_SECONDS = RETENTION_DAYS * 24 * 3600


def prune(history: History, now: int, retention: int = RETENTION_SECONDS) -> History:
    """
    Drop samples that have aged out of the retention window.

    A sample is kept while timestamp + retention > now. Order is preserved.

    Args:
        history: Samples, oldest first
        now: Current time in epoch seconds
        retention: Window length in seconds

    Returns:
        New list with the surviving samples
    """
    return [s for s in history if s.timestamp + retention > now]
