"""Sampled logger for high-frequency log messages.

Provides utilities to reduce log spam by only logging at configurable intervals.
"""

import logging
from collections.abc import Callable

from bytering.const import DEFAULT_SHORT_TRANSFER_LOG_INTERVAL

logger = logging.getLogger(__name__)


def make_sampled_logger(
    log_format: str,
    log_interval: int = DEFAULT_SHORT_TRANSFER_LOG_INTERVAL,
    target_logger: logging.Logger | None = None,
    level: int = logging.DEBUG,
) -> Callable[..., None]:
    """Create a sampled logger that logs the first and every Nth occurrence.

    Occurrences are counted separately for each event key, so a noisy event
    kind does not hide the first occurrence of another one.

    Args:
        log_format: Format string for the log message. First placeholder receives
                    the occurrence number, remaining placeholders receive
                    format_args.
        log_interval: Log every Nth occurrence of a key (default 1000)
        target_logger: Logger instance to use (default: module logger)
        level: Log level to use (default: DEBUG)

    Returns:
        A function: (event_key, *format_args) -> None

    Raises:
        ValueError: If log_interval is smaller than 1.
    """
    if log_interval < 1:
        raise ValueError(f"log_interval must be >= 1, got {log_interval}")

    occurrences: dict[str, int] = {}
    _logger = target_logger or logger

    def log_sampled(event_key: str, *format_args: object) -> None:
        count = occurrences.get(event_key, 0) + 1
        occurrences[event_key] = count

        if count == 1 or count % log_interval == 0:
            _logger.log(level, log_format, count, *format_args)

    return log_sampled
