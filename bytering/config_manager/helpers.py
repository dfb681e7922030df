"""Helpers for parsing byte-sized configuration values."""

from bytering.config_manager.buffer_config import RingBufferConfig
from bytering.const import (
    BYTES_PER_GIB,
    BYTES_PER_KIB,
    BYTES_PER_MIB,
    DEFAULT_CAPACITY,
    DEFAULT_SHORT_TRANSFER_LOG_INTERVAL,
)

_UNIT_MULTIPLIERS: dict[str, int] = {
    "b": 1,
    "k": BYTES_PER_KIB,
    "kb": BYTES_PER_KIB,
    "m": BYTES_PER_MIB,
    "mb": BYTES_PER_MIB,
    "g": BYTES_PER_GIB,
    "gb": BYTES_PER_GIB,
}


def parse_bytes(value: int | str) -> int:
    """Parse a byte quantity from an integer or unit-suffixed string.

    Supported string units (case-insensitive):
        b, k, kb, m, mb, g, gb

    Args:
        value: Raw byte value as an ``int`` or string with an optional unit
            suffix.

    Returns:
        The parsed value in bytes.

    Raises:
        ValueError: If the input cannot be parsed or contains an unknown unit.
    """
    if isinstance(value, int):
        return value

    normalized_value = str(value).strip().lower()

    if normalized_value.isdigit():
        return int(normalized_value)

    numeric_part = normalized_value.rstrip("abcdefghijklmnopqrstuvwxyz").strip()
    unit_suffix = normalized_value[len(numeric_part) :].strip()

    if not numeric_part.isdigit() or not unit_suffix:
        raise ValueError(f"Invalid byte value: {value!r}")

    multiplier = _UNIT_MULTIPLIERS.get(unit_suffix)
    if multiplier is None:
        raise ValueError(f"Unknown byte unit in value: {value!r}")

    return int(numeric_part) * multiplier


def build_default_buffer_config(
    capacity: int = DEFAULT_CAPACITY,
    short_transfer_log_interval: int = DEFAULT_SHORT_TRANSFER_LOG_INTERVAL,
) -> RingBufferConfig:
    """Build the configuration used when no profile is selected.

    Args:
        capacity: Buffer capacity in bytes.
        short_transfer_log_interval: Log every Nth short transfer.

    Returns:
        A RingBufferConfig populated with the given values.
    """
    return RingBufferConfig(
        capacity=capacity,
        short_transfer_log_interval=short_transfer_log_interval,
    )
