"""Pydantic models for ring buffer configuration."""

from pydantic import BaseModel, Field

from bytering.const import DEFAULT_CAPACITY, DEFAULT_SHORT_TRANSFER_LOG_INTERVAL


class RingBufferConfig(BaseModel):
    """Configuration options for a ring buffer instance.

    Attributes:
        capacity: number of bytes the buffer holds.
        short_transfer_log_interval: log every Nth short insert or extract.
    """

    capacity: int = Field(default=DEFAULT_CAPACITY, ge=0)
    short_transfer_log_interval: int = Field(
        default=DEFAULT_SHORT_TRANSFER_LOG_INTERVAL, ge=1
    )
