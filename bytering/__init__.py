from .config_manager.buffer_config import RingBufferConfig
from .exceptions import AllocationError, RingBufferError, UsageError
from .ring_buffer import BufferState, RingBuffer

__version__ = "0.1.0"

__all__ = [
    "AllocationError",
    "BufferState",
    "RingBuffer",
    "RingBufferConfig",
    "RingBufferError",
    "UsageError",
]
