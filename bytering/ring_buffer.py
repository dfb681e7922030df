"""Fixed-capacity byte ring buffer with short-transfer semantics."""

from __future__ import annotations

import logging
import operator
from enum import Enum
from typing import TYPE_CHECKING, Any

from bytering.const import DEFAULT_SHORT_TRANSFER_LOG_INTERVAL
from bytering.exceptions import AllocationError, UsageError
from bytering.sampled_logger import make_sampled_logger

if TYPE_CHECKING:
    from bytering.config_manager.buffer_config import RingBufferConfig

logger = logging.getLogger(__name__)


class BufferState(str, Enum):
    """Occupancy state of a ring buffer.

    ``head == tail`` holds both when the buffer is empty and when it is full,
    so the state is what tells the two apart. Full is OCCUPIED with
    ``head == tail``.
    """

    EMPTY = "empty"
    OCCUPIED = "occupied"


def _allocate_storage(capacity: int) -> bytearray:
    """Allocate zeroed backing storage of exactly ``capacity`` bytes.

    Raises:
        AllocationError: If the interpreter cannot provide the memory.
    """
    try:
        return bytearray(capacity)
    except (MemoryError, OverflowError) as exc:
        raise AllocationError(
            f"Unable to allocate {capacity} bytes of ring buffer storage"
        ) from exc


def _byte_view(data: Any, *, writable: bool = False) -> memoryview:
    """Return a flat unsigned-byte view over a bytes-like object."""
    view = memoryview(data)
    if writable and view.readonly:
        raise TypeError("destination must be a writable bytes-like object")
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


class RingBuffer:
    """Byte-oriented FIFO over a single fixed-size allocation.

    - Inserts never overwrite unread bytes and extracts never block; both
      return the number of bytes actually moved.
    - Not thread-safe. Callers sharing a buffer between a producer and a
      consumer must serialise calls themselves.
    """

    def __init__(
        self,
        capacity: int,
        short_transfer_log_interval: int = DEFAULT_SHORT_TRANSFER_LOG_INTERVAL,
    ) -> None:
        """Initialize the ring buffer.

        Args:
            capacity: Number of bytes the buffer can hold. Zero is allowed and
                yields a buffer that never accepts data.
            short_transfer_log_interval: Log every Nth short transfer of each
                kind (inserts and extracts are counted separately).

        Raises:
            TypeError: If capacity is not an integer.
            ValueError: If capacity is negative.
            AllocationError: If the storage cannot be allocated.
        """
        capacity = operator.index(capacity)
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")

        self._storage: bytearray | None = _allocate_storage(capacity)
        self._view: memoryview | None = memoryview(self._storage)
        self._capacity = capacity
        self._head = 0
        self._tail = 0
        self._state = BufferState.EMPTY
        self._log_short_transfer = make_sampled_logger(
            "Short transfer #%d (%s) on %r: moved %d of %d bytes",
            log_interval=short_transfer_log_interval,
            target_logger=logger,
        )
        logger.debug("Allocated ring buffer with capacity=%d", capacity)

    @classmethod
    def from_config(cls, config: RingBufferConfig) -> RingBuffer:
        """Build a ring buffer from a resolved configuration."""
        return cls(
            config.capacity,
            short_transfer_log_interval=config.short_transfer_log_interval,
        )

    def __enter__(self) -> RingBuffer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destruct()

    def __len__(self) -> int:
        return self.available()

    def __repr__(self) -> str:
        if self._view is None:
            return f"<RingBuffer released capacity={self._capacity}>"
        return (
            f"<RingBuffer {self.available()}/{self._capacity} {self._state.value}>"
        )

    @property
    def capacity(self) -> int:
        """Total number of byte slots."""
        return self._capacity

    @property
    def head(self) -> int:
        """Offset of the next byte to read."""
        return self._head

    @property
    def tail(self) -> int:
        """Offset of the next slot to write."""
        return self._tail

    @property
    def state(self) -> BufferState:
        """Current occupancy state."""
        return self._state

    def _require_view(self) -> memoryview:
        if self._view is None:
            raise UsageError("ring buffer has been destructed")
        return self._view

    def _sample_short(self, kind: str, moved: int, requested: int) -> None:
        self._log_short_transfer(kind, kind, self, moved, requested)

    def is_empty(self) -> bool:
        """Return True when no unread bytes are stored."""
        self._require_view()
        return self._state is BufferState.EMPTY

    def is_full(self) -> bool:
        """Return True when every slot holds an unread byte."""
        return not self.is_empty() and self._head == self._tail

    def available(self) -> int:
        """Return number of bytes available to read."""
        self._require_view()
        if self._state is BufferState.EMPTY:
            return 0
        if self._tail > self._head:
            return self._tail - self._head
        return self._capacity - self._head + self._tail

    def free_space(self) -> int:
        """Return number of bytes that can be inserted before the buffer is full."""
        return self._capacity - self.available()

    def insert_range(self, source: Any) -> int:
        """Copy as many bytes of ``source`` as fit, starting at the tail.

        At most two contiguous copies happen: one from the tail up to the
        physical end of storage (only when the free region reaches it), then
        one from the wrapped tail up to the head.

        Args:
            source: Any bytes-like object.

        Returns:
            The number of bytes copied. It is smaller than ``len(source)`` when
            the buffer fills up; the remaining bytes stay with the caller.

        Raises:
            UsageError: If the buffer has been destructed.
        """
        storage = self._require_view()
        data = _byte_view(source)
        requested = len(data)
        if requested == 0:
            return 0
        if self.is_full():
            self._sample_short("insert", 0, requested)
            return 0

        copied = 0
        if self._tail >= self._head:
            run = min(self._capacity - self._tail, requested)
            storage[self._tail : self._tail + run] = data[:run]
            self._tail += run
            if self._tail == self._capacity:
                self._tail = 0
            copied = run

        if copied < requested:
            run = min(self._head - self._tail, requested - copied)
            storage[self._tail : self._tail + run] = data[copied : copied + run]
            self._tail += run
            copied += run

        if copied:
            self._state = BufferState.OCCUPIED
        if copied < requested:
            self._sample_short("insert", copied, requested)
        return copied

    def insert_value(self, value: int) -> bool:
        """Insert a single byte.

        Args:
            value: Integer in ``range(256)``.

        Returns:
            Whether the byte was accepted (False iff the buffer was full).

        Raises:
            ValueError: If value is not a valid byte.
        """
        value = operator.index(value)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte value must be in range(0, 256), got {value}")
        return self.insert_range(bytes((value,))) == 1

    def extract_range(self, destination: Any) -> int:
        """Move as many stored bytes as fit into the prefix of ``destination``.

        Mirrors :meth:`insert_range`: one copy from the head up to the physical
        end of storage (only when the stored region reaches it), then one from
        the wrapped head up to the tail. The buffer becomes empty as soon as
        the head catches up with the tail.

        Args:
            destination: A writable bytes-like object. Bytes past the returned
                count are left untouched.

        Returns:
            The number of bytes copied.

        Raises:
            TypeError: If destination is read-only.
            UsageError: If the buffer has been destructed.
        """
        storage = self._require_view()
        out = _byte_view(destination, writable=True)
        requested = len(out)
        if requested == 0:
            return 0
        if self.is_empty():
            self._sample_short("extract", 0, requested)
            return 0

        copied = 0
        if self._head >= self._tail:
            run = min(self._capacity - self._head, requested)
            out[:run] = storage[self._head : self._head + run]
            self._head += run
            if self._head == self._capacity:
                self._head = 0
            copied = run
            if self._head == self._tail:
                self._state = BufferState.EMPTY

        if copied < requested and self._state is BufferState.OCCUPIED:
            run = min(self._tail - self._head, requested - copied)
            out[copied : copied + run] = storage[self._head : self._head + run]
            self._head += run
            copied += run
            if self._head == self._tail:
                self._state = BufferState.EMPTY

        if copied < requested:
            self._sample_short("extract", copied, requested)
        return copied

    def extract_value(self) -> int:
        """Remove and return the oldest byte.

        Raises:
            UsageError: If the buffer is empty. Check :meth:`is_empty` first.
        """
        if self.is_empty():
            raise UsageError("extract_value() called on an empty ring buffer")
        scratch = bytearray(1)
        self.extract_range(scratch)
        return scratch[0]

    def extract_bytes(self, max_count: int) -> bytes:
        """Remove and return up to ``max_count`` of the oldest bytes.

        Returns:
            The extracted bytes; shorter than ``max_count`` when fewer were
            stored, empty when the buffer was empty.
        """
        max_count = operator.index(max_count)
        if max_count < 0:
            raise ValueError(f"max_count must be non-negative, got {max_count}")
        scratch = bytearray(min(max_count, self.available()))
        moved = self.extract_range(scratch)
        return bytes(scratch[:moved])

    def destruct(self) -> None:
        """Release the backing storage.

        Calling it again is a no-op. Any other operation afterwards raises
        UsageError.
        """
        if self._view is None:
            return
        self._view.release()
        self._view = None
        self._storage = None
        self._head = 0
        self._tail = 0
        self._state = BufferState.EMPTY
        logger.debug("Released ring buffer with capacity=%d", self._capacity)
