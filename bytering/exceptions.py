"""Exception classes for ring buffer operations."""


class RingBufferError(Exception):
    """Base error for ring buffer operations."""


class AllocationError(RingBufferError):
    """Raised when the backing storage of a ring buffer cannot be allocated."""


class UsageError(RingBufferError):
    """Raised when an operation is called while its precondition does not hold.

    Examples are extracting a single value from an empty buffer, or using a
    buffer after it has been destructed.
    """
