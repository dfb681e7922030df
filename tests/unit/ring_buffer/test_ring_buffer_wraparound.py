"""Level 2: Wraparound and Partial Transfer Tests.

Tests for the two-segment copy logic:
- Cursor positions across the physical end of storage
- Inserts bounded by the read cursor
- Extracts that drain inside the first segment
- Short transfers leaving caller data untouched
- FIFO order under randomized insert/extract interleavings
"""

from __future__ import annotations

import random
from collections import deque

import pytest

from bytering.ring_buffer import BufferState, RingBuffer

# =============================================================================
# L2-001 to L2-004: Two-Segment Copies
# =============================================================================


def test_insert_wraps_tail_and_stops_at_head() -> None:
    """Insert splits at the physical end and stops at the read cursor.

    Layout before: head=4, tail=6 in an 8-byte buffer. Two bytes fit before
    the end, four more after wrapping.
    """
    ring = RingBuffer(8)
    ring.insert_range(b"abcdef")
    assert ring.extract_bytes(4) == b"abcd"
    assert (ring.head, ring.tail) == (4, 6)

    assert ring.insert_range(b"123456") == 6

    assert ring.tail == 4
    assert ring.head == 4
    assert ring.is_full()


def test_extract_wraps_head_and_drains_at_tail() -> None:
    """Extract reads to the physical end, wraps, then stops at the tail."""
    ring = RingBuffer(8)
    ring.insert_range(b"abcdef")
    ring.extract_bytes(4)
    ring.insert_range(b"123456")

    out = bytearray(8)
    assert ring.extract_range(out) == 8

    assert out == b"ef123456"
    assert ring.is_empty()
    assert (ring.head, ring.tail) == (4, 4)


def test_first_segment_alone_can_drain_buffer() -> None:
    """Emptiness is detected after the first segment, not only at the end.

    Stored bytes sit at offsets 3..4, the tail has wrapped to 0. Reading them
    wraps the head to 0 as well, which drains the buffer even though the
    destination has room left.
    """
    ring = RingBuffer(5)
    ring.insert_range(b"abc")
    ring.extract_bytes(3)
    assert ring.insert_range(b"xy") == 2
    assert (ring.head, ring.tail) == (3, 0)

    out = bytearray(4)
    assert ring.extract_range(out) == 2

    assert out == b"xy\x00\x00"
    assert ring.is_empty()
    assert (ring.head, ring.tail) == (0, 0)

    # The buffer is fully usable again afterwards.
    assert ring.insert_range(b"12345") == 5
    assert ring.is_full()


def test_insert_with_tail_behind_head_uses_single_segment() -> None:
    """With the tail behind the head only the gap between them is free."""
    ring = RingBuffer(6)
    ring.insert_range(b"abcdef")
    ring.extract_bytes(5)
    ring.insert_range(b"gh")
    assert (ring.head, ring.tail) == (5, 2)

    assert ring.insert_range(b"zzzz") == 3

    assert ring.is_full()
    assert ring.extract_bytes(6) == b"fghzzz"


# =============================================================================
# L2-005 to L2-007: Partial Transfers
# =============================================================================


def test_oversized_insert_returns_free_space() -> None:
    """Inserting more than fits moves exactly the free space."""
    ring = RingBuffer(6)
    ring.insert_range(b"abcd")
    ring.extract_bytes(3)
    assert ring.free_space() == 5

    source = bytearray(b"0123456789")
    original = bytes(source)

    assert ring.insert_range(source) == 5

    assert ring.is_full()
    assert source == original
    assert ring.extract_bytes(6) == b"d01234"


def test_caller_resumes_with_unconsumed_suffix() -> None:
    """Short writes let the caller continue from the returned offset."""
    ring = RingBuffer(4)
    payload = b"streaming-payload"
    received = bytearray()

    offset = 0
    while offset < len(payload):
        offset += ring.insert_range(memoryview(payload)[offset:])
        received += ring.extract_bytes(3)
    received += ring.extract_bytes(ring.capacity)

    assert bytes(received) == payload


def test_full_buffer_rejects_insert_without_state_change() -> None:
    """Once full, inserts return 0 and cursors stay put."""
    ring = RingBuffer(5)
    ring.insert_range(b"ab")
    ring.extract_bytes(2)
    ring.insert_range(b"cdefg")
    before = (ring.head, ring.tail, ring.state)
    assert ring.is_full()

    assert ring.insert_range(b"h") == 0
    assert ring.insert_value(0x41) is False

    assert (ring.head, ring.tail, ring.state) == before


# =============================================================================
# L2-008: Randomized FIFO Property
# =============================================================================


@pytest.mark.parametrize("capacity", [1, 2, 3, 7, 16])
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_randomized_interleaving_preserves_fifo(capacity: int, seed: int) -> None:
    """Inserted and extracted byte streams match, wherever the cursors are.

    A deque acts as the reference model. Transfer sizes include zero and
    sizes larger than the capacity so every branch of the split is hit.
    """
    rng = random.Random(seed)
    ring = RingBuffer(capacity)
    model: deque[int] = deque()
    wraps = 0

    for _ in range(500):
        previous_tail = ring.tail
        if rng.random() < 0.5:
            size = rng.randint(0, capacity + 3)
            chunk = bytes(rng.randrange(256) for _ in range(size))
            moved = ring.insert_range(chunk)
            assert moved == min(len(chunk), capacity - len(model))
            model.extend(chunk[:moved])
            if moved and ring.tail <= previous_tail:
                wraps += 1
        else:
            out = bytearray(rng.randint(0, capacity + 3))
            moved = ring.extract_range(out)
            assert moved == min(len(out), len(model))
            expected = bytes(model.popleft() for _ in range(moved))
            assert bytes(out[:moved]) == expected

        assert ring.available() == len(model)
        assert ring.is_empty() == (len(model) == 0)
        assert ring.is_full() == (len(model) == capacity)
        expected_state = BufferState.OCCUPIED if model else BufferState.EMPTY
        assert ring.state is expected_state
        assert 0 <= ring.head < capacity
        assert 0 <= ring.tail < capacity

    assert wraps > 0
