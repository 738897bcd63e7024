"""A bounded, in-memory byte stream with a writing and a reading side."""

from __future__ import annotations

from collections import deque


class ByteStream:
    """A stream of bytes limited to ``capacity`` buffered bytes at a time.

    The writing side uses :meth:`push`, :meth:`close` and :meth:`set_error`;
    the reading side uses :meth:`peek`, :meth:`pop` and :meth:`is_finished`.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._chunks: deque[bytes] = deque()
        self._closed = False
        self._error = False
        self._pushed = 0
        self._popped = 0

    def __repr__(self) -> str:
        return (
            f"ByteStream(capacity={self.capacity}, buffered={self.bytes_buffered()}, "
            f"closed={self._closed})"
        )

    # Writing side

    def push(self, data: bytes) -> None:
        """Append as much of ``data`` as the available capacity allows."""
        chunk = bytes(data)[: self.available_capacity()]
        if chunk:
            self._chunks.append(chunk)
            self._pushed += len(chunk)

    def close(self) -> None:
        """Signal that nothing more will be written."""
        self._closed = True

    def set_error(self) -> None:
        """Signal that the stream suffered an error."""
        self._error = True

    def is_closed(self) -> bool:
        return self._closed

    def available_capacity(self) -> int:
        """How many bytes can be pushed right now."""
        return self.capacity - self.bytes_buffered()

    def bytes_pushed(self) -> int:
        """Total number of bytes ever pushed."""
        return self._pushed

    # Reading side

    def peek(self) -> bytes:
        """Return the next buffered bytes (possibly not all of them), or ``b""``."""
        return self._chunks[0] if self._chunks else b""

    def pop(self, length: int) -> None:
        """Discard up to ``length`` bytes from the front of the buffer."""
        if length < 0:
            raise ValueError("length must not be negative")
        while self._chunks and length >= len(self._chunks[0]):
            chunk = self._chunks.popleft()
            length -= len(chunk)
            self._popped += len(chunk)
        if self._chunks and length > 0:
            self._chunks[0] = self._chunks[0][length:]
            self._popped += length

    def is_finished(self) -> bool:
        """True once the stream is closed and every byte has been popped."""
        return self._closed and not self._chunks

    def has_error(self) -> bool:
        return self._error

    def bytes_buffered(self) -> int:
        """Number of bytes pushed and not yet popped."""
        return self._pushed - self._popped

    def bytes_popped(self) -> int:
        """Total number of bytes ever popped."""
        return self._popped


def read(stream: ByteStream, length: int) -> bytes:
    """Peek and pop up to ``length`` bytes from ``stream`` and return them."""
    parts: list[bytes] = []
    collected = 0
    while stream.bytes_buffered() and collected < length:
        view = stream.peek()
        if not view:
            raise RuntimeError("ByteStream.peek() returned no bytes while bytes are buffered")
        view = view[: length - collected]
        parts.append(view)
        collected += len(view)
        stream.pop(len(view))
    return b"".join(parts)