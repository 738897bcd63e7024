"""Reassembly of indexed, possibly overlapping substrings into a byte stream."""

from __future__ import annotations

from bisect import bisect_left, insort

from tcpcore.byte_stream import ByteStream


class Reassembler:
    """Puts out-of-order, overlapping substrings back together in stream order.

    Bytes are written to the output stream as soon as the next expected byte
    is known. Bytes that fit in the stream's available capacity but cannot be
    written yet are held internally. Bytes beyond the available capacity are
    discarded. The stream is closed once the last substring has been seen and
    nothing remains held.
    """

    def __init__(self) -> None:
        self._starts: list[int] = []
        self._segments: dict[int, bytes] = {}
        self._pending = 0
        self._seen_last = False

    def __repr__(self) -> str:
        return f"Reassembler(segments={len(self._starts)}, pending={self._pending})"

    def insert(
        self,
        first_index: int,
        data: bytes,
        is_last_substring: bool,
        output: ByteStream,
    ) -> None:
        """Insert ``data`` starting at stream index ``first_index``."""
        if first_index < 0:
            raise ValueError("first_index must not be negative")
        data = bytes(data)
        first_unassembled = output.bytes_pushed()
        first_unacceptable = first_unassembled + output.available_capacity()

        if is_last_substring:
            self._seen_last = True

        if first_index >= first_unacceptable:
            return

        if first_index < first_unassembled:
            if first_index + len(data) < first_unassembled:
                return
            data = data[first_unassembled - first_index :]
            first_index = first_unassembled

        if first_index + len(data) > first_unacceptable:
            data = data[: first_unacceptable - first_index]

        if self._starts:
            if not self._merge(first_index, data):
                return
        else:
            self._store(first_index, data)

        self._flush(output)

        if self._seen_last and not self._starts:
            output.close()

    def bytes_pending(self) -> int:
        """How many bytes are held by the reassembler itself."""
        return self._pending

    def _end_of(self, start: int) -> int:
        return start + len(self._segments[start])

    def _merge(self, index: int, data: bytes) -> bool:
        """Store ``data`` at ``index`` without overlapping held segments.

        Returns False when the data was already held in full.
        """
        starts = self._starts
        pos = bisect_left(starts, index)
        if pos > 0 and (pos == len(starts) or starts[pos] != index):
            pos -= 1

        bound_start = starts[pos]
        bound_end = self._end_of(bound_start)

        if index >= bound_start and index + len(data) <= bound_end:
            return False

        if bound_start <= index < bound_end:
            data = data[bound_end - index :]
            index = bound_end
            pos += 1
        elif bound_end <= index:
            pos += 1

        end = index + len(data)

        while pos < len(starts) and starts[pos] >= index and self._end_of(starts[pos]) <= end:
            self._remove_at(pos)

        if pos < len(starts):
            next_start = starts[pos]
            if next_start < end < self._end_of(next_start):
                data = data[: next_start - index]

        self._store(index, data)
        return True

    def _store(self, index: int, data: bytes) -> None:
        if index in self._segments:
            return
        insort(self._starts, index)
        self._segments[index] = data
        self._pending += len(data)

    def _remove_at(self, pos: int) -> bytes:
        start = self._starts.pop(pos)
        data = self._segments.pop(start)
        self._pending -= len(data)
        return data

    def _flush(self, output: ByteStream) -> None:
        while self._starts and self._starts[0] == output.bytes_pushed():
            output.push(self._remove_at(0))