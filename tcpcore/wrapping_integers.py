"""32-bit sequence numbers that wrap around relative to a zero point."""

from __future__ import annotations

_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1
_UINT32_MAX = _MASK32
_WRAP = 1 << 32


class Wrap32:
    """A 32-bit unsigned value that wraps back to zero after 2**32 - 1."""

    __slots__ = ("_raw",)

    def __init__(self, raw_value: int) -> None:
        self._raw = raw_value & _MASK32

    @property
    def raw_value(self) -> int:
        return self._raw

    @staticmethod
    def wrap(n: int, zero_point: Wrap32) -> Wrap32:
        """Wrap the absolute sequence number ``n`` relative to ``zero_point``."""
        return Wrap32(n + zero_point._raw)

    def unwrap(self, zero_point: Wrap32, checkpoint: int) -> int:
        """Return the absolute sequence number nearest ``checkpoint`` that wraps to this value."""
        diff = (self._raw - zero_point._raw) & _MASK32
        wraps = checkpoint // _UINT32_MAX

        upper = (diff + wraps * _WRAP) & _MASK64
        lower = (diff + (wraps - 1) * _WRAP) & _MASK64
        if upper < checkpoint:
            upper = (upper + _WRAP) & _MASK64
            lower = (lower + _WRAP) & _MASK64

        if abs(upper - checkpoint) < abs(lower - checkpoint):
            return upper
        return lower

    def __add__(self, n: int) -> Wrap32:
        if not isinstance(n, int):
            return NotImplemented
        return Wrap32(self._raw + n)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Wrap32):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"Wrap32({self._raw})"

    def __str__(self) -> str:
        return f"Wrap32<{self._raw}>"