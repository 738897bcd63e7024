"""Messages exchanged between a TCP sender and a TCP receiver."""

from __future__ import annotations

from dataclasses import dataclass

from tcpcore.wrapping_integers import Wrap32

MAX_WINDOW_SIZE = (1 << 16) - 1


@dataclass(frozen=True)
class TCPSenderMessage:
    """A segment from sender to receiver: sequence number, flags and payload."""

    seqno: Wrap32
    syn: bool = False
    payload: bytes = b""
    fin: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", bytes(self.payload))

    def sequence_length(self) -> int:
        """Number of sequence numbers the message occupies (SYN and FIN count one each)."""
        return int(self.syn) + len(self.payload) + int(self.fin)


@dataclass(frozen=True)
class TCPReceiverMessage:
    """An acknowledgment and a window size from receiver to sender."""

    ackno: Wrap32 | None = None
    window_size: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.window_size <= MAX_WINDOW_SIZE:
            raise ValueError(f"window_size must be between 0 and {MAX_WINDOW_SIZE}")