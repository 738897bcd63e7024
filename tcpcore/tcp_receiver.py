"""Receiving side of a TCP connection: sequence numbers to stream indices."""

from __future__ import annotations

from tcpcore.byte_stream import ByteStream
from tcpcore.messages import MAX_WINDOW_SIZE, TCPReceiverMessage, TCPSenderMessage
from tcpcore.reassembler import Reassembler
from tcpcore.wrapping_integers import Wrap32

_MASK64 = (1 << 64) - 1


class TCPReceiver:
    """Places incoming segment payloads into a reassembler and reports acks and windows.

    Nothing is accepted until a segment carrying SYN has fixed the initial
    sequence number.
    """

    def __init__(self) -> None:
        self._isn: Wrap32 | None = None

    def __repr__(self) -> str:
        return f"TCPReceiver(isn={self._isn!r})"

    @property
    def isn(self) -> Wrap32 | None:
        """The peer's initial sequence number, once a SYN has been seen."""
        return self._isn

    def receive(
        self,
        message: TCPSenderMessage,
        reassembler: Reassembler,
        inbound_stream: ByteStream,
    ) -> None:
        """Insert the payload of ``message`` at its stream index."""
        if message.syn:
            self._isn = message.seqno
        if self._isn is None:
            return

        abs_seqno = message.seqno.unwrap(self._isn, inbound_stream.bytes_pushed())
        if message.syn:
            stream_index = abs_seqno
        else:
            # A segment that claims the SYN's slot without SYN maps beyond any
            # acceptable index, so its bytes are discarded.
            stream_index = (abs_seqno - 1) & _MASK64
        reassembler.insert(stream_index, message.payload, message.fin, inbound_stream)

    def send(self, inbound_stream: ByteStream) -> TCPReceiverMessage:
        """Build the acknowledgment and window to report back to the sender."""
        ackno: Wrap32 | None = None
        if self._isn is not None:
            # One sequence number for SYN, and one more for FIN once the stream is closed.
            consumed = inbound_stream.bytes_pushed() + 1
            if inbound_stream.is_closed():
                consumed += 1
            ackno = Wrap32.wrap(consumed, self._isn)
        window_size = min(inbound_stream.available_capacity(), MAX_WINDOW_SIZE)
        return TCPReceiverMessage(ackno=ackno, window_size=window_size)