"""Byte streams, wrapping sequence numbers, reassembly, segment messages and a TCP receiver."""

__version__ = "0.1.0"
__all__ = ["byte_stream", "wrapping_integers", "reassembler", "messages", "tcp_receiver"]