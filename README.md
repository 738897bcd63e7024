# tcpcore

Pieces of a TCP implementation as plain Python objects, with nothing
needed outside the standard library. All data is handled as `bytes`.

- `tcpcore.byte_stream`: `ByteStream(capacity)` is an in-memory byte
  stream that holds at most `capacity` buffered bytes.
  - Writing side: `push` (keeps only as much as fits), `close`,
    `set_error`, `is_closed`, `available_capacity`, `bytes_pushed`.
  - Reading side: `peek`, `pop`, `is_finished`, `has_error`,
    `bytes_buffered`, `bytes_popped`.
  - `read(stream, length)` peeks and pops up to `length` bytes and
    returns them.
- `tcpcore.wrapping_integers`: `Wrap32` is a 32-bit sequence number.
  `Wrap32.wrap(n, zero_point)` turns an absolute sequence number into a
  wrapped one. `seqno.unwrap(zero_point, checkpoint)` returns the absolute
  number closest to `checkpoint`. Values support `+` with an int and `==`.
- `tcpcore.reassembler`: `Reassembler` takes indexed substrings through
  `insert(first_index, data, is_last_substring, output)`. They may arrive
  out of order or overlap. It writes bytes into a `ByteStream` as soon as
  they are next in line and holds the rest. Bytes beyond the stream's
  available capacity are dropped. The stream is closed after the last
  byte. `bytes_pending()` reports how many bytes it holds.
- `tcpcore.messages`: the frozen dataclasses `TCPSenderMessage` and
  `TCPReceiverMessage`.
  - `TCPSenderMessage` holds `seqno`, `syn`, `payload` and `fin`. Its
    `sequence_length()` counts SYN and FIN as one each.
  - `TCPReceiverMessage` holds an optional `ackno` and a `window_size` from
    0 to 65535. Any other window size raises `ValueError`.
- `tcpcore.tcp_receiver`: `TCPReceiver` handles incoming segments.
  - It ignores segments until one carries SYN, which fixes the initial
    sequence number (available as `isn`).
  - `receive(message, reassembler, inbound_stream)` puts each payload into
    the reassembler at its stream index.
  - `send(inbound_stream)` builds the acknowledgement number and window
    (capped at 65535) to report back.

## Installation

```
pip install .
```

## Examples

Reassembling out-of-order pieces:

```python
from tcpcore.byte_stream import ByteStream, read
from tcpcore.reassembler import Reassembler

stream = ByteStream(64)
reassembler = Reassembler()

reassembler.insert(3, b"def", False, stream)
reassembler.insert(0, b"abc", True, stream)

assert read(stream, 6) == b"abcdef"
assert stream.is_finished()
```

Sequence numbers:

```python
from tcpcore.wrapping_integers import Wrap32

isn = Wrap32(15)
seqno = Wrap32.wrap(3 * (1 << 32) + 17, isn)
assert seqno == Wrap32(32)
assert Wrap32(1).unwrap(Wrap32(0), 0) == 1
```

Receiving a segment:

```python
from tcpcore.byte_stream import ByteStream
from tcpcore.messages import TCPSenderMessage
from tcpcore.reassembler import Reassembler
from tcpcore.tcp_receiver import TCPReceiver
from tcpcore.wrapping_integers import Wrap32

stream = ByteStream(64)
receiver = TCPReceiver()
receiver.receive(TCPSenderMessage(Wrap32(100), syn=True, payload=b"hi"), Reassembler(), stream)

reply = receiver.send(stream)
assert reply.ackno == Wrap32(103)
assert reply.window_size == 62
```

## What this package does not do

The package covers only the receiving side of a connection. It has no TCP
sender: nothing turns an outbound `ByteStream` into segments, honours the
peer's window or retransmits. It also does not serialise segments or send
them over a network. The caller moves `TCPSenderMessage` and
`TCPReceiverMessage` objects between the two ends.

## Running the tests

```
pip install .[test]
pytest
```