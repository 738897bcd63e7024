import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tcpcore.byte_stream import ByteStream, read
from tcpcore.messages import MAX_WINDOW_SIZE, TCPSenderMessage
from tcpcore.reassembler import Reassembler
from tcpcore.tcp_receiver import TCPReceiver
from tcpcore.wrapping_integers import Wrap32


class _Peer:
    """A receiver wired to its reassembler and inbound stream."""

    def __init__(self, capacity=4000):
        self.receiver = TCPReceiver()
        self.reassembler = Reassembler()
        self.stream = ByteStream(capacity)

    def segment(self, seqno, payload=b"", syn=False, fin=False):
        message = TCPSenderMessage(seqno=seqno, syn=syn, payload=payload, fin=fin)
        self.receiver.receive(message, self.reassembler, self.stream)

    def reply(self):
        return self.receiver.send(self.stream)

    def read(self, length):
        return read(self.stream, length)


def test_no_ackno_before_syn():
    receiver = TCPReceiver()
    reply = receiver.send(ByteStream(4000))
    assert reply.ackno is None
    assert reply.window_size == 4000


def test_data_before_syn_is_ignored():
    peer = _Peer()
    peer.segment(Wrap32(5), b"abc")
    assert peer.stream.bytes_pushed() == 0
    assert peer.reply().ackno is None
    assert peer.receiver.isn is None


def test_syn_sets_isn():
    peer = _Peer()
    peer.segment(Wrap32(12345), syn=True)
    assert peer.receiver.isn == Wrap32(12345)


# Each case: isn, SYN payload, SYN fin, later (offset, payload, fin) segments,
# expected ackno offset from isn, expected stream contents, expected closed.
@pytest.mark.parametrize(
    ("isn_value", "syn_payload", "syn_fin", "segments", "ack_offset", "data", "closed"),
    [
        (12345, b"", False, [], 1, b"", False),
        (7, b"hello", False, [], 6, b"hello", False),
        (9, b"", True, [], 2, b"", True),
        (1000, b"", False, [(1, b"abcd", False), (5, b"efgh", False)], 9, b"abcdefgh", False),
        (42, b"", False, [(1, b"xyz", True)], 5, b"xyz", True),
        ((1 << 32) - 2, b"", False, [(1, b"abcd", False)], 5, b"abcd", False),
        *[
            (isn, b"", False, [(1, b"payload-bytes", True)], 15, b"payload-bytes", True)
            for isn in (0, 1, 1 << 31, (1 << 32) - 1)
        ],
    ],
)
def test_ackno_and_delivery(isn_value, syn_payload, syn_fin, segments, ack_offset, data, closed):
    peer = _Peer()
    isn = Wrap32(isn_value)
    peer.segment(isn, syn_payload, syn=True, fin=syn_fin)
    for offset, payload, fin in segments:
        peer.segment(isn + offset, payload, fin=fin)
    assert peer.reply().ackno == isn + ack_offset
    assert peer.stream.is_closed() == closed
    assert peer.read(len(data)) == data


def test_out_of_order_segments_held_then_delivered():
    peer = _Peer()
    isn = Wrap32(0)
    peer.segment(isn, syn=True)
    peer.segment(isn + 5, b"efgh")
    assert peer.stream.bytes_pushed() == 0
    assert peer.reassembler.bytes_pending() == 4
    assert peer.reply().ackno == isn + 1
    peer.segment(isn + 1, b"abcd")
    assert peer.reassembler.bytes_pending() == 0
    assert peer.reply().ackno == isn + 9
    assert peer.read(8) == b"abcdefgh"


def test_segment_at_isn_without_syn_is_discarded():
    peer = _Peer()
    isn = Wrap32(300)
    peer.segment(isn, syn=True)
    peer.segment(isn, b"bad")
    assert peer.stream.bytes_pushed() == 0
    assert peer.reassembler.bytes_pending() == 0
    assert peer.reply().ackno == isn + 1


def test_window_follows_available_capacity():
    peer = _Peer(capacity=10)
    isn = Wrap32(0)
    peer.segment(isn, syn=True)
    peer.segment(isn + 1, b"abc")
    assert peer.reply().window_size == peer.stream.available_capacity()
    peer.read(3)
    assert peer.reply().window_size == 10


def test_window_is_capped():
    receiver = TCPReceiver()
    reply = receiver.send(ByteStream(1_000_000))
    assert reply.window_size == MAX_WINDOW_SIZE
    assert reply.ackno is None


def test_bytes_beyond_capacity_are_dropped():
    peer = _Peer(capacity=4)
    isn = Wrap32(77)
    peer.segment(isn, syn=True)
    peer.segment(isn + 1, b"abcdefgh")
    assert peer.stream.bytes_pushed() == 4
    assert peer.reply().window_size == 0
    assert peer.read(8) == b"abcd"


@settings(max_examples=60, deadline=None)
@given(
    isn_value=st.integers(min_value=0, max_value=(1 << 32) - 1),
    data=st.binary(min_size=1, max_size=200),
    cuts=st.lists(st.integers(min_value=1, max_value=199), max_size=10),
    order_seed=st.randoms(use_true_random=False),
)
def test_any_arrival_order_reassembles(isn_value, data, cuts, order_seed):
    peer = _Peer(capacity=1000)
    isn = Wrap32(isn_value)
    points = sorted({c for c in cuts if c < len(data)} | {0, len(data)})
    segments = [(a, data[a:b]) for a, b in zip(points, points[1:])]
    order_seed.shuffle(segments)

    peer.segment(isn, syn=True)
    for offset, chunk in segments:
        peer.segment(isn + (1 + offset), chunk)

    assert peer.reassembler.bytes_pending() == 0
    assert peer.reply().ackno == isn + (1 + len(data))
    assert peer.read(len(data)) == data