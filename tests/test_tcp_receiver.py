from hypothesis import given
from hypothesis import strategies as st

from minnowtcp.byte_stream import ByteStream, read
from minnowtcp.messages import TCPSenderMessage
from minnowtcp.reassembler import Reassembler
from minnowtcp.tcp_receiver import TCPReceiver
from minnowtcp.wrapping_integers import Wrap32


def make_receiver(capacity=4000):
    return TCPReceiver(Reassembler(ByteStream(capacity)))


def test_no_ackno_before_syn():
    receiver = make_receiver()
    assert receiver.send().ackno is None


def test_window_matches_capacity():
    assert make_receiver(4000).send().window_size == 4000


def test_window_is_capped():
    assert make_receiver(100000).send().window_size == 65535


def test_syn_sets_ackno():
    isn = Wrap32(12345)
    receiver = make_receiver()
    receiver.receive(TCPSenderMessage(seqno=isn, syn=True))
    assert receiver.send().ackno == isn + 1


@given(
    st.integers(min_value=0, max_value=(1 << 32) - 1),
    st.binary(min_size=1, max_size=200),
)
def test_syn_with_payload(raw_isn, payload):
    isn = Wrap32(raw_isn)
    receiver = make_receiver()
    receiver.receive(TCPSenderMessage(seqno=isn, syn=True, payload=payload))
    assert receiver.send().ackno == isn + (1 + len(payload))
    assert read(receiver.reader(), len(payload)) == payload


def test_data_before_syn_is_ignored():
    receiver = make_receiver()
    receiver.receive(TCPSenderMessage(seqno=Wrap32(1), payload=b"hello"))
    assert receiver.writer().bytes_pushed() == 0
    assert receiver.send().ackno is None


def test_segment_at_isn_without_syn_is_ignored():
    isn = Wrap32(100)
    receiver = make_receiver()
    receiver.receive(TCPSenderMessage(seqno=isn, syn=True))
    receiver.receive(TCPSenderMessage(seqno=isn, payload=b"abc"))
    assert receiver.writer().bytes_pushed() == 0
    assert receiver.send().ackno == isn + 1


def test_out_of_order_then_fill():
    isn = Wrap32(7)
    receiver = make_receiver()
    receiver.receive(TCPSenderMessage(seqno=isn, syn=True))
    receiver.receive(TCPSenderMessage(seqno=isn + 4, payload=b"def"))
    assert receiver.reassembler().count_bytes_pending() == len(b"def")
    assert receiver.send().ackno == isn + 1
    receiver.receive(TCPSenderMessage(seqno=isn + 1, payload=b"abc"))
    assert receiver.reassembler().count_bytes_pending() == 0
    assert receiver.send().ackno == isn + (1 + len(b"abcdef"))
    assert read(receiver.reader(), 100) == b"abcdef"


def test_fin_closes_stream_and_is_acknowledged():
    isn = Wrap32(0)
    receiver = make_receiver()
    receiver.receive(TCPSenderMessage(seqno=isn, syn=True))
    receiver.receive(TCPSenderMessage(seqno=isn + 1, payload=b"xyz", fin=True))
    assert receiver.writer().is_closed()
    assert receiver.send().ackno == isn + (1 + len(b"xyz") + 1)


def test_window_shrinks_with_buffered_data():
    receiver = make_receiver(10)
    receiver.receive(TCPSenderMessage(seqno=Wrap32(0), syn=True, payload=b"abcd"))
    assert receiver.send().window_size == 10 - len(b"abcd")


def test_rst_sets_error():
    receiver = make_receiver()
    receiver.receive(TCPSenderMessage(seqno=Wrap32(0), rst=True))
    assert receiver.reader().has_error()
    assert receiver.send().rst is True


def test_sequence_numbers_wrap_around():
    isn = Wrap32((1 << 32) - 2)
    receiver = make_receiver()
    receiver.receive(TCPSenderMessage(seqno=isn, syn=True))
    receiver.receive(TCPSenderMessage(seqno=isn + 1, payload=b"wrap"))
    assert read(receiver.reader(), 100) == b"wrap"
    assert receiver.send().ackno == isn + (1 + len(b"wrap"))