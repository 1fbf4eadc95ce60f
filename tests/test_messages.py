import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from minnowtcp.messages import TCPReceiverMessage, TCPSenderMessage
from minnowtcp.wrapping_integers import Wrap32


def test_empty_message_has_zero_length():
    assert TCPSenderMessage(seqno=Wrap32(5)).sequence_length() == 0


def test_syn_only_counts_one():
    assert TCPSenderMessage(seqno=Wrap32(0), syn=True).sequence_length() == 1


def test_rst_does_not_count():
    msg = TCPSenderMessage(seqno=Wrap32(0), rst=True)
    assert msg.sequence_length() == 0
    assert msg.rst is True


@given(
    st.booleans(),
    st.binary(max_size=64),
    st.booleans(),
    st.integers(min_value=0, max_value=(1 << 32) - 1),
)
def test_sequence_length_counts_flags_and_payload(syn, payload, fin, raw):
    msg = TCPSenderMessage(seqno=Wrap32(raw), syn=syn, payload=payload, fin=fin)
    assert msg.sequence_length() == len(payload) + int(syn) + int(fin)


def test_sender_message_is_frozen():
    msg = TCPSenderMessage(seqno=Wrap32(1))
    with pytest.raises(dataclasses.FrozenInstanceError):
        msg.syn = True  # type: ignore[misc]
    assert msg.syn is False
    assert msg.sequence_length() == 0
    assert msg.seqno == Wrap32(1)


def test_receiver_message_defaults():
    msg = TCPReceiverMessage()
    assert msg.ackno is None
    assert msg.window_size == 0
    assert msg.rst is False


def test_receiver_message_equality():
    a = TCPReceiverMessage(ackno=Wrap32(7), window_size=137)
    b = TCPReceiverMessage(ackno=Wrap32(7), window_size=137)
    assert a == b
    assert a != TCPReceiverMessage(ackno=Wrap32(8), window_size=137)