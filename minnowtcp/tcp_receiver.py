"""The receiving half of a TCP endpoint."""

from __future__ import annotations

from minnowtcp.byte_stream import Reader, Writer
from minnowtcp.messages import TCPReceiverMessage, TCPSenderMessage
from minnowtcp.reassembler import Reassembler
from minnowtcp.wrapping_integers import Wrap32

_MAX_WINDOW = 0xFFFF


class TCPReceiver:
    """Feeds incoming segments into a Reassembler and reports acknowledgments."""

    def __init__(self, reassembler: Reassembler) -> None:
        self._reassembler = reassembler
        self._zero_point = Wrap32(0)
        self._ackno: Wrap32 | None = None

    def receive(self, message: TCPSenderMessage) -> None:
        """Insert the segment's payload at its stream index."""
        if message.rst:
            self.reader().set_error()
            return
        if message.syn:
            self._zero_point = message.seqno
            self._ackno = message.seqno
        if self._ackno is None:
            return

        writer = self.writer()
        checkpoint = writer.bytes_pushed() + 1
        seqno = message.seqno + 1 if message.syn else message.seqno
        absolute = seqno.unwrap(self._zero_point, checkpoint)
        # Absolute sequence number 0 is the SYN itself and carries no stream bytes.
        if absolute > 0:
            self._reassembler.insert(absolute - 1, message.payload, message.fin)
        self._ackno = Wrap32.wrap(
            writer.bytes_pushed() + 1 + int(writer.is_closed()), self._zero_point
        )

    def send(self) -> TCPReceiverMessage:
        """The acknowledgment, window size and reset flag to send to the peer."""
        return TCPReceiverMessage(
            ackno=self._ackno,
            window_size=min(self.writer().available_capacity(), _MAX_WINDOW),
            rst=self.reader().has_error(),
        )

    def reassembler(self) -> Reassembler:
        return self._reassembler

    def reader(self) -> Reader:
        return self._reassembler.reader()

    def writer(self) -> Writer:
        return self._reassembler.writer()