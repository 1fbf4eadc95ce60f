"""The sending half of a TCP endpoint."""

from __future__ import annotations

import dataclasses
from collections import deque
from typing import Callable

from minnowtcp.byte_stream import ByteStream, Reader, Writer, read
from minnowtcp.messages import TCPReceiverMessage, TCPSenderMessage
from minnowtcp.wrapping_integers import Wrap32

MAX_PAYLOAD_SIZE = 1000

TransmitFunction = Callable[[TCPSenderMessage], None]


class TCPSender:
    """Turns an outbound byte stream into segments, with retransmission on timeout."""

    def __init__(
        self,
        input_stream: ByteStream,
        isn: Wrap32,
        initial_rto_ms: int,
        max_payload_size: int = MAX_PAYLOAD_SIZE,
    ) -> None:
        self._input = input_stream
        self._isn = isn
        self._initial_rto = initial_rto_ms
        self._max_payload = max_payload_size

        self._timer_running = False
        self._elapsed = 0
        self._rto = initial_rto_ms

        self._in_flight = 0
        self._retransmissions = 0
        self._syn_sent = False
        self._fin_sent = False
        self._next_seqno = 0
        self._window_size = 1
        self._outstanding: deque[tuple[int, TCPSenderMessage]] = deque()

    def sequence_numbers_in_flight(self) -> int:
        """How many sequence numbers are sent but not yet acknowledged."""
        return self._in_flight

    def consecutive_retransmissions(self) -> int:
        """How many retransmissions have happened since the last new acknowledgment."""
        return self._retransmissions

    def reader(self) -> Reader:
        return self._input.reader()

    def writer(self) -> Writer:
        return self._input.writer()

    def make_empty_message(self) -> TCPSenderMessage:
        """A segment with no flags or payload at the next sequence number."""
        return TCPSenderMessage(
            seqno=Wrap32.wrap(self._next_seqno, self._isn),
            rst=self._input.has_error(),
        )

    def push(self, transmit: TransmitFunction) -> None:
        """Send as many segments as the receiver's window allows."""
        window = self._window_size or 1
        space = max(window - self._in_flight, 0)
        reader = self.reader()

        while space > 0:
            message = self.make_empty_message()
            syn = fin = False
            payload = b""

            if not self._syn_sent:
                syn = True
                self._syn_sent = True
                space -= 1
                if space == 0:
                    self._send(dataclasses.replace(message, syn=True), transmit)
                    return

            if reader.bytes_buffered() and space > 0:
                size = min(space, self._max_payload, reader.bytes_buffered())
                payload = read(reader, size)
                space -= size

            if not self._fin_sent and reader.is_finished() and space > 0:
                fin = True
                self._fin_sent = True
                space -= 1

            if not (syn or payload or fin):
                break
            self._send(
                dataclasses.replace(message, syn=syn, payload=payload, fin=fin), transmit
            )

    def receive(self, msg: TCPReceiverMessage) -> None:
        """Process an acknowledgment and window update from the peer."""
        if self._input.has_error():
            return
        if msg.rst:
            self._input.set_error()
            return

        self._window_size = msg.window_size
        if msg.ackno is None:
            return

        ackno = msg.ackno.unwrap(self._isn, self._next_seqno)
        if ackno > self._next_seqno:
            return

        acknowledged = False
        while self._outstanding:
            start, segment = self._outstanding[0]
            length = segment.sequence_length()
            if start + length > ackno:
                break
            self._outstanding.popleft()
            self._in_flight -= length
            acknowledged = True

        if acknowledged:
            self._rto = self._initial_rto
            self._retransmissions = 0
            self._timer_running = bool(self._outstanding)
            self._elapsed = 0

    def tick(self, ms_since_last_tick: int, transmit: TransmitFunction) -> None:
        """Advance the retransmission timer, resending the oldest segment on expiry."""
        if not self._timer_running:
            return

        self._elapsed += ms_since_last_tick
        if self._elapsed < self._rto:
            return
        if not self._outstanding:
            self._timer_running = False
            return

        transmit(self._outstanding[0][1])
        self._retransmissions += 1
        if self._window_size > 0:
            self._rto *= 2
        self._elapsed = 0

    def _send(self, message: TCPSenderMessage, transmit: TransmitFunction) -> None:
        length = message.sequence_length()
        self._outstanding.append((self._next_seqno, message))
        self._next_seqno += length
        self._in_flight += length
        transmit(message)
        if length > 0 and not self._timer_running:
            self._timer_running = True
            self._elapsed = 0