"""Messages exchanged between a TCP sender and the peer's TCP receiver."""

from __future__ import annotations

from dataclasses import dataclass

from minnowtcp.wrapping_integers import Wrap32


@dataclass(frozen=True)
class TCPSenderMessage:
    """A segment sent by a TCPSender: sequence number, flags and payload."""

    seqno: Wrap32
    syn: bool = False
    payload: bytes = b""
    fin: bool = False
    rst: bool = False

    def sequence_length(self) -> int:
        """How many sequence numbers the segment occupies (SYN and FIN count one each)."""
        return int(self.syn) + len(self.payload) + int(self.fin)


@dataclass(frozen=True)
class TCPReceiverMessage:
    """An acknowledgment and window advertisement sent by a TCPReceiver."""

    ackno: Wrap32 | None = None
    window_size: int = 0
    rst: bool = False