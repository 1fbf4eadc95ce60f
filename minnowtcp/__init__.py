"""TCP building blocks: wrapping sequence numbers, byte streams, reassembly, messages, sender and receiver."""

__version__ = "0.1.0"

__all__ = [
    "byte_stream",
    "messages",
    "reassembler",
    "tcp_receiver",
    "tcp_sender",
    "wrapping_integers",
]