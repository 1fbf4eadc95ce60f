# minnowtcp

The core pieces of a TCP implementation, written as plain Python objects
that can be driven and inspected step by step. All data is handled as
`bytes`.

- `minnowtcp.wrapping_integers.Wrap32`: 32-bit wrapping sequence numbers.
  `Wrap32.wrap(n, zero_point)` turns an absolute sequence number into a
  32-bit one, and `unwrap(zero_point, checkpoint)` returns the absolute
  number closest to `checkpoint`. Adding an integer wraps at 2**32.
- `minnowtcp.byte_stream`: `ByteStream` is a bounded in-memory byte pipe with
  a `Writer` view (`push`, `close`, `is_closed`, `available_capacity`,
  `bytes_pushed`) and a `Reader` view (`peek`, `pop`, `is_finished`,
  `bytes_buffered`, `bytes_popped`). Pushes beyond the capacity are cut
  short; popping more than is buffered raises `ValueError`. The helper
  `read(reader, max_len)` takes and returns up to `max_len` bytes.
- `minnowtcp.reassembler.Reassembler`: accepts substrings at arbitrary
  stream indices, keeps what fits within the output's capacity, merges
  overlaps, and writes bytes to its `ByteStream` in order, closing it once
  the last substring has been written.
- `minnowtcp.messages`: the frozen dataclasses `TCPSenderMessage`
  (`seqno`, `syn`, `payload`, `fin`, `rst`, and `sequence_length()`) and
  `TCPReceiverMessage` (`ackno`, `window_size`, `rst`).
- `minnowtcp.tcp_receiver.TCPReceiver`: feeds incoming `TCPSenderMessage`s
  into a `Reassembler` and answers with a `TCPReceiverMessage` carrying the
  acknowledgement number, a window of at most 65535, and the reset flag.
- `minnowtcp.tcp_sender.TCPSender`: splits its outbound stream into
  segments that fit the peer's window (a zero window is treated as one,
  payloads are at most `MAX_PAYLOAD_SIZE` = 1000 bytes unless another
  `max_payload_size` is given), tracks outstanding segments, and retransmits
  the oldest one on timeout with exponential backoff.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from minnowtcp.byte_stream import ByteStream, read
from minnowtcp.reassembler import Reassembler
from minnowtcp.wrapping_integers import Wrap32

reassembler = Reassembler(ByteStream(64))
reassembler.insert(5, b"world", True)
reassembler.insert(0, b"hello", False)
print(read(reassembler.reader(), 64))      # b'helloworld'
print(reassembler.writer().is_closed())    # True

seqno = Wrap32.wrap(2**32 + 17, Wrap32(15))
print(seqno.unwrap(Wrap32(15), 2**32))     # 4294967313
```

A sender hands its segments to any callable you give it:

```python
from minnowtcp.byte_stream import ByteStream
from minnowtcp.tcp_sender import TCPSender
from minnowtcp.wrapping_integers import Wrap32

sent = []
sender = TCPSender(ByteStream(1000), Wrap32(0), 1000)
sender.push(sent.append)                    # sends the SYN
sender.tick(1000, sent.append)              # retransmits it after one RTO
print(sender.consecutive_retransmissions()) # 1
```

## What it does not do

The package works only on in-memory objects. It opens no sockets, does not
encode or parse TCP or IP headers, has no connection object joining a sender
and a receiver, and has no command-line program. Time passes only when you
call `TCPSender.tick`.