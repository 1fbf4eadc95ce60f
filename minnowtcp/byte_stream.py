"""A bounded in-memory byte stream with separate reading and writing views."""

from __future__ import annotations

from collections import deque


class ByteStream:
    """Holds the shared state of a stream of bytes with a fixed capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._chunks: deque[bytes] = deque()
        self._head_offset = 0
        self._buffered = 0
        self._pushed = 0
        self._popped = 0
        self._closed = False
        self._error = False
        self._reader = Reader(self)
        self._writer = Writer(self)

    def reader(self) -> Reader:
        """The reading side of the stream."""
        return self._reader

    def writer(self) -> Writer:
        """The writing side of the stream."""
        return self._writer

    def set_error(self) -> None:
        """Mark the stream as having suffered an error."""
        self._error = True

    def has_error(self) -> bool:
        """Whether the stream has had an error."""
        return self._error


class _StreamView:
    __slots__ = ("_stream",)

    def __init__(self, stream: ByteStream) -> None:
        self._stream = stream

    def set_error(self) -> None:
        """Mark the underlying stream as having suffered an error."""
        self._stream.set_error()

    def has_error(self) -> bool:
        """Whether the underlying stream has had an error."""
        return self._stream.has_error()


class Writer(_StreamView):
    """The writing side of a :class:`ByteStream`."""

    __slots__ = ()

    def push(self, data: bytes) -> None:
        """Append as much of ``data`` as the remaining capacity allows."""
        stream = self._stream
        size = min(self.available_capacity(), len(data))
        if size == 0:
            return
        stream._chunks.append(bytes(data[:size]))
        stream._pushed += size
        stream._buffered += size

    def close(self) -> None:
        """Signal that nothing more will be written."""
        self._stream._closed = True

    def is_closed(self) -> bool:
        return self._stream._closed

    def available_capacity(self) -> int:
        """How many bytes can be pushed right now."""
        return self._stream._capacity - self._stream._buffered

    def bytes_pushed(self) -> int:
        """Total number of bytes ever pushed."""
        return self._stream._pushed


class Reader(_StreamView):
    """The reading side of a :class:`ByteStream`."""

    __slots__ = ()

    def peek(self) -> bytes:
        """The next bytes in the buffer (possibly fewer than are buffered)."""
        stream = self._stream
        if not stream._chunks:
            return b""
        return stream._chunks[0][stream._head_offset :]

    def pop(self, length: int) -> None:
        """Remove ``length`` bytes from the front of the buffer."""
        stream = self._stream
        if length < 0:
            raise ValueError("cannot pop a negative number of bytes")
        if length > stream._buffered:
            raise ValueError(
                f"cannot pop {length} bytes with only {stream._buffered} buffered"
            )
        stream._popped += length
        stream._buffered -= length
        while length:
            left = len(stream._chunks[0]) - stream._head_offset
            if length >= left:
                stream._chunks.popleft()
                stream._head_offset = 0
                length -= left
            else:
                stream._head_offset += length
                length = 0

    def is_finished(self) -> bool:
        """Whether the stream is closed and fully read."""
        return self._stream._buffered == 0 and self._stream._closed

    def bytes_buffered(self) -> int:
        """Bytes pushed but not yet popped."""
        return self._stream._buffered

    def bytes_popped(self) -> int:
        """Total number of bytes ever popped."""
        return self._stream._popped


def read(reader: Reader, max_len: int) -> bytes:
    """Peek and pop up to ``max_len`` bytes from ``reader``."""
    parts: list[bytes] = []
    size = 0
    while reader.bytes_buffered() and size < max_len:
        view = reader.peek()
        if not view:
            raise RuntimeError("Reader.peek() returned no bytes while data is buffered")
        view = view[: max_len - size]
        parts.append(view)
        size += len(view)
        reader.pop(len(view))
    return b"".join(parts)