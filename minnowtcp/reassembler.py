"""Reassembles out-of-order substrings into a contiguous byte stream."""

from __future__ import annotations

from bisect import bisect_left

from minnowtcp.byte_stream import ByteStream, Reader, Writer


class Reassembler:
    """Stores substrings by stream index and writes them in order to a ByteStream."""

    def __init__(self, output: ByteStream) -> None:
        self._output = output
        self._starts: list[int] = []
        self._segments: dict[int, bytes] = {}
        self._next_index = 0
        self._last_index: int | None = None
        self._pending = 0

    def insert(self, first_index: int, data: bytes, is_last_substring: bool) -> None:
        """Insert ``data`` starting at stream index ``first_index``."""
        writer = self._output.writer()
        if writer.is_closed():
            return

        data = bytes(data)
        if is_last_substring:
            self._last_index = first_index + len(data)

        if self._last_index is not None and self._next_index >= self._last_index:
            writer.close()
            return

        max_acceptable = self._next_index + writer.available_capacity()
        if first_index >= max_acceptable:
            return

        if first_index < self._next_index:
            if first_index + len(data) <= self._next_index:
                return
            data = data[self._next_index - first_index :]
            first_index = self._next_index

        if first_index + len(data) > max_acceptable:
            data = data[: max_acceptable - first_index]

        if not data:
            return

        if not self._store(first_index, data):
            return
        self._flush(writer)

        if self._last_index is not None and self._next_index >= self._last_index:
            writer.close()

    def count_bytes_pending(self) -> int:
        """Bytes stored but not yet written to the output."""
        return self._pending

    def reader(self) -> Reader:
        return self._output.reader()

    def writer(self) -> Writer:
        return self._output.writer()

    def _store(self, first_index: int, data: bytes) -> bool:
        """Merge ``data`` with overlapping segments; False if it added nothing."""
        pos = bisect_left(self._starts, first_index)
        end = first_index + len(data)

        if pos > 0:
            prev_start = self._starts[pos - 1]
            prev = self._segments[prev_start]
            prev_end = prev_start + len(prev)
            if prev_end > first_index:
                if prev_end >= end:
                    return False
                data = prev + data[prev_end - first_index :]
                first_index = prev_start
                end = first_index + len(data)
                self._pending -= len(prev)
                del self._segments[prev_start]
                del self._starts[pos - 1]
                pos -= 1

        while pos < len(self._starts) and self._starts[pos] < end:
            start = self._starts.pop(pos)
            segment = self._segments.pop(start)
            if start + len(segment) > end:
                data += segment[end - start :]
                end = first_index + len(data)
            self._pending -= len(segment)

        self._starts.insert(pos, first_index)
        self._segments[first_index] = data
        self._pending += len(data)
        return True

    def _flush(self, writer: Writer) -> None:
        while self._starts and self._starts[0] == self._next_index:
            start = self._starts.pop(0)
            segment = self._segments.pop(start)
            room = writer.available_capacity()
            if len(segment) <= room:
                writer.push(segment)
                self._next_index += len(segment)
                self._pending -= len(segment)
            else:
                writer.push(segment[:room])
                self._next_index += room
                self._pending -= room
                self._starts.insert(0, self._next_index)
                self._segments[self._next_index] = segment[room:]
                break