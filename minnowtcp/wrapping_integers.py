"""32-bit wrapping sequence numbers relative to an arbitrary zero point."""

from __future__ import annotations

_MOD = 1 << 32
_MASK = _MOD - 1
_HIGH_MASK = 0xFFFFFFFF00000000


class Wrap32:
    """A 32-bit unsigned integer that wraps back to zero after 2**32 - 1."""

    __slots__ = ("_raw",)

    def __init__(self, raw_value: int) -> None:
        self._raw = raw_value & _MASK

    @property
    def raw_value(self) -> int:
        """The 32-bit value as stored on the wire."""
        return self._raw

    @classmethod
    def wrap(cls, n: int, zero_point: Wrap32) -> Wrap32:
        """Wrap the absolute sequence number ``n`` relative to ``zero_point``."""
        return cls((zero_point._raw + (n % _MOD)) % _MOD)

    def unwrap(self, zero_point: Wrap32, checkpoint: int) -> int:
        """Return the absolute sequence number closest to ``checkpoint`` that wraps to this value."""
        offset = (self._raw - zero_point._raw) & _MASK
        candidate = (checkpoint & _HIGH_MASK) + offset

        best = candidate
        best_diff = abs(candidate - checkpoint)

        if candidate >= _MOD:
            previous = candidate - _MOD
            diff = abs(previous - checkpoint)
            if diff < best_diff:
                best, best_diff = previous, diff

        following = candidate + _MOD
        if abs(following - checkpoint) < best_diff:
            best = following

        return best

    def __add__(self, n: int) -> Wrap32:
        return Wrap32(self._raw + (n & _MASK))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Wrap32):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"Wrap32({self._raw})"