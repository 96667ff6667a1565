"""SplitMix64 and xoroshiro128+ pseudo-random generators."""

from __future__ import annotations

import secrets
from typing import Iterator, Optional

_MASK64 = (1 << 64) - 1


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (64 - shift))) & _MASK64


class SplitMix64:
    """Fixed-increment 64-bit generator; seeded from the OS when no seed is given."""

    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = secrets.randbits(64)
        self._state = seed & _MASK64

    def next(self) -> int:
        """Return the next 64-bit output."""
        self._state = (self._state + 0x9E3779B97F4A7C15) & _MASK64
        z = self._state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK64
        return z ^ (z >> 31)

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.next()


class Xoroshiro128Plus:
    """xoroshiro128+ generator whose state is filled by SplitMix64."""

    _JUMP = (0xBEAC0467EBA5FACB, 0xD86B048B86AA9922)

    def __init__(self, seed: Optional[int] = None) -> None:
        split = SplitMix64(seed)
        self._s0 = split.next()
        self._s1 = split.next()

    def next(self) -> int:
        """Return the next 64-bit output."""
        s0, s1 = self._s0, self._s1
        result = (s0 + s1) & _MASK64
        s1 ^= s0
        self._s0 = _rotl(s0, 55) ^ s1 ^ ((s1 << 14) & _MASK64)
        self._s1 = _rotl(s1, 36)
        return result

    def jump(self) -> None:
        """Advance the state as if by 2**64 calls to :meth:`next`."""
        s0 = s1 = 0
        for word in self._JUMP:
            for bit in range(64):
                if word & (1 << bit):
                    s0 ^= self._s0
                    s1 ^= self._s1
                self.next()
        self._s0, self._s1 = s0, s1

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.next()