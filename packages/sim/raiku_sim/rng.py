from __future__ import annotations

import math

_MASK32 = 0xFFFFFFFF
_TWO_32 = 4294967296.0

_SEED_INIT = 1779033703
_SEED_MUL = 3432918353
_FINAL_MUL_1 = 2246822507
_FINAL_MUL_2 = 3266489909
_STEP = 0x6D2B79F5


def _imul32(a: int, b: int) -> int:
    # Low 32 bits of the product only.
    return ((a & _MASK32) * (b & _MASK32)) & _MASK32


def _rotl32(x: int, r: int) -> int:
    return ((x << r) | (x >> (32 - r))) & _MASK32


def _utf16_units(seed: str) -> list[int]:
    raw = seed.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(raw[i : i + 2], "little") for i in range(0, len(raw), 2)]


def fold_seed(seed: str) -> int:
    """Fold a seed string into the 32-bit generator state.

    Characters are consumed as UTF-16 code units so a seed folds to the same
    value in hosts that index strings that way.
    """
    units = _utf16_units(seed)
    h = (_SEED_INIT ^ len(units)) & _MASK32
    for unit in units:
        h = _imul32(h ^ unit, _SEED_MUL)
        h = _rotl32(h, 13)
    h = _imul32(h ^ (h >> 16), _FINAL_MUL_1)
    h = _imul32(h ^ (h >> 13), _FINAL_MUL_2)
    h ^= h >> 16
    return h & _MASK32


class StreamGenerator:
    """Seeded 32-bit counter-mixing stream; the only randomness in a battle."""

    def __init__(self, seed: str) -> None:
        self.seed = seed
        self._state = fold_seed(seed)
        self.draws = 0

    def _next_u32(self) -> int:
        self._state = (self._state + _STEP) & _MASK32
        t = self._state
        t = _imul32(t ^ (t >> 15), t | 1)
        t ^= (t + _imul32(t ^ (t >> 7), t | 61)) & _MASK32
        self.draws += 1
        return (t ^ (t >> 14)) & _MASK32

    def next(self) -> float:
        return self._next_u32() / _TWO_32

    def next_bounded_int(self, n: int) -> int:
        if n <= 0:
            return 0
        return math.floor(self.next() * n)
