# src/realmgen/rng.py
# Seeded LCG shared by every generator, plus the seed-mixing helpers.

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")

A = 9301
C = 49297
M = 233280

# Town seeds are spread over the world seed by tile position.
TILE_X_STRIDE = 1000
TILE_Y_STRIDE = 10000


def lcg_next(state: int) -> int:
    return (state * A + C) % M


@dataclass
class SeededRNG:
    state: int

    def random(self) -> float:
        self.state = lcg_next(self.state)
        return self.state / M

    def below(self, n: int) -> int:
        """floor(random() * n); one draw."""
        return int(self.random() * n)

    def range(self, lo: int, hi: int) -> int:
        """Inclusive integer in [lo, hi]; one draw."""
        return int(self.random() * (hi - lo + 1)) + lo

    def pick(self, seq: Sequence[T]) -> Optional[T]:
        # Empty sequences do not consume a draw.
        if not seq:
            return None
        return seq[self.range(0, len(seq) - 1)]

    def shuffle(self, items: List[T]) -> None:
        """In-place Fisher-Yates, walking down from the last slot."""
        for i in range(len(items) - 1, 0, -1):
            j = self.below(i + 1)
            items[i], items[j] = items[j], items[i]


def town_seed(world_seed: int, x: int, y: int) -> int:
    return world_seed + x * TILE_X_STRIDE + y * TILE_Y_STRIDE


def _int32(v: int) -> int:
    v &= 0xFFFFFFFF
    return v - 0x100000000 if (v & 0x80000000) else v


def legacy_seed(session_id: str, timestamp: str, hero_names: Iterable[str]) -> int:
    """
    Stable seed for saves written before the world seed was stored.
    The signature is "<session>-<timestamp>-<sorted hero names joined>", folded
    with the classic ``h*31 + c`` string hash, wrapped to 32 bits at each step.
    """
    signature = f"{session_id}-{timestamp}-{''.join(sorted(hero_names))}"
    h = 0
    for ch in signature:
        h = _int32((h << 5) - h + ord(ch))
    return abs(h)
