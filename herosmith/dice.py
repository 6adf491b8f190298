"""Dice helpers for ability-score generation."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List

POOL_SIZE = 6


@dataclass
class RNG:
    seed: int | None = None

    def __post_init__(self) -> None:
        self._r = random.Random(self.seed)

    def roll_int(self, lo: int, hi: int) -> int:
        return self._r.randint(lo, hi)


def roll_4d6_drop_lowest(rng: RNG) -> Dict[str, object]:
    """Roll four d6 and keep the three highest.

    Returns
    -------
    dict
        ``{"total": int, "detail": {"rolls": [...], "dropped": int}}``
    """
    rolls: List[int] = [rng.roll_int(1, 6) for _ in range(4)]
    dropped = min(rolls)
    total = sum(rolls) - dropped
    return {"total": total, "detail": {"rolls": rolls, "dropped": dropped}}


def roll_ability_pool(rng: RNG | None = None) -> List[int]:
    rng = rng or RNG()
    return [int(roll_4d6_drop_lowest(rng)["total"]) for _ in range(POOL_SIZE)]


__all__ = ["RNG", "POOL_SIZE", "roll_4d6_drop_lowest", "roll_ability_pool"]
