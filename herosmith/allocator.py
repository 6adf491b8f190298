"""Ability-score allocation: standard array, point buy, dice roll, manual.

One record carries every mode's payload; ``mode`` says which one is live.
Inactive payloads are kept so the user can flip back to a mode without
losing work, except where :meth:`AbilityAllocator.set_mode` resets them.
"""
from __future__ import annotations

from collections import Counter
from typing import Callable, Dict, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, Field

from herosmith.dice import RNG, POOL_SIZE, roll_ability_pool
from herosmith.rules_core import (
    ABILITY_ORDER,
    MANUAL_MAX,
    MANUAL_MIN,
    POINT_BUY_BUDGET,
    POINT_BUY_COSTS,
    POINT_BUY_MAX,
    POINT_BUY_MIN,
    STANDARD_ARRAY,
)

AllocationMode = Literal["standard", "point_buy", "dice", "manual"]
MODES: Tuple[str, ...] = ("standard", "point_buy", "dice", "manual")


def _point_buy_defaults() -> Dict[str, int]:
    return {k: POINT_BUY_MIN for k in ABILITY_ORDER}


def _manual_defaults() -> Dict[str, int]:
    return {k: 10 for k in ABILITY_ORDER}


class StandardArrayState(BaseModel):
    assignments: Dict[str, int] = Field(default_factory=dict)


class PointBuyState(BaseModel):
    scores: Dict[str, int] = Field(default_factory=_point_buy_defaults)


class DiceRollState(BaseModel):
    pool: List[int] = Field(default_factory=list)
    assignments: Dict[str, int] = Field(default_factory=dict)


class ManualState(BaseModel):
    scores: Dict[str, int] = Field(default_factory=_manual_defaults)


ModeState = Union[StandardArrayState, PointBuyState, DiceRollState, ManualState]


def point_buy_cost(scores: Mapping[str, int]) -> int:
    return sum(POINT_BUY_COSTS.get(scores.get(k, POINT_BUY_MIN), 0) for k in ABILITY_ORDER)


def _pool_filled(pool: List[int], assignments: Mapping[str, int]) -> bool:
    if len(pool) != POOL_SIZE:
        return False
    if any(assignments.get(k) is None for k in ABILITY_ORDER):
        return False
    return Counter(assignments[k] for k in ABILITY_ORDER) == Counter(pool)


def _standard_complete(state: StandardArrayState) -> bool:
    return _pool_filled(list(STANDARD_ARRAY), state.assignments)


def _point_buy_complete(state: PointBuyState) -> bool:
    for k in ABILITY_ORDER:
        v = state.scores.get(k)
        if v is None or not POINT_BUY_MIN <= v <= POINT_BUY_MAX:
            return False
    return point_buy_cost(state.scores) <= POINT_BUY_BUDGET


def _dice_complete(state: DiceRollState) -> bool:
    return _pool_filled(state.pool, state.assignments)


def _manual_complete(state: ManualState) -> bool:
    return all(
        state.scores.get(k) is not None and MANUAL_MIN <= state.scores[k] <= MANUAL_MAX
        for k in ABILITY_ORDER
    )


_COMPLETE: Dict[str, Callable[..., bool]] = {
    "standard": _standard_complete,
    "point_buy": _point_buy_complete,
    "dice": _dice_complete,
    "manual": _manual_complete,
}


def is_complete(mode: str, state: ModeState) -> bool:
    check = _COMPLETE.get(mode)
    return bool(check and check(state))


class AbilityAllocator(BaseModel):
    mode: AllocationMode = "standard"
    standard: StandardArrayState = Field(default_factory=StandardArrayState)
    point_buy: PointBuyState = Field(default_factory=PointBuyState)
    dice: DiceRollState = Field(default_factory=DiceRollState)
    manual: ManualState = Field(default_factory=ManualState)

    # --- Mode ---

    @property
    def state(self) -> ModeState:
        return getattr(self, self.mode)

    def set_mode(self, mode: str) -> None:
        """Switch modes. Entering standard or dice starts that mode fresh;
        re-selecting the active mode changes nothing."""
        if mode not in MODES:
            raise ValueError(f"Unknown allocation mode: {mode}")
        if mode == self.mode:
            return
        self.mode = mode  # type: ignore[assignment]
        if mode == "standard":
            self.standard.assignments = {}
        elif mode == "dice":
            self.dice = DiceRollState()

    def is_complete(self) -> bool:
        return is_complete(self.mode, self.state)

    # --- Pool modes (standard array, dice) ---

    def pool(self) -> List[int]:
        if self.mode == "standard":
            return list(STANDARD_ARRAY)
        if self.mode == "dice":
            return list(self.dice.pool)
        return []

    def _assignments(self) -> Optional[Dict[str, int]]:
        if self.mode == "standard":
            return self.standard.assignments
        if self.mode == "dice":
            return self.dice.assignments
        return None

    def roll_pool(self, rng: RNG | None = None) -> List[int]:
        """Roll a fresh pool; any existing assignment goes with the old pool."""
        self.dice.pool = roll_ability_pool(rng)
        self.dice.assignments = {}
        return list(self.dice.pool)

    def available_values(self, key: str) -> List[int]:
        assignments = self._assignments()
        if assignments is None:
            return []
        remaining = Counter(self.pool())
        remaining.subtract(v for k, v in assignments.items() if k != key and v is not None)
        seen: List[int] = []
        for v in self.pool():
            if remaining[v] > 0 and v not in seen:
                seen.append(v)
        return seen

    def assign(self, key: str, value: int | None) -> bool:
        assignments = self._assignments()
        if assignments is None or key not in ABILITY_ORDER:
            return False
        if value is None:
            return self.clear(key)
        if assignments.get(key) == value:
            return True
        if value not in self.available_values(key):
            return False
        assignments[key] = value
        return True

    def clear(self, key: str) -> bool:
        assignments = self._assignments()
        if assignments is None:
            return False
        assignments.pop(key, None)
        return True

    # --- Score modes (point buy, manual) ---

    def set_score(self, key: str, value: int) -> bool:
        if key not in ABILITY_ORDER:
            return False
        if self.mode == "point_buy":
            if not POINT_BUY_MIN <= value <= POINT_BUY_MAX:
                return False
            trial = {**self.point_buy.scores, key: value}
            if point_buy_cost(trial) > POINT_BUY_BUDGET:
                return False
            self.point_buy.scores[key] = value
            return True
        if self.mode == "manual":
            self.manual.scores[key] = min(MANUAL_MAX, max(MANUAL_MIN, int(value)))
            return True
        return False

    def point_buy_cost(self) -> int:
        return point_buy_cost(self.point_buy.scores)

    def points_remaining(self) -> int:
        return POINT_BUY_BUDGET - self.point_buy_cost()

    # --- Result ---

    def base_scores(self) -> Dict[str, int]:
        """Scores for the live mode; unassigned abilities read as 10."""
        if self.mode in ("standard", "dice"):
            src: Mapping[str, int] = self._assignments() or {}
        elif self.mode == "point_buy":
            src = self.point_buy.scores
        else:
            src = self.manual.scores
        return {k: src.get(k) if src.get(k) is not None else 10 for k in ABILITY_ORDER}


__all__ = [
    "AbilityAllocator",
    "AllocationMode",
    "DiceRollState",
    "ManualState",
    "MODES",
    "PointBuyState",
    "StandardArrayState",
    "is_complete",
    "point_buy_cost",
]
