"""Pure derivation functions: ability scores + class + level -> derived stats.

Nothing in here touches wizard state, so the same calls back the live preview
shown while a character is being built and the final numbers written into the
finished :class:`~herosmith.models.Character`.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from pydantic import BaseModel, Field

from herosmith.rules_core import (
    ABILITY_ORDER,
    CASTING_ABILITY,
    FULL_CASTER_SLOTS,
    FULL_CASTERS,
    HALF_CASTER_SLOTS,
    HALF_CASTERS,
    HIT_DIE,
    INSPIRATION_CLASS,
    PACT_CASTERS,
    PACT_MAGIC,
    SPELLS_KNOWN,
    STARTING_GOLD,
)


class UnknownClassError(KeyError):
    """Raised when a derivation needs a class that has no rules entry."""


def modifier(score: int) -> int:
    return (score - 10) // 2


def modifiers(scores: Mapping[str, int]) -> Dict[str, int]:
    return {k: modifier(scores.get(k, 10)) for k in ABILITY_ORDER}


def proficiency_bonus(level: int) -> int:
    # 5e scaling: 1–4:+2, 5–8:+3, 9–12:+4, 13–16:+5, 17–20:+6
    lvl = min(20, max(1, level))
    return 2 + ((lvl - 1) // 4)


def is_caster(class_name: str | None) -> bool:
    return bool(class_name) and class_name in CASTING_ABILITY


def max_hp_level1(class_name: str, con_modifier: int) -> int:
    """Hit die maximum + CON modifier (minimum 1).

    Raises :class:`UnknownClassError` for a class with no hit die; callers
    are expected to check the class first.
    """
    try:
        die = HIT_DIE[class_name]
    except KeyError as exc:
        raise UnknownClassError(class_name) from exc
    return max(1, die + con_modifier)


def armor_class(dex_modifier: int) -> int:
    # Unarmored baseline; equipment is applied later by the sheet, not here.
    return 10 + dex_modifier


def spell_save_dc(class_name: str | None, scores: Mapping[str, int], level: int = 1) -> Optional[int]:
    ability = CASTING_ABILITY.get(class_name or "")
    if not ability:
        return None
    return 8 + proficiency_bonus(level) + modifier(scores.get(ability, 10))


def _slots_from_row(row) -> Dict[int, int]:
    return {i + 1: n for i, n in enumerate(row) if n}


def spell_slots(class_name: str | None, level: int) -> Dict[int, int]:
    if class_name in FULL_CASTERS:
        return _slots_from_row(FULL_CASTER_SLOTS.get(level, ()))
    if class_name in HALF_CASTERS:
        return _slots_from_row(HALF_CASTER_SLOTS.get(level, ()))
    if class_name in PACT_CASTERS:
        entry = PACT_MAGIC.get(level)
        if not entry:
            return {}
        count, slot_level = entry
        return {slot_level: count}
    # Non-casters
    return {}


def spells_known_count(class_name: str | None, level: int) -> int:
    by_level = SPELLS_KNOWN.get(class_name or "")
    if not by_level:
        return 0
    return by_level.get(level, 0)


def max_spell_level_for_level(level: int) -> int:
    row = FULL_CASTER_SLOTS.get(level)
    if not row:
        return 0
    return max(i + 1 for i, n in enumerate(row) if n)


def inspiration_max(class_name: str | None, scores: Mapping[str, int]) -> int:
    if class_name != INSPIRATION_CLASS:
        return 0
    return max(1, modifier(scores.get("cha", 10)))


def starting_gold(class_name: str | None) -> int:
    return STARTING_GOLD.get(class_name or "", 0)


class DerivedStats(BaseModel):
    """Everything the wizard previews and the assembler stamps on a character."""

    modifiers: Dict[str, int] = Field(default_factory=dict)
    proficiency_bonus: int = 2
    max_hp: int = 10
    ac: int = 10
    spell_dc: Optional[int] = None
    spell_slots: Dict[int, int] = Field(default_factory=dict)
    spells_known: int = 0
    max_spell_level: int = 0
    inspiration_max: int = 0
    gold: int = 0


def derive_stats(
    class_name: str | None,
    scores: Mapping[str, int],
    level: int = 1,
    gold: int | None = None,
) -> DerivedStats:
    mods = modifiers(scores)
    if class_name in HIT_DIE:
        max_hp = max_hp_level1(class_name, mods["con"])
    else:
        max_hp = 10
    caster = is_caster(class_name)
    return DerivedStats(
        modifiers=mods,
        proficiency_bonus=proficiency_bonus(level),
        max_hp=max_hp,
        ac=armor_class(mods["dex"]),
        spell_dc=spell_save_dc(class_name, scores, level),
        spell_slots=spell_slots(class_name, level) if caster else {},
        spells_known=spells_known_count(class_name, level),
        max_spell_level=max_spell_level_for_level(level) if caster else 0,
        inspiration_max=inspiration_max(class_name, scores),
        gold=gold if gold else starting_gold(class_name),
    )


__all__ = [
    "DerivedStats",
    "UnknownClassError",
    "armor_class",
    "derive_stats",
    "inspiration_max",
    "is_caster",
    "max_hp_level1",
    "max_spell_level_for_level",
    "modifier",
    "modifiers",
    "proficiency_bonus",
    "spell_save_dc",
    "spell_slots",
    "spells_known_count",
    "starting_gold",
]
