from __future__ import annotations

from typing import Dict, Tuple

ABILITY_ORDER: Tuple[str, ...] = ("str", "dex", "con", "int", "wis", "cha")

# Simple SRD baseline hit-die map
HIT_DIE = {
    "Barbarian": 12,
    "Fighter": 10,
    "Paladin": 10,
    "Ranger": 10,
    "Bard": 8,
    "Cleric": 8,
    "Druid": 8,
    "Monk": 8,
    "Rogue": 8,
    "Warlock": 8,
    "Sorcerer": 6,
    "Wizard": 6,
}

# Default starting gold by class (single value, no rolling)
STARTING_GOLD = {
    "Barbarian": 70,
    "Bard": 125,
    "Cleric": 125,
    "Druid": 50,
    "Fighter": 125,
    "Monk": 15,
    "Paladin": 150,
    "Ranger": 125,
    "Rogue": 125,
    "Sorcerer": 75,
    "Warlock": 100,
    "Wizard": 80,
}

# Spellcasting ability per class; a class is a caster iff it appears here
CASTING_ABILITY: Dict[str, str] = {
    "Bard": "cha",
    "Cleric": "wis",
    "Druid": "wis",
    "Paladin": "cha",
    "Ranger": "wis",
    "Sorcerer": "cha",
    "Warlock": "cha",
    "Wizard": "int",
}

FULL_CASTERS = {"Bard", "Cleric", "Druid", "Sorcerer", "Wizard"}
HALF_CASTERS = {"Paladin", "Ranger"}
PACT_CASTERS = {"Warlock"}

# The only class that picks expertise at level 1, and how many
EXPERTISE_CLASS = "Rogue"
EXPERTISE_COUNT = 2

# Only class with an inspiration pool at creation
INSPIRATION_CLASS = "Bard"

# Quick create: (primary, secondary) ability that get 15 and 14
KEY_ABILITIES: Dict[str, Tuple[str, str]] = {
    "Barbarian": ("str", "con"),
    "Bard": ("cha", "dex"),
    "Cleric": ("wis", "con"),
    "Druid": ("wis", "con"),
    "Fighter": ("str", "con"),
    "Monk": ("dex", "wis"),
    "Paladin": ("str", "cha"),
    "Ranger": ("dex", "wis"),
    "Rogue": ("dex", "int"),
    "Sorcerer": ("cha", "con"),
    "Warlock": ("cha", "con"),
    "Wizard": ("int", "con"),
}

# Quick create background; falls back to the catalog's first background
SUGGESTED_BACKGROUND: Dict[str, str] = {
    "Barbarian": "outlander",
    "Bard": "entertainer",
    "Cleric": "acolyte",
    "Druid": "hermit",
    "Fighter": "soldier",
    "Monk": "hermit",
    "Paladin": "soldier",
    "Ranger": "outlander",
    "Rogue": "criminal",
    "Sorcerer": "sage",
    "Warlock": "charlatan",
    "Wizard": "sage",
}

# Full casters slots (L1–L9) – tuple per level (l1..l9)
FULL_CASTER_SLOTS = {
    1: (2, 0, 0, 0, 0, 0, 0, 0, 0),
    2: (3, 0, 0, 0, 0, 0, 0, 0, 0),
    3: (4, 2, 0, 0, 0, 0, 0, 0, 0),
    4: (4, 3, 0, 0, 0, 0, 0, 0, 0),
    5: (4, 3, 2, 0, 0, 0, 0, 0, 0),
    6: (4, 3, 3, 0, 0, 0, 0, 0, 0),
    7: (4, 3, 3, 1, 0, 0, 0, 0, 0),
    8: (4, 3, 3, 2, 0, 0, 0, 0, 0),
    9: (4, 3, 3, 3, 1, 0, 0, 0, 0),
    10: (4, 3, 3, 3, 2, 0, 0, 0, 0),
    11: (4, 3, 3, 3, 2, 1, 0, 0, 0),
    12: (4, 3, 3, 3, 2, 1, 0, 0, 0),
    13: (4, 3, 3, 3, 2, 1, 1, 0, 0),
    14: (4, 3, 3, 3, 2, 1, 1, 0, 0),
    15: (4, 3, 3, 3, 2, 1, 1, 1, 0),
    16: (4, 3, 3, 3, 2, 1, 1, 1, 0),
    17: (4, 3, 3, 3, 2, 1, 1, 1, 1),
    18: (4, 3, 3, 3, 3, 1, 1, 1, 1),
    19: (4, 3, 3, 3, 3, 2, 1, 1, 1),
    20: (4, 3, 3, 3, 3, 2, 2, 1, 1),
}

# Half-casters get nothing at L1; spells start at L2 and top out at 5th level
HALF_CASTER_SLOTS = {
    1: (0, 0, 0, 0, 0),
    2: (2, 0, 0, 0, 0),
    3: (3, 0, 0, 0, 0),
    4: (3, 0, 0, 0, 0),
    5: (4, 2, 0, 0, 0),
    6: (4, 2, 0, 0, 0),
    7: (4, 3, 0, 0, 0),
    8: (4, 3, 0, 0, 0),
    9: (4, 3, 2, 0, 0),
    10: (4, 3, 2, 0, 0),
    11: (4, 3, 3, 0, 0),
    12: (4, 3, 3, 0, 0),
    13: (4, 3, 3, 1, 0),
    14: (4, 3, 3, 1, 0),
    15: (4, 3, 3, 2, 0),
    16: (4, 3, 3, 2, 0),
    17: (4, 3, 3, 3, 1),
    18: (4, 3, 3, 3, 1),
    19: (4, 3, 3, 3, 2),
    20: (4, 3, 3, 3, 2),
}

# Pact magic (Warlock) – (#slots, slot level) per character level
PACT_MAGIC = {
    1: (1, 1),
    2: (2, 1),
    3: (2, 2),
    4: (2, 2),
    5: (2, 3),
    6: (2, 3),
    7: (2, 4),
    8: (2, 4),
    9: (2, 5),
    10: (2, 5),
    11: (3, 5),
    12: (3, 5),
    13: (3, 5),
    14: (3, 5),
    15: (3, 5),
    16: (3, 5),
    17: (4, 5),
    18: (4, 5),
    19: (4, 5),
    20: (4, 5),
}


def _ranger_known(lvl: int) -> int:
    if lvl < 2:
        return 0
    return min(11, lvl // 2 + 1)


def _warlock_known(lvl: int) -> int:
    if lvl <= 9:
        return lvl + 1
    return min(15, 11 + (lvl - 10) // 2)


# Spells known by class and level (index 1..20). Prepared casters get a
# fixed starting pick so the creation wizard still asks for spells.
SPELLS_KNOWN: Dict[str, Dict[int, int]] = {
    "Bard": {lvl: min(22, lvl + 1) for lvl in range(1, 21)},
    "Cleric": {lvl: 3 for lvl in range(1, 21)},
    "Druid": {lvl: 2 for lvl in range(1, 21)},
    "Paladin": {lvl: 0 if lvl < 2 else lvl // 2 + 2 for lvl in range(1, 21)},
    "Ranger": {lvl: _ranger_known(lvl) for lvl in range(1, 21)},
    "Sorcerer": {lvl: min(15, lvl + 1) for lvl in range(1, 21)},
    "Warlock": {lvl: _warlock_known(lvl) for lvl in range(1, 21)},
    "Wizard": {lvl: 6 + (lvl - 1) * 2 for lvl in range(1, 21)},
}

# Point-buy
POINT_BUY_COSTS = {8: 0, 9: 1, 10: 2, 11: 3, 12: 4, 13: 5, 14: 7, 15: 9}  # 27-point buy
POINT_BUY_BUDGET = 27
POINT_BUY_MIN = 8
POINT_BUY_MAX = 15

STANDARD_ARRAY = (15, 14, 13, 12, 10, 8)

MANUAL_MIN = 3
MANUAL_MAX = 20

# Extra-language grants are filled from this pool, in order
EXTRA_LANGUAGE_POOL = (
    "elvish",
    "dwarvish",
    "halfling",
    "gnomish",
    "giant",
    "goblin",
    "orc",
    "abyssal",
    "celestial",
    "draconic",
)
FALLBACK_LANGUAGE = "elvish"
DEFAULT_LANGUAGES = ("common",)
DEFAULT_SPEED = 30
