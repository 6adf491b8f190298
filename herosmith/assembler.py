from __future__ import annotations

import random
import string
import time
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional

from herosmith.catalog import Background, Catalog, CharacterClass, Race, Subrace
from herosmith.derive import DerivedStats
from herosmith.logging import get_logger
from herosmith.models import Character, Proficiencies, WizardSelections
from herosmith.rules_core import (
    DEFAULT_LANGUAGES,
    DEFAULT_SPEED,
    EXPERTISE_CLASS,
    EXTRA_LANGUAGE_POOL,
    FALLBACK_LANGUAGE,
)

log = get_logger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_id(rng: random.Random | None = None) -> str:
    """``<epoch ms>-<9 base36 chars>``: unique enough for one local roster."""
    rng = rng or random.Random()
    suffix = "".join(rng.choice(_ID_ALPHABET) for _ in range(9))
    return f"{int(time.time() * 1000)}-{suffix}"


def _dedupe(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


# --- Equipment ---


def resolve_equipment(klass: CharacterClass | None, choices: Mapping[str, int]) -> List[str]:
    out: List[str] = []
    if klass is None:
        return out
    for grant in klass.starting_equipment:
        if grant.fixed:
            out.extend(grant.fixed)
        elif grant.choice and grant.options:
            idx = choices.get(grant.choice, 0)
            if not 0 <= idx < len(grant.options):
                idx = 0
            out.extend(grant.options[idx])
    return out


# --- Languages ---


def resolve_languages(
    race: Race | None,
    subrace: Subrace | None,
    background: Background | None,
) -> List[str]:
    langs = list(race.languages if race and race.languages else DEFAULT_LANGUAGES)
    extras = (race.extra_languages if race else 0) + (subrace.extra_languages if subrace else 0)
    extras += background.languages if background else 0
    for _ in range(extras):
        nxt = next((l for l in EXTRA_LANGUAGE_POOL if l not in langs), None)
        langs.append(nxt or FALLBACK_LANGUAGE)
    return langs


# --- Proficiencies ---


def resolve_skills(selected: Iterable[str], background: Background | None) -> List[str]:
    bg_skills = background.skill_proficiencies if background else []
    return _dedupe([*selected, *bg_skills])


def resolve_expertise(class_id: str, expertise: Iterable[str], skills: List[str]) -> List[str]:
    if class_id != EXPERTISE_CLASS:
        return []
    return [s for s in _dedupe(expertise) if s in skills]


def resolve_proficiencies(
    selections: WizardSelections,
    klass: CharacterClass | None,
    background: Background | None,
) -> Proficiencies:
    class_profs = klass.proficiencies if klass else None
    skills = resolve_skills(selections.selected_skills, background)
    tools = [*(class_profs.tools if class_profs else []), *(background.tool_proficiencies if background else [])]
    return Proficiencies(
        saves=list(class_profs.saves) if class_profs else [],
        skills=skills,
        expertise=resolve_expertise(selections.class_, selections.selected_expertise, skills),
        armor=list(class_profs.armor) if class_profs else [],
        weapons=list(class_profs.weapons) if class_profs else [],
        tools=_dedupe(tools),
    )


# --- Assembly ---


def assemble(
    selections: WizardSelections,
    final_scores: Mapping[str, int],
    derived: DerivedStats,
    catalog: Catalog,
    *,
    char_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Character:
    """Fold wizard selections and derived stats into one finished character."""
    race = catalog.race(selections.race)
    subrace = catalog.subrace(selections.subrace)
    klass = catalog.character_class(selections.class_)
    background = catalog.background(selections.background)

    speed = (race.speed if race else DEFAULT_SPEED) + (subrace.speed_bonus if subrace else 0)
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    slots: Dict[int, int] = dict(derived.spell_slots)

    character = Character(
        id=char_id or generate_id(),
        name=selections.name.strip(),
        race=selections.race,
        subrace=selections.subrace or None,
        **{"class": selections.class_},
        subclass=selections.subclass or None,
        level=selections.level,
        background=selections.background or None,
        ability_scores=dict(final_scores),
        max_hp=derived.max_hp,
        current_hp=derived.max_hp,
        ac=derived.ac,
        spell_dc=derived.spell_dc,
        inspiration=derived.inspiration_max,
        inspiration_max=derived.inspiration_max,
        spell_slots=slots,
        spell_slots_max=dict(slots),
        gold=derived.gold,
        spells_known=[s for s in _dedupe(selections.spells_known) if catalog.spell(s) is not None],
        proficiencies=resolve_proficiencies(selections, klass, background),
        equipment=[i for i in resolve_equipment(klass, selections.equipment_choices) if catalog.item(i) is not None],
        speed=speed,
        languages=resolve_languages(race, subrace, background),
        created_at=stamp,
        updated_at=stamp,
    )
    log.info("Assembled %s (%s %s)", character.name, selections.race, selections.class_)
    return character


__all__ = [
    "assemble",
    "generate_id",
    "resolve_equipment",
    "resolve_expertise",
    "resolve_languages",
    "resolve_proficiencies",
    "resolve_skills",
]
