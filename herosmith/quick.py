"""One-shot character creation from race + class + name.

Every other choice takes its default: the standard array in the class's
key-ability order, the first subrace, the suggested background, the first
class skills, option 0 of every equipment choice and the first eligible
spells (level 1 before cantrips).
"""
from __future__ import annotations

from typing import Dict, List

from herosmith.assembler import assemble
from herosmith.catalog import Catalog
from herosmith.derive import derive_stats
from herosmith.logging import get_logger
from herosmith.models import Character, WizardSelections
from herosmith.rules_core import (
    ABILITY_ORDER,
    EXPERTISE_CLASS,
    EXPERTISE_COUNT,
    KEY_ABILITIES,
    STANDARD_ARRAY,
    SUGGESTED_BACKGROUND,
)
from herosmith.wizard import (
    available_spells,
    final_scores,
    required_skill_count,
    spell_budget,
    step_issues,
    total_steps,
)

log = get_logger(__name__)

DEFAULT_NAME = "New Character"


class QuickCreateError(ValueError):
    pass


def ability_order(class_id: str) -> List[str]:
    primary, secondary = KEY_ABILITIES.get(class_id, ("str", "dex"))
    order = [primary, secondary]
    order += [a for a in ("con", "int", "wis", "cha") if a not in order]
    order += [a for a in ABILITY_ORDER if a not in order]
    return order


def standard_assignment(class_id: str) -> Dict[str, int]:
    return dict(zip(ability_order(class_id), STANDARD_ARRAY))


def quick_selections(catalog: Catalog, race_id: str, class_id: str, name: str = "") -> WizardSelections:
    race = catalog.race(race_id)
    if race is None:
        raise QuickCreateError(f"Unknown race: {race_id}")
    klass = catalog.character_class(class_id)
    if klass is None:
        raise QuickCreateError(f"Unknown class: {class_id}")

    s = WizardSelections(race=race_id, **{"class": class_id})
    subs = catalog.subraces_for(race_id)
    s.subrace = subs[0].id if subs else ""

    s.abilities.set_mode("standard")
    for key, value in standard_assignment(class_id).items():
        s.abilities.assign(key, value)

    s.name = name.strip() or DEFAULT_NAME
    suggested = SUGGESTED_BACKGROUND.get(class_id)
    if catalog.background(suggested) is not None:
        s.background = suggested
    elif catalog.backgrounds:
        s.background = catalog.backgrounds[0].id

    # level 1 spells first, cantrips fill whatever budget is left
    spells = sorted(available_spells(s, catalog), key=lambda sp: sp.level == 0)
    s.spells_known = [sp.id for sp in spells[: spell_budget(s)]]

    s.selected_skills = list(klass.proficiencies.skill_choices[: required_skill_count(klass)])
    if class_id == EXPERTISE_CLASS:
        s.selected_expertise = s.selected_skills[:EXPERTISE_COUNT]
    s.equipment_choices = {g.choice: 0 for g in klass.equipment_choices}
    return s


def quick_create(catalog: Catalog, race_id: str, class_id: str, name: str = "") -> Character:
    """Build a finished character without walking the wizard.

    Raises :class:`QuickCreateError` for an unknown race or class, or when the
    catalog cannot satisfy a step (e.g. too few spells for the class budget).
    """
    s = quick_selections(catalog, race_id, class_id, name)
    for step in range(1, total_steps(s) + 1):
        issues = step_issues(step, s, catalog)
        if issues:
            raise QuickCreateError(issues[0].message())
    scores = final_scores(s, catalog)
    stats = derive_stats(class_id, scores, s.level, s.gold)
    log.debug("Quick create %s %s with %s", race_id, class_id, scores)
    return assemble(s, scores, stats, catalog)


__all__ = [
    "QuickCreateError",
    "ability_order",
    "quick_create",
    "quick_selections",
    "standard_assignment",
]
