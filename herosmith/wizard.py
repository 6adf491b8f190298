"""Character-creation wizard: step cursor, advance gates, draft save/resume.

Step layout is a projection of the current selections, recomputed on every
call rather than stored::

    1 race  2 class  3 abilities  4 identity  [5 spells]  equipment  summary

The spell step only exists when the chosen class casts and its level-1
spells-known budget is above zero, so ``total_steps`` is 6 or 7.

Gates never raise. A failed gate is a list of :class:`ValidationIssue`
(message key + positional args) and the cursor stays where it is. Draft
writes are best effort: any store failure is logged and dropped.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from herosmith.allocator import AbilityAllocator
from herosmith.assembler import assemble
from herosmith.bonuses import apply_bonuses
from herosmith.catalog import Catalog, CharacterClass, Spell
from herosmith.derive import (
    DerivedStats,
    derive_stats,
    is_caster,
    max_spell_level_for_level,
    spells_known_count,
)
from herosmith.dice import RNG
from herosmith.drafts import DRAFT_KEY, DraftStore, MemoryDraftStore
from herosmith.i18n import translate
from herosmith.logging import get_logger
from herosmith.models import Character, WizardDraft, WizardSelections
from herosmith.rules_core import (
    EXPERTISE_CLASS,
    EXPERTISE_COUNT,
    POINT_BUY_BUDGET,
)

log = get_logger(__name__)

RACE = "race"
CLASS = "class"
ABILITIES = "abilities"
IDENTITY = "identity"
SPELLS = "spells"
EQUIPMENT = "equipment"
SUMMARY = "summary"


@dataclass(frozen=True)
class ValidationIssue:
    key: str
    args: Tuple[object, ...] = ()

    def message(self, locale: str = "en") -> str:
        return translate(self.key, *self.args, locale=locale)


@dataclass
class Preview:
    final_scores: Dict[str, int]
    stats: DerivedStats
    total_steps: int
    warnings: List[ValidationIssue] = field(default_factory=list)


# --- Pure projections over selections ---


def has_spell_step(selections: WizardSelections) -> bool:
    return is_caster(selections.class_) and spells_known_count(selections.class_, selections.level) > 0


def step_kinds(selections: WizardSelections) -> List[str]:
    kinds = [RACE, CLASS, ABILITIES, IDENTITY]
    if has_spell_step(selections):
        kinds.append(SPELLS)
    kinds += [EQUIPMENT, SUMMARY]
    return kinds


def total_steps(selections: WizardSelections) -> int:
    return len(step_kinds(selections))


def spell_budget(selections: WizardSelections) -> int:
    if not is_caster(selections.class_):
        return 0
    return spells_known_count(selections.class_, selections.level)


def available_spells(selections: WizardSelections, catalog: Catalog) -> List[Spell]:
    if not is_caster(selections.class_):
        return []
    return catalog.spells_for(selections.class_, max_spell_level_for_level(selections.level))


def required_skill_count(klass: CharacterClass | None) -> int:
    if klass is None or not klass.proficiencies.skill_choices:
        return 0
    return klass.proficiencies.skill_count


def final_scores(selections: WizardSelections, catalog: Catalog) -> Dict[str, int]:
    return apply_bonuses(
        selections.abilities.base_scores(), selections.race, selections.subrace, catalog
    )


# --- Gates ---


def _check_race(s: WizardSelections, catalog: Catalog) -> List[ValidationIssue]:
    if catalog.race(s.race) is None:
        return [ValidationIssue("error.race.required")]
    if s.subrace:
        sub = catalog.subrace(s.subrace)
        if sub is None or sub.race_id != s.race:
            return [ValidationIssue("error.subrace.invalid", (s.subrace,))]
    return []


def _check_class(s: WizardSelections, catalog: Catalog) -> List[ValidationIssue]:
    if catalog.character_class(s.class_) is None:
        return [ValidationIssue("error.class.required")]
    if s.subclass:
        sub = catalog.subclass(s.subclass)
        if sub is None or sub.class_id != s.class_:
            return [ValidationIssue("error.subclass.invalid", (s.subclass,))]
    return []


def _check_abilities(s: WizardSelections, catalog: Catalog) -> List[ValidationIssue]:
    alloc = s.abilities
    if alloc.is_complete():
        return []
    if alloc.mode == "point_buy" and alloc.point_buy_cost() > POINT_BUY_BUDGET:
        return [ValidationIssue("error.abilities.budget", (alloc.point_buy_cost(), POINT_BUY_BUDGET))]
    return [ValidationIssue("error.abilities.incomplete", (alloc.mode,))]


def _check_identity(s: WizardSelections, catalog: Catalog) -> List[ValidationIssue]:
    if not s.name.strip():
        return [ValidationIssue("error.name.required")]
    return []


def _check_spells(s: WizardSelections, catalog: Catalog) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    eligible = {sp.id for sp in available_spells(s, catalog)}
    for spell_id in s.spells_known:
        if spell_id not in eligible:
            issues.append(ValidationIssue("error.spells.invalid", (spell_id,)))
    budget = spell_budget(s)
    if len(s.spells_known) != budget:
        issues.append(ValidationIssue("error.spells.count", (budget, len(s.spells_known))))
    return issues


def _check_equipment(s: WizardSelections, catalog: Catalog) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    klass = catalog.character_class(s.class_)
    choices = klass.proficiencies.skill_choices if klass else []
    need = required_skill_count(klass)
    for skill in s.selected_skills:
        if choices and skill not in choices:
            issues.append(ValidationIssue("error.skills.invalid", (skill,)))
    if len(s.selected_skills) < need:
        issues.append(ValidationIssue("error.skills.count", (need, len(s.selected_skills))))
    if s.class_ == EXPERTISE_CLASS:
        for skill in s.selected_expertise:
            if skill not in s.selected_skills:
                issues.append(ValidationIssue("error.expertise.subset", (skill,)))
        if len(s.selected_expertise) != EXPERTISE_COUNT:
            issues.append(
                ValidationIssue("error.expertise.count", (EXPERTISE_COUNT, len(s.selected_expertise)))
            )
    return issues


def _check_summary(s: WizardSelections, catalog: Catalog) -> List[ValidationIssue]:
    return []


GATES: Dict[str, Callable[[WizardSelections, Catalog], List[ValidationIssue]]] = {
    RACE: _check_race,
    CLASS: _check_class,
    ABILITIES: _check_abilities,
    IDENTITY: _check_identity,
    SPELLS: _check_spells,
    EQUIPMENT: _check_equipment,
    SUMMARY: _check_summary,
}


def step_issues(step: int, selections: WizardSelections, catalog: Catalog) -> List[ValidationIssue]:
    kinds = step_kinds(selections)
    if not 1 <= step <= len(kinds):
        return []
    return GATES[kinds[step - 1]](selections, catalog)


# --- State machine ---


class CharacterWizard:
    """Owns the step cursor, the selections and the draft lifecycle.

    Typical flow::

        wiz = CharacterWizard(catalog, store)
        if wiz.start():          # a draft exists
            wiz.resume()         # or wiz.discard()
        wiz.select_race("elf")
        wiz.next()
        ...
        character = wiz.completed
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        store: DraftStore | None = None,
        *,
        draft_key: str = DRAFT_KEY,
        on_complete: Callable[[Character], None] | None = None,
    ) -> None:
        self.catalog = catalog or Catalog.default()
        self.store: DraftStore = store if store is not None else MemoryDraftStore()
        self.draft_key = draft_key
        self.on_complete = on_complete
        self.step = 1
        self.selections = WizardSelections()
        self.pending_draft: Optional[WizardDraft] = None
        self.completed: Optional[Character] = None
        self.closed = False

    # --- Draft lifecycle ---

    def start(self) -> bool:
        """Open the wizard. Returns True when a saved draft awaits resume/discard."""
        draft = self._load_draft()
        if draft is not None:
            self.pending_draft = draft
            return True
        self._persist()
        return False

    @property
    def awaiting_resume(self) -> bool:
        return self.pending_draft is not None

    def resume(self) -> None:
        draft = self.pending_draft
        self.pending_draft = None
        if draft is None:
            return
        self.selections = draft.selections
        self.step = min(max(1, draft.step), self.total_steps)
        log.debug("Resumed draft at step %d", self.step)
        self._persist()

    def discard(self) -> None:
        self.pending_draft = None
        self.step = 1
        self.selections = WizardSelections()
        self._delete_draft()

    def cancel(self) -> None:
        self._delete_draft()
        self.closed = True

    def finish(self) -> Optional[Character]:
        for n in range(1, self.total_steps):
            if step_issues(n, self.selections, self.catalog):
                self.step = n
                self._persist()
                return None
        scores = self.final_scores()
        stats = derive_stats(self.selections.class_, scores, self.selections.level, self.selections.gold)
        character = assemble(self.selections, scores, stats, self.catalog)
        self._delete_draft()
        self.completed = character
        self.closed = True
        if self.on_complete is not None:
            self.on_complete(character)
        return character

    def _load_draft(self) -> Optional[WizardDraft]:
        try:
            data = self.store.get(self.draft_key)
        except Exception as e:
            log.warning("Could not read wizard draft: %s", e)
            return None
        if not data:
            return None
        try:
            return WizardDraft.model_validate(data)
        except ValidationError as e:
            log.warning("Ignoring unreadable wizard draft: %s", e)
            return None

    def _persist(self) -> None:
        if self.pending_draft is not None or self.closed:
            return
        draft = WizardDraft(step=self.step, selections=self.selections)
        try:
            self.store.set(self.draft_key, draft.model_dump(mode="json", by_alias=True))
        except Exception as e:
            log.warning("Could not save wizard draft: %s", e)

    def _delete_draft(self) -> None:
        try:
            self.store.delete(self.draft_key)
        except Exception as e:
            log.warning("Could not delete wizard draft: %s", e)

    # --- Projections ---

    @property
    def total_steps(self) -> int:
        return total_steps(self.selections)

    def step_kind(self, step: int | None = None) -> str:
        kinds = step_kinds(self.selections)
        n = min(max(1, step or self.step), len(kinds))
        return kinds[n - 1]

    def final_scores(self) -> Dict[str, int]:
        return final_scores(self.selections, self.catalog)

    def preview(self) -> Preview:
        scores = self.final_scores()
        s = self.selections
        return Preview(
            final_scores=scores,
            stats=derive_stats(s.class_, scores, s.level, s.gold),
            total_steps=self.total_steps,
            warnings=self.issues(),
        )

    def spell_budget(self) -> int:
        return spell_budget(self.selections)

    def available_spells(self) -> List[Spell]:
        return available_spells(self.selections, self.catalog)

    def skill_choices(self) -> List[str]:
        klass = self.catalog.character_class(self.selections.class_)
        return list(klass.proficiencies.skill_choices) if klass else []

    def required_skill_count(self) -> int:
        return required_skill_count(self.catalog.character_class(self.selections.class_))

    # --- Navigation ---

    def issues(self, step: int | None = None) -> List[ValidationIssue]:
        return step_issues(step or self.step, self.selections, self.catalog)

    def can_advance(self, step: int | None = None) -> bool:
        return not self.issues(step)

    def is_unlocked(self, step: int) -> bool:
        if step <= self.step:
            return True
        return all(self.can_advance(n) for n in range(1, step))

    def next(self) -> List[ValidationIssue]:
        if self.closed:
            return []
        issues = self.issues()
        if issues:
            return issues
        if self.step >= self.total_steps:
            if self.finish() is None:
                return self.issues()
            return []
        self.step += 1
        log.debug("Advanced to step %d (%s)", self.step, self.step_kind())
        self._persist()
        return []

    def back(self) -> None:
        self.step = max(1, self.step - 1)
        self._persist()

    def jump(self, step: int) -> bool:
        if not 1 <= step <= self.total_steps or not self.is_unlocked(step):
            return False
        self.step = step
        self._persist()
        return True

    # --- Selections ---

    def _changed(self) -> None:
        self.step = min(self.step, self.total_steps)
        self._persist()

    def select_race(self, race_id: str) -> bool:
        if self.catalog.race(race_id) is None:
            return False
        if race_id != self.selections.race:
            self.selections.subrace = ""
        self.selections.race = race_id
        self._changed()
        return True

    def select_subrace(self, subrace_id: str) -> bool:
        if subrace_id:
            sub = self.catalog.subrace(subrace_id)
            if sub is None or sub.race_id != self.selections.race:
                return False
        self.selections.subrace = subrace_id
        self._changed()
        return True

    def select_class(self, class_id: str) -> bool:
        klass = self.catalog.character_class(class_id)
        if klass is None:
            return False
        s = self.selections
        if class_id != s.class_:
            s.subclass = ""
            s.equipment_choices = {}
            choices = klass.proficiencies.skill_choices
            s.selected_skills = [k for k in s.selected_skills if k in choices][: required_skill_count(klass)]
            s.selected_expertise = []
        s.class_ = class_id
        self._reconcile_spells()
        self._changed()
        return True

    def _reconcile_spells(self) -> None:
        s = self.selections
        eligible = {sp.id for sp in self.available_spells()}
        kept = [sp for sp in s.spells_known if sp in eligible][: self.spell_budget()]
        if kept != s.spells_known:
            log.debug("Dropped spells no longer valid for %s: %s", s.class_, set(s.spells_known) - set(kept))
        s.spells_known = kept

    def select_subclass(self, subclass_id: str) -> bool:
        if subclass_id:
            sub = self.catalog.subclass(subclass_id)
            if sub is None or sub.class_id != self.selections.class_:
                return False
        self.selections.subclass = subclass_id
        self._changed()
        return True

    def set_name(self, name: str) -> None:
        self.selections.name = name
        self._changed()

    def set_background(self, background_id: str) -> bool:
        if background_id and self.catalog.background(background_id) is None:
            return False
        self.selections.background = background_id
        self._changed()
        return True

    def set_gold(self, gold: int | None) -> None:
        self.selections.gold = None if gold is None else max(0, int(gold))
        self._changed()

    def toggle_spell(self, spell_id: str) -> bool:
        known = self.selections.spells_known
        if spell_id in known:
            known.remove(spell_id)
        elif len(known) < self.spell_budget() and spell_id in {sp.id for sp in self.available_spells()}:
            known.append(spell_id)
        else:
            return False
        self._changed()
        return True

    def toggle_skill(self, skill: str) -> bool:
        s = self.selections
        if skill in s.selected_skills:
            s.selected_skills.remove(skill)
            if skill in s.selected_expertise:
                s.selected_expertise.remove(skill)
        elif skill in self.skill_choices() and len(s.selected_skills) < self.required_skill_count():
            s.selected_skills.append(skill)
        else:
            return False
        self._changed()
        return True

    def toggle_expertise(self, skill: str) -> bool:
        s = self.selections
        if s.class_ != EXPERTISE_CLASS:
            return False
        if skill in s.selected_expertise:
            s.selected_expertise.remove(skill)
        elif skill in s.selected_skills and len(s.selected_expertise) < EXPERTISE_COUNT:
            s.selected_expertise.append(skill)
        else:
            return False
        self._changed()
        return True

    def choose_equipment(self, choice: str, index: int) -> bool:
        klass = self.catalog.character_class(self.selections.class_)
        grant = next((g for g in klass.equipment_choices if g.choice == choice), None) if klass else None
        if grant is None or not 0 <= index < len(grant.options):
            return False
        self.selections.equipment_choices[choice] = index
        self._changed()
        return True

    # --- Ability scores ---

    @property
    def abilities(self) -> AbilityAllocator:
        return self.selections.abilities

    def set_ability_mode(self, mode: str) -> None:
        self.abilities.set_mode(mode)
        self._changed()

    def assign_ability(self, key: str, value: int | None) -> bool:
        ok = self.abilities.assign(key, value)
        if ok:
            self._changed()
        return ok

    def clear_ability(self, key: str) -> bool:
        ok = self.abilities.clear(key)
        if ok:
            self._changed()
        return ok

    def set_ability_score(self, key: str, value: int) -> bool:
        ok = self.abilities.set_score(key, value)
        if ok:
            self._changed()
        return ok

    def roll_abilities(self, rng: RNG | None = None) -> List[int]:
        pool = self.abilities.roll_pool(rng)
        self._changed()
        return pool


__all__ = [
    "CharacterWizard",
    "Preview",
    "ValidationIssue",
    "available_spells",
    "final_scores",
    "has_spell_step",
    "required_skill_count",
    "spell_budget",
    "step_issues",
    "step_kinds",
    "total_steps",
]
