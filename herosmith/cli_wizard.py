"""Terminal front-end for :class:`~herosmith.wizard.CharacterWizard`.

Each step handler only gathers input and pushes it into the wizard; the
wizard decides whether the cursor may move.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

import typer
from rich.console import Console

from herosmith.dice import RNG
from herosmith.i18n import translate
from herosmith.models import Character
from herosmith.rules_core import ABILITY_ORDER, EXPERTISE_CLASS, EXPERTISE_COUNT
from herosmith.sheet import render_preview
from herosmith.wizard import CharacterWizard

Option = Tuple[str, str]
MODES = ["standard", "point_buy", "dice", "manual"]


def _print_options(options: Sequence[Option]) -> None:
    for i, (_, label) in enumerate(options, start=1):
        typer.echo(f"  {i}. {label}")


def _resolve(token: str, options: Sequence[Option]) -> Optional[str]:
    token = token.strip()
    if token.isdigit():
        idx = int(token) - 1
        return options[idx][0] if 0 <= idx < len(options) else None
    for key, label in options:
        if token.lower() in (key.lower(), label.lower()):
            return key
    return None


def choose(label: str, options: Sequence[Option], *, optional: bool = False, locale: str = "en") -> str:
    _print_options(options)
    while True:
        raw = typer.prompt(label, default="" if optional else None, show_default=False)
        if optional and not raw.strip():
            return ""
        picked = _resolve(raw, options)
        if picked is not None:
            return picked
        typer.secho(translate("prompt.unknown", raw, locale=locale), fg=typer.colors.YELLOW)


def ask(label: str, allowed: Sequence[str], default: str | None = None, *, locale: str = "en") -> str:
    while True:
        raw = typer.prompt(label, default=default).strip().lower()
        if raw in allowed:
            return raw
        typer.secho(translate("prompt.expected", ", ".join(allowed), locale=locale), fg=typer.colors.YELLOW)


def choose_many(label: str, options: Sequence[Option], *, locale: str = "en") -> List[str]:
    _print_options(options)
    raw = typer.prompt(label, default="", show_default=False)
    picked: List[str] = []
    for token in raw.split(","):
        if not token.strip():
            continue
        key = _resolve(token, options)
        if key is None:
            typer.secho(translate("prompt.unknown", token.strip(), locale=locale), fg=typer.colors.YELLOW)
        elif key not in picked:
            picked.append(key)
    return picked


# --- Step handlers ---


def _race_step(wiz: CharacterWizard, ctx: "WizardContext") -> None:
    cat = wiz.catalog
    race_id = choose(
        ctx.t("prompt.race"), [(r.id, f"{r.name} — {r.description}") for r in cat.races], locale=ctx.locale
    )
    wiz.select_race(race_id)
    subs = cat.subraces_for(race_id)
    if subs:
        wiz.select_subrace(
            choose(ctx.t("prompt.subrace"), [(s.id, s.name) for s in subs], optional=True, locale=ctx.locale)
        )


def _class_step(wiz: CharacterWizard, ctx: "WizardContext") -> None:
    cat = wiz.catalog
    class_id = choose(
        ctx.t("prompt.class"), [(c.id, f"{c.name} — {c.description}") for c in cat.classes], locale=ctx.locale
    )
    wiz.select_class(class_id)
    subs = cat.subclasses_for(class_id)
    if subs:
        wiz.select_subclass(
            choose(ctx.t("prompt.subclass"), [(s.id, s.name) for s in subs], optional=True, locale=ctx.locale)
        )


def _assign_from_pool(wiz: CharacterWizard, ctx: "WizardContext") -> None:
    for key in ABILITY_ORDER:
        wiz.clear_ability(key)
    for key in ABILITY_ORDER:
        values = wiz.abilities.available_values(key)
        choice = ask(f"{key.upper()} {values}", [str(v) for v in values], locale=ctx.locale)
        wiz.assign_ability(key, int(choice))


def _abilities_step(wiz: CharacterWizard, ctx: "WizardContext") -> None:
    mode = ask(ctx.t("prompt.mode", ", ".join(MODES)), MODES, default=wiz.abilities.mode, locale=ctx.locale)
    wiz.set_ability_mode(mode)
    if mode == "dice":
        if not wiz.abilities.dice.pool or typer.confirm(ctx.t("prompt.roll_again"), default=False):
            wiz.roll_abilities(ctx.rng)
        typer.echo(ctx.t("prompt.rolled", wiz.abilities.dice.pool))
    if mode in ("standard", "dice"):
        _assign_from_pool(wiz, ctx)
    else:
        for key in ABILITY_ORDER:
            current = wiz.abilities.base_scores()[key]
            if mode == "point_buy":
                typer.echo(ctx.t("prompt.points", wiz.abilities.points_remaining()))
            value = typer.prompt(key.upper(), default=current, type=int)
            if not wiz.set_ability_score(key, value):
                typer.secho(ctx.t("prompt.rejected", value, key.upper()), fg=typer.colors.YELLOW)
    render_preview(wiz.final_scores(), wiz.preview().stats, ctx.console)


def _identity_step(wiz: CharacterWizard, ctx: "WizardContext") -> None:
    wiz.set_name(typer.prompt(ctx.t("prompt.name"), default=wiz.selections.name or None))
    cat = wiz.catalog
    wiz.set_background(
        choose(
            ctx.t("prompt.background"),
            [(b.id, b.name) for b in cat.backgrounds],
            optional=True,
            locale=ctx.locale,
        )
    )


def _spells_step(wiz: CharacterWizard, ctx: "WizardContext") -> None:
    budget = wiz.spell_budget()
    options = [(sp.id, f"{sp.name} (L{sp.level})") for sp in wiz.available_spells()]
    for spell_id in list(wiz.selections.spells_known):
        wiz.toggle_spell(spell_id)
    for spell_id in choose_many(ctx.t("prompt.spells", budget), options, locale=ctx.locale):
        if not wiz.toggle_spell(spell_id):
            typer.secho(ctx.t("prompt.skipped", spell_id), fg=typer.colors.YELLOW)


def _equipment_step(wiz: CharacterWizard, ctx: "WizardContext") -> None:
    need = wiz.required_skill_count()
    if need:
        for skill in list(wiz.selections.selected_skills):
            wiz.toggle_skill(skill)
        options = [(s, s.replace("_", " ").title()) for s in wiz.skill_choices()]
        for skill in choose_many(ctx.t("prompt.skills", need), options, locale=ctx.locale):
            wiz.toggle_skill(skill)
    if wiz.selections.class_ == EXPERTISE_CLASS and wiz.selections.selected_skills:
        for skill in list(wiz.selections.selected_expertise):
            wiz.toggle_expertise(skill)
        options = [(s, s.replace("_", " ").title()) for s in wiz.selections.selected_skills]
        for skill in choose_many(ctx.t("prompt.expertise", EXPERTISE_COUNT), options, locale=ctx.locale):
            wiz.toggle_expertise(skill)
    klass = wiz.catalog.character_class(wiz.selections.class_)
    for grant in klass.equipment_choices if klass else []:
        options = [
            (str(i), " + ".join(wiz.catalog.item_name(x) for x in opt)) for i, opt in enumerate(grant.options)
        ]
        picked = choose(ctx.t("prompt.equipment", grant.choice), options, locale=ctx.locale)
        wiz.choose_equipment(grant.choice, int(picked))


def _summary_step(wiz: CharacterWizard, ctx: "WizardContext") -> None:
    preview = wiz.preview()
    render_preview(preview.final_scores, preview.stats, ctx.console)


HANDLERS: Dict[str, Callable[[CharacterWizard, "WizardContext"], None]] = {
    "race": _race_step,
    "class": _class_step,
    "abilities": _abilities_step,
    "identity": _identity_step,
    "spells": _spells_step,
    "equipment": _equipment_step,
    "summary": _summary_step,
}


class WizardContext:
    def __init__(self, rng: RNG | None = None, locale: str = "en", console: Console | None = None) -> None:
        self.rng = rng or RNG()
        self.locale = locale
        self.console = console or Console()

    def t(self, key: str, *args: object) -> str:
        return translate(key, *args, locale=self.locale)


def run_wizard(wiz: CharacterWizard, ctx: WizardContext | None = None) -> Optional[Character]:
    ctx = ctx or WizardContext()
    if wiz.start():
        saved = wiz.pending_draft.step if wiz.pending_draft else 1
        if typer.confirm(ctx.t("wizard.resume", saved), default=True):
            wiz.resume()
        else:
            wiz.discard()

    while not wiz.closed:
        kind = wiz.step_kind()
        title = ctx.t(f"wizard.step.{kind}")
        typer.secho(f"{ctx.t('wizard.step', wiz.step, wiz.total_steps)}: {title}", bold=True)
        HANDLERS[kind](wiz, ctx)
        action = ask(ctx.t("wizard.action"), ["n", "b", "c"], default="n", locale=ctx.locale)
        if action == "c":
            wiz.cancel()
            break
        if action == "b":
            wiz.back()
            continue
        for issue in wiz.next():
            typer.secho(issue.message(ctx.locale), fg=typer.colors.RED)
    return wiz.completed


__all__ = ["WizardContext", "ask", "choose", "choose_many", "run_wizard"]
