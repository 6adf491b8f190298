from __future__ import annotations

from collections.abc import Iterable, Mapping
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from herosmith.catalog import Catalog
from herosmith.derive import DerivedStats, modifier
from herosmith.models import Character
from herosmith.rules_core import ABILITY_ORDER

ABIL_NAMES = {
    "str": "STR",
    "dex": "DEX",
    "con": "CON",
    "int": "INT",
    "wis": "WIS",
    "cha": "CHA",
}


def format_mod(mod: int) -> str:
    return f"+{mod}" if mod >= 0 else str(mod)


def _csv(items: Iterable[str]) -> str:
    items = list(items)
    return ", ".join(items) if items else "—"


def _pkg_version() -> str:
    try:
        return pkg_version("herosmith")
    except PackageNotFoundError:  # pragma: no cover - local checkout
        return "0.0"


def slots_list(slots: Mapping[int, int]) -> list[str]:
    return [f"L{lvl}:{n}" for lvl, n in sorted(slots.items()) if n]


def ability_block(scores: Mapping[str, int]) -> Table:
    t = Table(box=None, show_header=False, expand=False)
    for a in ABILITY_ORDER:
        score = scores.get(a, 10)
        t.add_row(f"[bold]{ABIL_NAMES[a]}[/]", f"{score:>2} ({format_mod(modifier(score))})")
    return t


def stats_block(stats: DerivedStats) -> Table:
    t = Table(box=None, show_header=False, expand=False)
    t.add_row("HP", str(stats.max_hp))
    t.add_row("AC", str(stats.ac))
    t.add_row("Prof.", format_mod(stats.proficiency_bonus))
    t.add_row("Spell Save DC", str(stats.spell_dc) if stats.spell_dc is not None else "—")
    t.add_row("Slots", _csv(slots_list(stats.spell_slots)))
    t.add_row("Spells known", str(stats.spells_known))
    if stats.inspiration_max:
        t.add_row("Inspiration", str(stats.inspiration_max))
    t.add_row("Gold", str(stats.gold))
    return t


def prof_block(ch: Character) -> Table:
    t = Table(box=None, show_header=False, expand=False)
    p = ch.proficiencies
    t.add_row("Saves", ", ".join(s.upper() for s in p.saves) or "—")
    t.add_row("Skills", _csv(p.skills))
    if p.expertise:
        t.add_row("Expertise", _csv(p.expertise))
    t.add_row("Armor", _csv(p.armor))
    t.add_row("Weapons", _csv(p.weapons))
    t.add_row("Tools", _csv(p.tools))
    t.add_row("Languages", _csv(ch.languages))
    return t


def defense_block(ch: Character) -> Table:
    t = Table(box=None, show_header=False, expand=False)
    t.add_row("AC", str(ch.ac))
    t.add_row("HP", f"{ch.current_hp}/{ch.max_hp}")
    t.add_row("Speed", f"{ch.speed} ft")
    t.add_row("Init.", format_mod(ch.ability_mod("dex")))
    return t


def spellcasting_block(ch: Character, catalog: Catalog) -> Table:
    t = Table(box=None, show_header=False, expand=False)
    if ch.spell_dc is not None:
        t.add_row("Spell Save DC", str(ch.spell_dc))
    t.add_row("Slots", _csv(slots_list(ch.spell_slots)))
    names = [sp.name for sp in (catalog.spell(s) for s in ch.spells_known) if sp]
    t.add_row("Known", _csv(names))
    return t


def render_preview(scores: Mapping[str, int], stats: DerivedStats, console: Console | None = None) -> None:
    c = console or Console()
    c.print(Panel(ability_block(scores), title="Abilities", border_style="cyan"))
    c.print(Panel(stats_block(stats), title="Derived", border_style="green"))


def render_console(ch: Character, catalog: Catalog, console: Console | None = None) -> None:
    c = console or Console()
    sub = f" ({ch.subclass})" if ch.subclass else ""
    c.rule(f"[bold]{ch.name}[/] — {ch.race} {ch.class_}{sub}  L{ch.level}")
    c.print(Panel(ability_block(ch.ability_scores), title="Abilities", border_style="cyan"))
    c.print(Panel(prof_block(ch), title="Proficiencies", border_style="magenta"))
    c.print(Panel(defense_block(ch), title="Defense", border_style="green"))
    if ch.is_caster:
        c.print(Panel(spellcasting_block(ch, catalog), title="Spellcasting", border_style="yellow"))
    items = [catalog.item_name(i) for i in ch.equipment]
    c.print(Panel(_csv(items) + f"\nGold: {ch.gold}", title="Equipment", border_style="blue"))


def to_markdown(ch: Character, catalog: Catalog) -> str:
    sub = f" ({ch.subclass})" if ch.subclass else ""
    out = (
        f"# {ch.name}\n\n"
        f"**Race:** {ch.race}{f' ({ch.subrace})' if ch.subrace else ''}  \n"
        f"**Class:** {ch.class_}{sub}  \n"
        f"**Level:** {ch.level}  \n"
        f"**AC:** {ch.ac}  \n"
        f"**HP:** {ch.current_hp}/{ch.max_hp}\n\n"
    )
    out += "## Abilities\n\n"
    for a in ABILITY_ORDER:
        score = ch.ability_scores.get(a, 10)
        out += f"- **{ABIL_NAMES[a]}**: {score} ({format_mod(modifier(score))})\n"
    p = ch.proficiencies
    out += "\n## Proficiencies\n\n"
    out += (
        f"- **Saving Throws**: {', '.join(s.upper() for s in p.saves) or '—'}\n"
        f"- **Skills**: {_csv(p.skills)}\n"
        f"- **Expertise**: {_csv(p.expertise)}\n"
        f"- **Tools**: {_csv(p.tools)}\n"
        f"- **Languages**: {_csv(ch.languages)}\n\n"
    )
    if ch.is_caster:
        out += "## Spellcasting\n\n"
        out += f"- **Spell Save DC**: {ch.spell_dc}\n"
        out += f"- **Slots**: {_csv(slots_list(ch.spell_slots))}\n"
        names = [sp.name for sp in (catalog.spell(s) for s in ch.spells_known) if sp]
        out += f"- **Known**: {_csv(names)}\n\n"
    out += "## Equipment\n\n"
    for item in ch.equipment:
        out += f"- {catalog.item_name(item)}\n"
    out += f"- Gold: {ch.gold}\n"
    out += f"\n---\n\nVERSION: {_pkg_version()}\n"
    return out


__all__ = ["format_mod", "render_console", "render_preview", "slots_list", "to_markdown"]
