from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from herosmith.bonuses import apply_bonuses
from herosmith.catalog import Catalog, CatalogError
from herosmith.cli_wizard import WizardContext, run_wizard
from herosmith.config import drafts_dir, get_catalog_path, get_language, load_env
from herosmith.derive import derive_stats
from herosmith.dice import RNG, roll_4d6_drop_lowest
from herosmith.drafts import DRAFT_KEY, JsonFileDraftStore
from herosmith.i18n import translate
from herosmith.quick import QuickCreateError, quick_create
from herosmith.sheet import render_console, render_preview, to_markdown
from herosmith.validation import (
    PrettyError,
    export_characters,
    import_characters,
    load_character,
    save_character,
)
from herosmith.wizard import CharacterWizard


app = typer.Typer(no_args_is_help=True, help="herosmith - level 1 character builder")
draft_app = typer.Typer(help="Inspect or remove the wizard draft")
app.add_typer(draft_app, name="draft")


@app.callback()
def _main() -> None:
    load_env()


def _catalog(path: Optional[Path]) -> Catalog:
    resolved = get_catalog_path(path)
    if resolved is None:
        return Catalog.default()
    try:
        return Catalog.load(resolved)
    except CatalogError as e:
        typer.secho(f"ERR: {resolved}\n{e}", fg=typer.colors.RED)
        raise typer.Exit(1)


def _store() -> JsonFileDraftStore:
    return JsonFileDraftStore(drafts_dir())


@app.command()
def create(
    out: Path = typer.Option(Path("character.json"), help="Output file"),
    lang: str = typer.Option(None, "--lang", help="Message language, e.g. en or es"),
    catalog: Path = typer.Option(None, "--catalog", help="Alternate catalog (yaml/json)"),
    seed: int = typer.Option(None, help="Seed for dice rolls"),
    quick: bool = typer.Option(False, "--quick", help="Skip the wizard and take the defaults"),
    race: str = typer.Option(None, help="Race id for --quick"),
    class_: str = typer.Option(None, "--class", help="Class for --quick, e.g. Fighter"),
    name: str = typer.Option("", help="Name for --quick"),
):
    """Build a character step by step, or in one go with --quick."""
    locale = get_language(lang)
    cat = _catalog(catalog)
    if quick:
        if not race or not class_:
            typer.secho(translate("quick.missing", locale=locale), fg=typer.colors.RED)
            raise typer.Exit(1)
        try:
            character = quick_create(cat, race, class_, name)
        except QuickCreateError as e:
            typer.secho(f"ERR: {e}", fg=typer.colors.RED)
            raise typer.Exit(1)
    else:
        wiz = CharacterWizard(cat, _store())
        character = run_wizard(wiz, WizardContext(rng=RNG(seed), locale=locale))
    if character is None:
        typer.echo(translate("wizard.none", locale=locale))
        raise typer.Exit(1)
    save_character(character, out)
    render_console(character, cat)
    typer.secho(translate("wizard.created", out, locale=locale), fg=typer.colors.GREEN)


@app.command()
def roll(
    seed: int = typer.Option(None, help="Seed for reproducible rolls"),
    detail: bool = typer.Option(False, help="Show every die"),
):
    """Roll six ability scores (4d6, drop the lowest)."""
    rng = RNG(seed)
    results = [roll_4d6_drop_lowest(rng) for _ in range(6)]
    if detail:
        for r in results:
            d = r["detail"]
            typer.echo(f"{r['total']:>2}  rolls={d['rolls']} dropped={d['dropped']}")
    typer.echo(" ".join(str(r["total"]) for r in results))


@app.command()
def preview(
    class_: str = typer.Option(..., "--class", help="Class, e.g. Wizard"),
    race: str = typer.Option(None),
    subrace: str = typer.Option(None),
    str_: int = typer.Option(10, "--str"),
    dex: int = typer.Option(10, "--dex"),
    con: int = typer.Option(10, "--con"),
    int_: int = typer.Option(10, "--int"),
    wis: int = typer.Option(10, "--wis"),
    cha: int = typer.Option(10, "--cha"),
    catalog: Path = typer.Option(None, "--catalog"),
):
    """Show derived level 1 stats without running the wizard."""
    cat = _catalog(catalog)
    if cat.character_class(class_) is None:
        typer.secho(f"Unknown class: {class_}", fg=typer.colors.RED)
        raise typer.Exit(1)
    base = {"str": str_, "dex": dex, "con": con, "int": int_, "wis": wis, "cha": cha}
    scores = apply_bonuses(base, race, subrace, cat)
    render_preview(scores, derive_stats(class_, scores), Console())


@app.command()
def validate(file: Path = typer.Argument(..., exists=True)):
    """Validate a character json file."""
    try:
        _ = load_character(file)
        typer.secho(f"OK: {file}", fg=typer.colors.GREEN)
    except PrettyError as e:
        typer.secho(f"ERR: {file}\n{e}", fg=typer.colors.RED)
        raise typer.Exit(1)


@app.command()
def sheet(
    file: Path = typer.Argument(..., exists=True),
    fmt: str = typer.Option("tty", "--fmt", help="tty|md"),
    catalog: Path = typer.Option(None, "--catalog"),
):
    """Render a saved character."""
    try:
        ch = load_character(file)
    except PrettyError as e:
        typer.secho(f"ERR: {file}\n{e}", fg=typer.colors.RED)
        raise typer.Exit(1)
    cat = _catalog(catalog)
    if fmt == "md":
        typer.echo(to_markdown(ch, cat))
    else:
        render_console(ch, cat)


@app.command("export")
def export_cmd(
    files: List[Path] = typer.Argument(..., exists=True),
    out: Path = typer.Option(Path("characters.json"), help="Output file"),
):
    """Bundle character files into one export file."""
    try:
        chars = [load_character(f) for f in files]
    except PrettyError as e:
        typer.secho(f"ERR: {e}", fg=typer.colors.RED)
        raise typer.Exit(1)
    out.write_text(export_characters(chars), encoding="utf-8")
    typer.secho(f"Exported {len(chars)} → {out}", fg=typer.colors.GREEN)


@app.command("import")
def import_cmd(
    file: Path = typer.Argument(..., exists=True),
    dest: Path = typer.Option(Path("."), help="Directory for the character files"),
):
    """Split an export file back into one file per character."""
    try:
        chars = import_characters(file.read_text(encoding="utf-8"))
    except PrettyError as e:
        typer.secho(f"ERR: {file}\n{e}", fg=typer.colors.RED)
        raise typer.Exit(1)
    for ch in chars:
        save_character(ch, dest / f"{ch.id}.json")
    typer.secho(f"Imported {len(chars)} → {dest}", fg=typer.colors.GREEN)


@draft_app.command("show")
def draft_show():
    """Print the pending draft, if any."""
    try:
        data = _store().get(DRAFT_KEY)
    except json.JSONDecodeError as e:
        typer.secho(f"ERR: unreadable draft\n{e}", fg=typer.colors.RED)
        raise typer.Exit(1)
    if not data:
        typer.echo("No draft.")
        return
    typer.echo(json.dumps(data, indent=2))


@draft_app.command("clear")
def draft_clear():
    """Delete the pending draft."""
    _store().delete(DRAFT_KEY)
    typer.secho("Draft cleared.", fg=typer.colors.GREEN)


def main() -> None:  # pragma: no cover - console entry
    app()


__all__ = ["app", "main"]
