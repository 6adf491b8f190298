from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List

from jsonschema import Draft202012Validator
from pydantic import ValidationError

from herosmith.models import Character

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
EXPORT_VERSION = 1
MAX_CHARACTERS = 500
MAX_JSON_BYTES = 2 * 1024 * 1024


class PrettyError(Exception):
    pass


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


_def_schemas = {
    "character": SCHEMA_DIR / "character.schema.json",
}


def _validate_jsonschema(obj: Any, schema_path: Path, where: str = "") -> None:
    schema = _read_json(schema_path)
    v = Draft202012Validator(schema)
    errors = sorted(v.iter_errors(obj), key=lambda e: list(e.path))
    if errors:
        lines = []
        for e in errors[:5]:
            ptr = "/" + "/".join([str(p) for p in e.path])
            lines.append(f"- {where}{ptr or '/'}: {e.message}")
        more = "" if len(errors) <= 5 else f" (+{len(errors)-5} more)"
        raise PrettyError("JSON Schema validation failed:\n" + "\n".join(lines) + more)


def character_to_dict(ch: Character) -> dict:
    # Omit None fields so we don't write e.g. {"spell_dc": null}
    return ch.model_dump(mode="json", by_alias=True, exclude_none=True)


def parse_character(data: Any, where: str = "") -> Character:
    _validate_jsonschema(data, _def_schemas["character"], where)
    try:
        return Character.model_validate(data)
    except ValidationError as e:
        raise PrettyError(str(e.errors(include_url=False)))


# Public API


def save_character(ch: Character, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(character_to_dict(ch), indent=2), encoding="utf-8")


def load_character(path: Path) -> Character:
    try:
        data = _read_json(path)
    except json.JSONDecodeError as e:
        raise PrettyError(f"Not valid JSON: {e}") from e
    return parse_character(data)


def export_characters(characters: Iterable[Character]) -> str:
    payload = {
        "version": EXPORT_VERSION,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "characters": [character_to_dict(c) for c in characters],
    }
    return json.dumps(payload, indent=2)


def import_characters(text: str) -> List[Character]:
    """Parse an export (or a bare list). Nothing is returned unless every entry is valid."""
    if len(text.encode("utf-8")) > MAX_JSON_BYTES:
        raise PrettyError("Import file is too large.")
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise PrettyError(f"Not valid JSON: {e}") from e
    if isinstance(parsed, list):
        entries = parsed
    elif isinstance(parsed, dict) and isinstance(parsed.get("characters"), list):
        entries = parsed["characters"]
    else:
        raise PrettyError("Expected a list of characters or an export file.")
    if len(entries) > MAX_CHARACTERS:
        raise PrettyError(f"Too many characters (max {MAX_CHARACTERS}).")
    return [parse_character(c, where=f"#{i + 1}") for i, c in enumerate(entries)]


__all__ = [
    "PrettyError",
    "character_to_dict",
    "export_characters",
    "import_characters",
    "load_character",
    "parse_character",
    "save_character",
]
