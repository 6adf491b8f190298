"""Read-only reference catalog: races, classes, backgrounds, equipment, spells.

The engine never mutates catalog records. Lookups return ``None`` on a miss so
callers can treat a stale or partially loaded catalog as "contributes nothing".
"""
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, PrivateAttr, ValidationError

from herosmith.logging import get_logger

log = get_logger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_CATALOG = DATA_DIR / "srd.yaml"


class CatalogError(Exception):
    pass


class Race(BaseModel):
    id: str
    name: str
    description: str = ""
    speed: int = 30
    ability_bonuses: Dict[str, int] = Field(default_factory=dict)
    languages: List[str] = Field(default_factory=lambda: ["common"])
    extra_languages: int = 0


class Subrace(BaseModel):
    id: str
    race_id: str
    name: str
    description: str = ""
    ability_bonuses: Dict[str, int] = Field(default_factory=dict)
    speed_bonus: int = 0
    extra_languages: int = 0


class ClassProficiencies(BaseModel):
    saves: List[str] = Field(default_factory=list)
    armor: List[str] = Field(default_factory=list)
    weapons: List[str] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)
    skill_choices: List[str] = Field(default_factory=list)
    skill_count: int = 2


class EquipmentGrant(BaseModel):
    """Either a fixed list of item ids or a named choice between option sets."""

    fixed: Optional[List[str]] = None
    choice: Optional[str] = None
    options: List[List[str]] = Field(default_factory=list)


class CharacterClass(BaseModel):
    id: str
    name: str
    description: str = ""
    proficiencies: ClassProficiencies = Field(default_factory=ClassProficiencies)
    starting_equipment: List[EquipmentGrant] = Field(default_factory=list)

    @property
    def equipment_choices(self) -> List[EquipmentGrant]:
        return [g for g in self.starting_equipment if g.choice and g.options]


class Subclass(BaseModel):
    id: str
    class_id: str
    name: str
    description: str = ""


class Background(BaseModel):
    id: str
    name: str
    description: str = ""
    skill_proficiencies: List[str] = Field(default_factory=list)
    tool_proficiencies: List[str] = Field(default_factory=list)
    languages: int = 0


class Equipment(BaseModel):
    id: str
    name: str
    category: str = ""
    cost: str = ""
    description: str = ""


class Spell(BaseModel):
    id: str
    name: str
    level: int = 0
    school: str = ""
    classes: List[str] = Field(default_factory=list)


class Catalog(BaseModel):
    races: List[Race] = Field(default_factory=list)
    subraces: List[Subrace] = Field(default_factory=list)
    classes: List[CharacterClass] = Field(default_factory=list)
    subclasses: List[Subclass] = Field(default_factory=list)
    backgrounds: List[Background] = Field(default_factory=list)
    equipment: List[Equipment] = Field(default_factory=list)
    spells: List[Spell] = Field(default_factory=list)

    _index: Dict[str, Dict[str, BaseModel]] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        for table in ("races", "subraces", "classes", "subclasses", "backgrounds", "equipment", "spells"):
            self._index[table] = {rec.id: rec for rec in getattr(self, table)}

    # --- Loading ---

    @classmethod
    def load(cls, path: str | Path) -> "Catalog":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CatalogError(f"Cannot read catalog {path}: {e}") from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as e:
                raise CatalogError(f"Invalid catalog {path}:\n{e}") from e
        try:
            catalog = cls.model_validate(data or {})
        except ValidationError as e:
            raise CatalogError(f"Invalid catalog {path}:\n{e}") from e
        log.debug("Loaded catalog %s (%d races, %d classes)", path, len(catalog.races), len(catalog.classes))
        return catalog

    @classmethod
    def default(cls) -> "Catalog":
        return _default_catalog()

    # --- Lookups ---

    def _get(self, table: str, key: str | None):
        if not key:
            return None
        return self._index.get(table, {}).get(key)

    def race(self, race_id: str | None) -> Optional[Race]:
        return self._get("races", race_id)

    def subrace(self, subrace_id: str | None) -> Optional[Subrace]:
        return self._get("subraces", subrace_id)

    def subraces_for(self, race_id: str | None) -> List[Subrace]:
        return [s for s in self.subraces if s.race_id == race_id]

    def character_class(self, class_id: str | None) -> Optional[CharacterClass]:
        return self._get("classes", class_id)

    def subclass(self, subclass_id: str | None) -> Optional[Subclass]:
        return self._get("subclasses", subclass_id)

    def subclasses_for(self, class_id: str | None) -> List[Subclass]:
        return [s for s in self.subclasses if s.class_id == class_id]

    def background(self, background_id: str | None) -> Optional[Background]:
        return self._get("backgrounds", background_id)

    def item(self, equipment_id: str | None) -> Optional[Equipment]:
        return self._get("equipment", equipment_id)

    def spell(self, spell_id: str | None) -> Optional[Spell]:
        return self._get("spells", spell_id)

    def spells_for(self, class_id: str | None, max_level: int) -> List[Spell]:
        if not class_id:
            return []
        return [s for s in self.spells if s.level <= max_level and class_id in s.classes]

    def item_name(self, equipment_id: str) -> str:
        eq = self.item(equipment_id)
        return eq.name if eq else equipment_id


@lru_cache(maxsize=1)
def _default_catalog() -> Catalog:
    return Catalog.load(DEFAULT_CATALOG)


__all__ = [
    "Background",
    "Catalog",
    "CatalogError",
    "CharacterClass",
    "ClassProficiencies",
    "Equipment",
    "EquipmentGrant",
    "Race",
    "Spell",
    "Subclass",
    "Subrace",
]
