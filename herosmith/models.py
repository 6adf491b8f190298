from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, PositiveInt

from herosmith.allocator import AbilityAllocator


class WizardSelections(BaseModel):
    """Every in-progress choice the wizard collects."""

    race: str = ""
    subrace: str = ""
    class_: str = Field("", alias="class")
    subclass: str = ""
    level: PositiveInt = 1
    abilities: AbilityAllocator = Field(default_factory=AbilityAllocator)
    name: str = ""
    background: str = ""
    gold: Optional[int] = None
    spells_known: List[str] = Field(default_factory=list)
    selected_skills: List[str] = Field(default_factory=list)
    selected_expertise: List[str] = Field(default_factory=list)
    equipment_choices: Dict[str, int] = Field(default_factory=dict)

    class Config:
        populate_by_name = True


class WizardDraft(BaseModel):
    step: int = 1
    selections: WizardSelections = Field(default_factory=WizardSelections)


class Proficiencies(BaseModel):
    saves: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    expertise: List[str] = Field(default_factory=list)
    armor: List[str] = Field(default_factory=list)
    weapons: List[str] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class Character(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    race: str
    subrace: Optional[str] = None
    class_: str = Field(alias="class", min_length=1)
    subclass: Optional[str] = None
    level: PositiveInt = 1
    background: Optional[str] = None
    ability_scores: Dict[str, int]
    max_hp: PositiveInt
    current_hp: int
    ac: int
    spell_dc: Optional[int] = None
    inspiration: int = 0
    inspiration_max: int = 0
    spell_slots: Dict[int, int] = Field(default_factory=dict)
    spell_slots_max: Dict[int, int] = Field(default_factory=dict)
    gold: int = 0
    spells_known: List[str] = Field(default_factory=list)
    proficiencies: Proficiencies = Field(default_factory=Proficiencies)
    equipment: List[str] = Field(default_factory=list)
    speed: int = 30
    languages: List[str] = Field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    class Config:
        frozen = True
        populate_by_name = True

    def ability_mod(self, name: str) -> int:
        return (self.ability_scores.get(name.lower(), 10) - 10) // 2

    @property
    def is_caster(self) -> bool:
        return self.spell_dc is not None


__all__ = ["Character", "Proficiencies", "WizardDraft", "WizardSelections"]
