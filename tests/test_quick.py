import pytest

from herosmith.quick import QuickCreateError, ability_order, quick_create, quick_selections, standard_assignment
from herosmith.rules_core import HIT_DIE
from herosmith.wizard import spell_budget, step_issues, total_steps


def test_ability_order_puts_key_abilities_first():
    assert ability_order("Wizard") == ["int", "con", "wis", "cha", "str", "dex"]
    assert ability_order("Bard")[:2] == ["cha", "dex"]
    assert sorted(ability_order("Artificer")) == sorted(["str", "dex", "con", "int", "wis", "cha"])
    assert standard_assignment("Rogue") == {"dex": 15, "int": 14, "con": 13, "wis": 12, "cha": 10, "str": 8}


def test_human_fighter(catalog):
    ch = quick_create(catalog, "human", "Fighter", "Brant")
    assert ch.name == "Brant"
    assert ch.subrace == "human-standard"
    assert ch.ability_scores == {"str": 16, "con": 15, "int": 14, "wis": 13, "cha": 11, "dex": 9}
    assert ch.max_hp == 12
    assert ch.ac == 9
    assert ch.background == "soldier"
    assert set(ch.proficiencies.skills) == {"acrobatics", "animal_handling", "athletics", "intimidation"}
    assert ch.equipment[:3] == ["chain-mail", "longsword", "shield"]
    assert ch.spells_known == []


def test_blank_name_gets_default(catalog):
    assert quick_create(catalog, "dwarf", "Cleric", "  ").name == "New Character"


@pytest.mark.parametrize("class_id", sorted(HIT_DIE))
def test_every_class_passes_every_gate(catalog, class_id):
    s = quick_selections(catalog, "half-orc", class_id, "Any")
    for step in range(1, total_steps(s) + 1):
        assert step_issues(step, s, catalog) == [], (class_id, step)
    assert len(s.spells_known) == spell_budget(s)
    ch = quick_create(catalog, "half-orc", class_id, "Any")
    assert ch.class_ == class_id


def test_wizard_prefers_leveled_spells(catalog):
    ch = quick_create(catalog, "elf", "Wizard", "Quill")
    levels = [catalog.spell(sp).level for sp in ch.spells_known]
    assert levels == sorted(levels, key=lambda lvl: lvl == 0)
    assert ch.spell_dc == 8 + 2 + 3


def test_rogue_gets_expertise(catalog):
    ch = quick_create(catalog, "halfling", "Rogue", "Pip")
    assert ch.proficiencies.expertise == ["acrobatics", "athletics"]


def test_missing_background_falls_back_to_first(catalog):
    # hermit is not in the bundled catalog
    s = quick_selections(catalog, "human", "Monk", "Ash")
    assert s.background == catalog.backgrounds[0].id


def test_unknown_ids_raise(catalog):
    with pytest.raises(QuickCreateError):
        quick_create(catalog, "warforged", "Fighter", "X")
    with pytest.raises(QuickCreateError):
        quick_create(catalog, "human", "Artificer", "X")
