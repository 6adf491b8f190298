import json
import logging

from conftest import assign_standard

from herosmith.drafts import DRAFT_KEY, JsonFileDraftStore, MemoryDraftStore
from herosmith.models import WizardDraft, WizardSelections
from herosmith.wizard import CharacterWizard


class BrokenStore:
    def get(self, key):
        raise OSError("disk on fire")

    def set(self, key, value):
        raise OSError("disk on fire")

    def delete(self, key):
        raise OSError("disk on fire")


def _at_step_three(wiz):
    wiz.select_race("elf")
    wiz.select_subrace("high-elf")
    wiz.next()
    wiz.select_class("Wizard")
    wiz.toggle_spell("magic-missile")
    wiz.next()
    assign_standard(wiz)
    assert wiz.step == 3


def test_draft_round_trip_is_deep_equal(catalog, store):
    wiz = CharacterWizard(catalog, store)
    wiz.start()
    _at_step_three(wiz)

    again = CharacterWizard(catalog, store)
    assert again.start() is True
    assert again.awaiting_resume
    again.resume()
    assert again.step == 3
    assert again.selections == wiz.selections
    assert again.selections.model_dump() == wiz.selections.model_dump()


def test_start_without_draft_writes_one(catalog, store):
    wiz = CharacterWizard(catalog, store)
    assert wiz.start() is False
    assert DRAFT_KEY in store
    assert store.get(DRAFT_KEY)["step"] == 1


def test_draft_not_overwritten_while_pending(catalog, store):
    first = CharacterWizard(catalog, store)
    first.start()
    _at_step_three(first)

    second = CharacterWizard(catalog, store)
    second.start()
    second.select_race("dwarf")
    assert store.get(DRAFT_KEY)["step"] == 3
    assert store.get(DRAFT_KEY)["selections"]["race"] == "elf"


def test_discard_deletes_draft_and_resets(catalog, store):
    wiz = CharacterWizard(catalog, store)
    wiz.start()
    wiz.select_race("elf")

    again = CharacterWizard(catalog, store)
    assert again.start()
    again.discard()
    assert DRAFT_KEY not in store
    assert again.step == 1
    assert again.selections == WizardSelections()
    # next change writes a fresh draft
    again.select_race("dwarf")
    assert store.get(DRAFT_KEY)["selections"]["race"] == "dwarf"


def test_resume_clamps_step(catalog, store):
    sel = WizardSelections(race="human", **{"class": "Fighter"})
    store.set(DRAFT_KEY, WizardDraft(step=7, selections=sel).model_dump(mode="json", by_alias=True))
    wiz = CharacterWizard(catalog, store)
    assert wiz.start()
    wiz.resume()
    assert wiz.step == 6


def test_cancel_deletes_draft(catalog, store):
    wiz = CharacterWizard(catalog, store)
    wiz.start()
    wiz.select_race("elf")
    wiz.cancel()
    assert wiz.closed
    assert DRAFT_KEY not in store
    # closed wizards stop writing
    wiz.select_race("dwarf")
    assert DRAFT_KEY not in store


def test_finish_deletes_draft(catalog, store):
    wiz = CharacterWizard(catalog, store)
    wiz.start()
    wiz.select_race("human")
    wiz.next()
    wiz.select_class("Fighter")
    wiz.next()
    assign_standard(wiz)
    wiz.next()
    wiz.set_name("Test")
    wiz.next()
    wiz.toggle_skill("athletics")
    wiz.toggle_skill("history")
    wiz.next()
    assert DRAFT_KEY in store
    wiz.next()
    assert wiz.completed is not None
    assert DRAFT_KEY not in store


def test_broken_store_never_blocks(catalog, caplog):
    wiz = CharacterWizard(catalog, BrokenStore())
    with caplog.at_level(logging.WARNING):
        assert wiz.start() is False
        wiz.select_race("elf")
        assert wiz.next() == []
        wiz.cancel()
    assert wiz.step == 2
    assert "Could not save wizard draft" in caplog.text
    assert "Could not delete wizard draft" in caplog.text


def test_unreadable_draft_is_ignored(catalog, store, caplog):
    store.set(DRAFT_KEY, {"step": "three", "selections": {"abilities": {"mode": "luck"}}})
    wiz = CharacterWizard(catalog, store)
    with caplog.at_level(logging.WARNING):
        assert wiz.start() is False
    assert "Ignoring unreadable wizard draft" in caplog.text
    assert store.get(DRAFT_KEY)["step"] == 1


def test_memory_store_copies_values():
    s = MemoryDraftStore()
    value = {"step": 1, "selections": {"spells_known": ["a"]}}
    s.set("k", value)
    value["selections"]["spells_known"].append("b")
    assert s.get("k")["selections"]["spells_known"] == ["a"]
    s.delete("k")
    s.delete("k")
    assert s.get("k") is None


def test_json_file_store(tmp_path):
    s = JsonFileDraftStore(tmp_path / "drafts")
    assert s.get(DRAFT_KEY) is None
    s.set(DRAFT_KEY, {"step": 2})
    path = tmp_path / "drafts" / f"{DRAFT_KEY}.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {"step": 2}
    assert s.get(DRAFT_KEY) == {"step": 2}
    s.delete(DRAFT_KEY)
    assert not path.exists()
    s.delete(DRAFT_KEY)


def test_json_file_store_key_is_sanitised(tmp_path):
    s = JsonFileDraftStore(tmp_path)
    s.set("../escape me", {"step": 1})
    assert (tmp_path / ".._escape_me.json").exists()


def test_wizard_over_file_store_resumes(catalog, tmp_path):
    store = JsonFileDraftStore(tmp_path)
    wiz = CharacterWizard(catalog, store)
    wiz.start()
    _at_step_three(wiz)

    again = CharacterWizard(catalog, JsonFileDraftStore(tmp_path))
    assert again.start()
    again.resume()
    assert again.step == 3
    assert again.selections == wiz.selections
