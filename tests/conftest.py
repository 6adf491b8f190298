import pytest

from herosmith.catalog import Catalog
from herosmith.drafts import MemoryDraftStore
from herosmith.wizard import CharacterWizard

STANDARD = {"str": 15, "dex": 14, "con": 13, "int": 12, "wis": 10, "cha": 8}


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch):
    # keep drafts/config out of the real home dir
    monkeypatch.setenv("HEROSMITH_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("HEROSMITH_LANG", raising=False)
    monkeypatch.delenv("HEROSMITH_CATALOG", raising=False)
    monkeypatch.delenv("HEROSMITH_LOG_LEVEL", raising=False)


@pytest.fixture
def catalog():
    return Catalog.default()


@pytest.fixture
def store():
    return MemoryDraftStore()


@pytest.fixture
def wizard(catalog, store):
    wiz = CharacterWizard(catalog, store)
    wiz.start()
    return wiz


def assign_standard(wiz, scores=STANDARD):
    for key, value in scores.items():
        assert wiz.assign_ability(key, value)
