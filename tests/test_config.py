import logging
import os
from pathlib import Path

from herosmith.config import (
    config_dir,
    drafts_dir,
    get_catalog_path,
    get_language,
    get_log_level,
    load_config,
    load_env,
    save_config,
)
from herosmith.i18n import MESSAGES, translate
from herosmith.logging import get_logger


def test_home_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("HEROSMITH_HOME", str(tmp_path / "hs"))
    assert config_dir() == (tmp_path / "hs").resolve()
    assert drafts_dir() == (tmp_path / "hs").resolve() / "drafts"


def test_language_precedence(monkeypatch):
    assert get_language() == "en"
    save_config({"language": "es"})
    assert load_config() == {"language": "es"}
    assert get_language() == "es"
    monkeypatch.setenv("HEROSMITH_LANG", "fr")
    assert get_language() == "fr"
    assert get_language("en") == "en"


def test_catalog_path(monkeypatch):
    assert get_catalog_path() is None
    monkeypatch.setenv("HEROSMITH_CATALOG", "/tmp/cat.yaml")
    assert get_catalog_path() == Path("/tmp/cat.yaml")
    assert get_catalog_path("other.json") == Path("other.json")


def test_broken_config_reads_as_empty():
    save_config({})
    Path(config_dir() / "config.json").write_text("{broken", encoding="utf-8")
    assert load_config() == {}


def test_translate_fallbacks():
    assert translate("wizard.step", 2, 7) == "Step 2 of 7"
    assert translate("wizard.step", 2, 7, locale="es") == "Paso 2 de 7"
    assert translate("error.subrace.invalid", "x", locale="xx") == translate("error.subrace.invalid", "x")
    assert translate("no.such.key") == "no.such.key"
    # missing args leave the template alone
    assert translate("wizard.step") == "Step {0} of {1}"


def test_spanish_covers_every_message():
    assert set(MESSAGES["es"]) == set(MESSAGES["en"])
    assert translate("error.spells.invalid", "shield", locale="es") == "shield no está disponible para tu clase."


def test_load_env_reads_env_then_local(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("HEROSMITH_LOG_LEVEL", raising=False)
    monkeypatch.delenv("HEROSMITH_TEST_ONLY", raising=False)
    monkeypatch.setenv("HEROSMITH_LANG", "en")
    (tmp_path / ".env").write_text("HEROSMITH_LANG=es\nHEROSMITH_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    (tmp_path / ".env.local").write_text("HEROSMITH_CATALOG=local.yaml\n", encoding="utf-8")
    (tmp_path / ".env.test").write_text("HEROSMITH_TEST_ONLY=1\n", encoding="utf-8")
    load_env()
    # process env wins over .env
    assert os.environ["HEROSMITH_LANG"] == "en"
    assert os.environ["HEROSMITH_LOG_LEVEL"] == "DEBUG"
    assert os.environ["HEROSMITH_CATALOG"] == "local.yaml"
    assert "HEROSMITH_TEST_ONLY" not in os.environ


def test_log_level_precedence(monkeypatch):
    monkeypatch.delenv("HEROSMITH_LOG_LEVEL", raising=False)
    assert get_log_level() == logging.INFO
    save_config({"log_level": "error"})
    assert get_log_level() == logging.ERROR
    monkeypatch.setenv("HEROSMITH_LOG_LEVEL", "debug")
    assert get_log_level() == logging.DEBUG
    assert get_log_level("warning") == logging.WARNING
    assert get_log_level("loud") == logging.INFO


def test_get_logger_applies_level(monkeypatch):
    monkeypatch.setenv("HEROSMITH_LOG_LEVEL", "DEBUG")
    log = get_logger("herosmith.test")
    assert log.isEnabledFor(logging.DEBUG)
    monkeypatch.setenv("HEROSMITH_LOG_LEVEL", "ERROR")
    get_logger("herosmith.test")
    assert not log.isEnabledFor(logging.WARNING)
    monkeypatch.delenv("HEROSMITH_LOG_LEVEL")
    get_logger("herosmith.test")
    assert logging.getLogger("herosmith").level == logging.INFO
