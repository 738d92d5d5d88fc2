"""
Unit tests for Config defaults, environment overrides and JSON files.
"""
import json

import pytest

from csv_localize.config import Config, load_config, save_config, DEFAULT_FILE_NAME


def test_defaults():
    cfg = Config()
    assert cfg.source == DEFAULT_FILE_NAME == "Localization.csv"
    assert cfg.delimiter == ","
    assert cfg.fallback_enabled is True
    assert cfg.extensions == ["py"]


def test_delimiter_must_be_one_character():
    with pytest.raises(ValueError):
        Config(delimiter=";;")


def test_from_env(monkeypatch):
    monkeypatch.setenv("CSV_LOCALIZE_FILE", "/srv/strings.csv")
    monkeypatch.setenv("CSV_LOCALIZE_DELIMITER", ";")
    monkeypatch.setenv("CSV_LOCALIZE_FALLBACK", "off")
    monkeypatch.setenv("CSV_LOCALIZE_LANGUAGE", "de")
    monkeypatch.setenv("CSV_LOCALIZE_TIMEOUT", "2.5")
    cfg = Config.from_env()
    assert cfg.source == "/srv/strings.csv"
    assert cfg.delimiter == ";"
    assert cfg.fallback_enabled is False
    assert cfg.language == "de"
    assert cfg.http_timeout == 2.5


def test_from_env_keeps_base_values(monkeypatch):
    base = Config(source="base.csv", fallback_enabled=False)
    cfg = Config.from_env(base)
    assert cfg.source == "base.csv"
    assert cfg.fallback_enabled is False


def test_from_env_rejects_bad_boolean(monkeypatch):
    monkeypatch.setenv("CSV_LOCALIZE_FALLBACK", "maybe")
    with pytest.raises(ValueError):
        Config.from_env()


def test_from_dict_ignores_unknown_fields():
    cfg = Config.from_dict({"source": "x.csv", "colour": "blue"})
    assert cfg.source == "x.csv"


def test_save_and_load(tmp_path):
    path = str(tmp_path / "config.json")
    save_config(path, Config(source="s.csv", languages=["en", "ru"]))
    loaded = load_config(path)
    assert loaded.source == "s.csv"
    assert loaded.languages == ["en", "ru"]


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "none.json"))


def test_load_rejects_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(["not", "an", "object"]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))
