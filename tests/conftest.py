"""
Pytest configuration and shared fixtures.
"""
import pytest

from csv_localize.config import Config
from csv_localize.service import LocalizationService


SAMPLE_CSV = "key,en,es\nhello,Hello,Hola\nbye,Bye,\n"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """No CSV_LOCALIZE_* or locale variables leak in from the developer's shell"""
    for name in ("CSV_LOCALIZE_FILE", "CSV_LOCALIZE_DELIMITER", "CSV_LOCALIZE_FALLBACK",
                 "CSV_LOCALIZE_LANGUAGE", "CSV_LOCALIZE_TIMEOUT", "CSV_LOCALIZE_RELOAD_DIR",
                 "LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_csv(tmp_path):
    """Writes text to a file under tmp_path and returns its path as str"""
    def _write(text, name="Localization.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def sample_csv(write_csv):
    return write_csv(SAMPLE_CSV)


@pytest.fixture
def make_service():
    """Isolated service whose host language preference is fixed"""
    def _make(preferred=None, **config):
        return LocalizationService(Config(**config), language_source=lambda: preferred)
    return _make
