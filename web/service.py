"""
service.py -- Thin adapter between the HTTP routes and LocalizationService.
"""

import os

from csv_localize.config import Config
from csv_localize.errors import InitError, SourceNotAllowed
from csv_localize.service import LocalizationService, get_service
from csv_localize.sources import is_url
from csv_localize.utils import log

_service: LocalizationService = get_service()


def use_service(service: LocalizationService) -> LocalizationService:
    """Points the API at another service instance; returns the previous one."""
    global _service
    previous, _service = _service, service
    return previous


# ============================================================
# Startup
# ============================================================
def startup_load(cfg: Config) -> bool:
    """Initial load at server start. A failure is logged, not raised:
    the API stays up and keys resolve to themselves until a reload works."""
    _service.config = cfg
    try:
        _service.initialize(cfg.source, cfg.fallback_enabled, language=cfg.language or None)
        return True
    except InitError as e:
        log.warning("Startup load failed: %s", e)
        return False


# ============================================================
# Translations
# ============================================================
def resolve_key(key: str) -> dict:
    value, language = _service.resolve_detail(key)
    return {"key": key, "value": value, "language": language, "found": language is not None}


def resolve_keys(keys: list[str]) -> dict:
    translations = {}
    missing = []
    for key in keys:
        value, language = _service.resolve_detail(key)
        translations[key] = value
        if language is None:
            missing.append(key)
    return {"language": _service.active_language, "translations": translations, "missing": missing}


# ============================================================
# Table
# ============================================================
def table_info() -> dict:
    snap = _service.snapshot()
    if snap is None:
        return {"initialized": False}
    return {
        "initialized": True,
        "source": snap.source,
        "languages": list(snap.table.languages),
        "default_language": snap.default_language,
        "active_language": snap.active_language,
        "fallback_enabled": snap.fallback_enabled,
        "key_count": len(snap.table),
    }


def missing_translations() -> list[dict]:
    table = _service.table
    if table is None:
        return []
    return [{"key": k, "languages": langs} for k, langs in table.missing_translations().items()]


def check_reload_source(source: str | None, cfg: Config) -> None:
    """Raises SourceNotAllowed unless `source` is the configured source or a
    file under `cfg.reload_dir`. URLs are only accepted as the configured source."""
    if source is None or source == cfg.source:
        return
    if not is_url(source):
        real = os.path.realpath(source)
        if not is_url(cfg.source) and real == os.path.realpath(cfg.source):
            return
        if cfg.reload_dir:
            base = os.path.realpath(cfg.reload_dir)
            if os.path.commonpath([real, base]) == base:
                return
    log.warning("Rejected reload from %s", source)
    raise SourceNotAllowed(f"Reloading from {source} is not allowed", source)


def reload(source: str | None, fallback_enabled: bool, language: str | None) -> dict:
    """Re-initializes the service. InitError propagates to the route."""
    check_reload_source(source, _service.config)
    _service.initialize(source, fallback_enabled, language=language)
    return table_info()


# ============================================================
# Health
# ============================================================
def health() -> dict:
    snap = _service.snapshot()
    if snap is None:
        return {"ok": False, "initialized": False, "message": "No translation table loaded"}
    return {"ok": True, "initialized": True,
            "message": f"{len(snap.table)} keys from {snap.source}"}
