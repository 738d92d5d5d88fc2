"""
models.py -- Pydantic request/response models for the HTTP API.
"""

from pydantic import BaseModel


# ============================================================
# Translations
# ============================================================
class Translation(BaseModel):
    key: str
    value: str
    # Language that supplied the value; None when the key itself came back
    language: str | None = None
    found: bool = False


class ResolveRequest(BaseModel):
    keys: list[str]


class ResolveResponse(BaseModel):
    language: str | None = None
    translations: dict[str, str] = {}
    missing: list[str] = []


# ============================================================
# Table
# ============================================================
class TableInfo(BaseModel):
    initialized: bool
    source: str | None = None
    languages: list[str] = []
    default_language: str | None = None
    active_language: str | None = None
    fallback_enabled: bool | None = None
    key_count: int = 0


class MissingTranslation(BaseModel):
    key: str
    languages: list[str]


class ReloadRequest(BaseModel):
    source: str | None = None
    fallback_enabled: bool = True
    language: str | None = None


# ============================================================
# Health
# ============================================================
class HealthResponse(BaseModel):
    ok: bool
    initialized: bool
    message: str
