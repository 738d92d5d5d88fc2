"""
config.py -- Defaults, the Config dataclass and JSON config files.

Leaf module with no internal package dependencies.

Values come from three places, later ones winning:
  1. the module-level defaults below
  2. a JSON config file (load_config)
  3. CSV_LOCALIZE_* environment variables (Config.from_env)
"""

# ============================================================
# External dependencies
# ============================================================
import os
import json
from dataclasses import dataclass, field, asdict


# ============================================================
# Defaults
# ============================================================
# Translation source
DEFAULT_FILE_NAME = "Localization.csv"
DEFAULT_DELIMITER = ","
DEFAULT_FALLBACK = True

# Key extraction tool
DEFAULT_FUNCTION_NAME = "L"
DEFAULT_EXTENSIONS = ("py",)
DEFAULT_LANGUAGES = ("en",)

# Seconds to wait when the source is an http(s) URL
DEFAULT_HTTP_TIMEOUT = 10.0

# HTTP service
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8742

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ValueError(f"{name}: expected a boolean, got '{raw}'")


# ============================================================
# Config Dataclass
# ============================================================
@dataclass
class Config:
    """Everything needed to load a table and run the tools."""
    # Source
    source: str = DEFAULT_FILE_NAME
    delimiter: str = DEFAULT_DELIMITER
    fallback_enabled: bool = DEFAULT_FALLBACK
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    # Active language override ("" = ask the environment at init time)
    language: str = ""

    # Extraction tool
    function_name: str = DEFAULT_FUNCTION_NAME
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    languages: list[str] = field(default_factory=lambda: list(DEFAULT_LANGUAGES))

    # HTTP service
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    # Directory whose files /api/reload may load besides `source` ("" = none)
    reload_dir: str = ""

    def __post_init__(self):
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got '{self.delimiter}'")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "Config":
        """Creates a Config from a dict (missing fields = defaults, unknown ones ignored)."""
        known = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in d.items() if k in known}
        return cls(**filtered)

    @classmethod
    def from_env(cls, base: "Config | None" = None) -> "Config":
        """Applies CSV_LOCALIZE_* environment overrides on top of `base`."""
        d = (base or cls()).to_dict()
        if os.environ.get("CSV_LOCALIZE_FILE"):
            d["source"] = os.environ["CSV_LOCALIZE_FILE"].strip()
        if os.environ.get("CSV_LOCALIZE_DELIMITER"):
            d["delimiter"] = os.environ["CSV_LOCALIZE_DELIMITER"]
        if os.environ.get("CSV_LOCALIZE_LANGUAGE"):
            d["language"] = os.environ["CSV_LOCALIZE_LANGUAGE"].strip()
        if os.environ.get("CSV_LOCALIZE_TIMEOUT"):
            d["http_timeout"] = float(os.environ["CSV_LOCALIZE_TIMEOUT"])
        if os.environ.get("CSV_LOCALIZE_RELOAD_DIR"):
            d["reload_dir"] = os.environ["CSV_LOCALIZE_RELOAD_DIR"].strip()
        d["fallback_enabled"] = _env_bool("CSV_LOCALIZE_FALLBACK", d["fallback_enabled"])
        return cls.from_dict(d)


# ============================================================
# JSON config files
# ============================================================
def load_config(path: str) -> Config:
    """Loads a JSON config file. Raises FileNotFoundError if it does not exist."""
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return Config.from_dict(data)


def save_config(path: str, cfg: Config) -> str:
    """Writes `cfg` as JSON and returns the path."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(cfg.to_dict(), f, ensure_ascii=False, indent=2)
    return path
