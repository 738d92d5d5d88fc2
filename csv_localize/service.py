"""
service.py -- Process-wide localization state and key resolution.

Dependencies within the package:
  - config (Config, defaults)
  - errors (ParseError, MalformedSource)
  - table (TranslationTable)
  - sources (read_source, decode_source, describe_source)
  - language (preferred_languages, match_preferences)
  - utils (log, plural)

Usage:

    from csv_localize.service import initialize, L

    initialize()                 # Localization.csv, fallback enabled
    title = L("main.title")

Resolution chain: active language -> default language (first column, only
if fallback is enabled) -> the key itself. resolve() never raises.

State is one immutable Snapshot behind a single attribute. Readers grab the
reference once and never lock; initialize() builds the new snapshot
completely before swapping it in, so a reader sees either the old or the new
state, never a mix.
"""

# ============================================================
# External dependencies
# ============================================================
import threading
from dataclasses import dataclass, field

# ============================================================
# Internal package imports
# ============================================================
from csv_localize.config import Config, DEFAULT_FILE_NAME
from csv_localize.errors import ParseError, MalformedSource
from csv_localize.table import TranslationTable
from csv_localize.sources import read_source, decode_source, describe_source
from csv_localize.language import preferred_languages, match_preferences
from csv_localize.utils import log, plural

# Distinct missed keys remembered for one-time warnings. Past this, misses
# are logged at DEBUG only, so unbounded key streams cannot grow memory.
MAX_REPORTED_MISSES = 1000


@dataclass(frozen=True)
class Snapshot:
    """Everything resolve() needs, replaced as a whole on every initialize()."""
    table: TranslationTable
    active_language: str
    fallback_enabled: bool
    source: str
    # Keys already reported as missing (one warning per key per load, capped)
    reported: set = field(default_factory=set, compare=False, repr=False)

    @property
    def default_language(self) -> str:
        return self.table.default_language()


class LocalizationService:
    """Holds the loaded table, the active language and the fallback flag.

    `reader` returns raw bytes for a source (see sources.read_source) and
    `language_source` returns the host's preferred language tag, or a list of
    tags in priority order. Both are replaceable for tests and embedding hosts.
    """

    def __init__(self, config: Config | None = None, reader=read_source,
                 language_source=preferred_languages):
        self.config = config or Config()
        self._reader = reader
        self._language_source = language_source
        self._write_lock = threading.Lock()
        self._snapshot: Snapshot | None = None
        self._early_misses: set = set()

    # --------------------------------------------------------
    # Initialization
    # --------------------------------------------------------
    def initialize(self, source=None, fallback_enabled: bool = True, *,
                   language: str | None = None, delimiter: str | None = None) -> None:
        """Loads `source` (path, URL or bytes; default: the configured file).

        Raises SourceUnavailable or MalformedSource. On failure the previously
        loaded table stays active.
        """
        if source is None:
            source = self.config.source or DEFAULT_FILE_NAME
        delimiter = delimiter or self.config.delimiter
        label = describe_source(source)

        with self._write_lock:
            data = self._reader(source, timeout=self.config.http_timeout)
            text = decode_source(data, source)
            try:
                table = TranslationTable.build(text, delimiter)
            except ParseError as e:
                raise MalformedSource(f"Malformed translation source {label}: {e}",
                                      source, parse_error=e) from e

            preferred = language or self.config.language or self._language_source()
            if isinstance(preferred, str):
                preferred = [preferred]
            preferred = list(preferred or ())
            active = match_preferences(preferred, table.languages)
            if active is None:
                active = table.default_language()
                if preferred:
                    log.info("No column for preferred language %s in %s, using default '%s'",
                             ", ".join(preferred), label, active)

            self._snapshot = Snapshot(table=table, active_language=active,
                                      fallback_enabled=fallback_enabled, source=label)
            self._early_misses = set()

        log.info("Loaded %s in %s from %s (active: %s, fallback: %s)",
                 plural(len(table), "key"), plural(len(table.languages), "language"),
                 label, active, "on" if fallback_enabled else "off")

    def initialize_with_options(self, fallback_enabled: bool) -> None:
        """Loads the default file with an explicit fallback setting."""
        self.initialize(None, fallback_enabled)

    def initialize_with_file(self, file_name, fallback_enabled: bool = True) -> None:
        """Loads a named source."""
        self.initialize(file_name, fallback_enabled)

    # --------------------------------------------------------
    # Resolution
    # --------------------------------------------------------
    def resolve(self, key: str) -> str:
        """Returns the translation for `key`, or `key` itself if there is none."""
        return self.resolve_detail(key)[0]

    __call__ = resolve

    def resolve_detail(self, key: str) -> tuple[str, str | None]:
        """Like resolve(), but also returns the language that supplied the text
        (None when the key itself was returned)."""
        snap = self._snapshot
        if snap is None:
            _report_miss(self._early_misses, key,
                         "resolve('%s') called before initialize(), returning key", key)
            return key, None

        value = snap.table.lookup(key, snap.active_language)
        if value is not None:
            return value, snap.active_language

        tried = [snap.active_language]
        default = snap.default_language
        if snap.fallback_enabled and snap.active_language != default:
            value = snap.table.lookup(key, default)
            if value is not None:
                return value, default
            tried.append(default)

        _report_miss(snap.reported, key,
                     "Missing translation for key '%s' (tried: %s)", key, ", ".join(tried))
        return key, None

    # --------------------------------------------------------
    # State accessors
    # --------------------------------------------------------
    def snapshot(self) -> Snapshot | None:
        """The current state as one consistent value (None before initialize)."""
        return self._snapshot

    @property
    def is_initialized(self) -> bool:
        return self._snapshot is not None

    @property
    def table(self) -> TranslationTable | None:
        snap = self._snapshot
        return snap.table if snap else None

    @property
    def active_language(self) -> str | None:
        snap = self._snapshot
        return snap.active_language if snap else None

    @property
    def default_language(self) -> str | None:
        snap = self._snapshot
        return snap.default_language if snap else None

    @property
    def fallback_enabled(self) -> bool | None:
        snap = self._snapshot
        return snap.fallback_enabled if snap else None

    @property
    def source(self) -> str | None:
        snap = self._snapshot
        return snap.source if snap else None


def _report_miss(reported: set, key: str, msg: str, *args) -> None:
    """Warns once per key while `reported` has room, then only at DEBUG."""
    if key in reported:
        return
    if len(reported) >= MAX_REPORTED_MISSES:
        log.debug(msg, *args)
        return
    reported.add(key)
    log.warning(msg, *args)


# ============================================================
# Process-wide default instance
# ============================================================
default_service = LocalizationService()


def get_service() -> LocalizationService:
    return default_service


def initialize(source=None, fallback_enabled: bool = True, **kwargs) -> None:
    default_service.initialize(source, fallback_enabled, **kwargs)


def initialize_with_options(fallback_enabled: bool) -> None:
    default_service.initialize_with_options(fallback_enabled)


def initialize_with_file(file_name, fallback_enabled: bool = True) -> None:
    default_service.initialize_with_file(file_name, fallback_enabled)


def resolve(key: str) -> str:
    return default_service.resolve(key)


def L(key: str) -> str:
    """Call-site shorthand: L("main.title")."""
    return default_service.resolve(key)
