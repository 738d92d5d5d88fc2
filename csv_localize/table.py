"""
table.py -- Parses a delimited translation source into a lookup table.

Dependencies within the package:
  - errors (ParseError and subclasses)
  - utils (log)

Source layout (first language column is the default language):

    key,en,es,fr
    greeting,Hello,Hola,Bonjour
    farewell,Goodbye,Adios,

An empty field means "no translation for this language". Tables are
immutable once built; reloading builds a new one.
"""

# ============================================================
# External dependencies
# ============================================================
import csv
import io
from dataclasses import dataclass, field

# ============================================================
# Internal package imports
# ============================================================
from csv_localize.errors import (
    ParseError,
    NoLanguages,
    InvalidHeader,
    EmptyKey,
    DuplicateKey,
    EmptyTable,
)
from csv_localize.utils import log, plural

DEFAULT_KEY_LABEL = "key"


@dataclass(frozen=True)
class TranslationTable:
    """Ordered languages plus key -> {language: text}.

    `lines` maps each key to the source line it came from (empty for tables
    that were not parsed from text).
    """
    languages: tuple[str, ...]
    entries: dict[str, dict[str, str]]
    key_label: str = DEFAULT_KEY_LABEL
    lines: dict[str, int] = field(default_factory=dict, compare=False, repr=False)

    # --------------------------------------------------------
    # Construction
    # --------------------------------------------------------
    @classmethod
    def build(cls, raw_text: str, delimiter: str = ",") -> "TranslationTable":
        """Parses `raw_text`. Raises a ParseError subclass on structural problems."""
        if raw_text.startswith("\ufeff"):
            raw_text = raw_text[1:]

        reader = csv.reader(io.StringIO(raw_text, newline=""), delimiter=delimiter)
        languages: tuple[str, ...] | None = None
        key_label = DEFAULT_KEY_LABEL
        entries: dict[str, dict[str, str]] = {}
        lines: dict[str, int] = {}

        try:
            for fields in reader:
                line = reader.line_num
                # Blank lines and rows like ",,," carry nothing
                if not any(f.strip() for f in fields):
                    continue

                if languages is None:
                    key_label = fields[0].strip() or DEFAULT_KEY_LABEL
                    languages = _parse_header(fields[1:], line)
                    continue

                key = fields[0].strip()
                if not key:
                    raise EmptyKey("row has an empty key", line)
                if key in entries:
                    raise DuplicateKey(key, line, lines.get(key))

                values = fields[1:]
                if len(values) > len(languages):
                    log.warning("line %d: key '%s' has %s for %s; extra fields ignored",
                                line, key, plural(len(values), "translation"),
                                plural(len(languages), "language"))
                entries[key] = {lang: value for lang, value in zip(languages, values)}
                lines[key] = line
        except csv.Error as e:
            raise ParseError(f"malformed delimited text: {e}", reader.line_num) from e

        if languages is None:
            raise NoLanguages("source is empty, expected a header row with at least one language column")

        return cls(languages=languages, entries=entries, key_label=key_label, lines=lines)

    # --------------------------------------------------------
    # Queries
    # --------------------------------------------------------
    def lookup(self, key: str, language: str) -> str | None:
        """Returns the text for key/language, or None when absent or empty."""
        entry = self.entries.get(key)
        if entry is None:
            return None
        return entry.get(language) or None

    def default_language(self) -> str:
        if not self.languages:
            raise EmptyTable("table has no languages")
        return self.languages[0]

    def has_language(self, language: str) -> bool:
        return language in self.languages

    def keys(self) -> list[str]:
        return sorted(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: str) -> bool:
        return key in self.entries

    def missing_translations(self) -> dict[str, list[str]]:
        """Per key (sorted), the languages without a usable translation.
        Keys that are fully translated are left out."""
        missing = {}
        for key in self.keys():
            langs = [lang for lang in self.languages if not self.lookup(key, lang)]
            if langs:
                missing[key] = langs
        return missing

    # --------------------------------------------------------
    # Serialisation
    # --------------------------------------------------------
    def to_csv(self, delimiter: str = ",") -> str:
        """Header first, then one row per key in sorted order, padded to all languages."""
        buf = io.StringIO()
        writer = csv.writer(buf, delimiter=delimiter, lineterminator="\n")
        writer.writerow([self.key_label, *self.languages])
        for key in self.keys():
            entry = self.entries[key]
            writer.writerow([key, *(entry.get(lang, "") for lang in self.languages)])
        return buf.getvalue()


def _parse_header(columns: list[str], line: int) -> tuple[str, ...]:
    """Validates the language columns of the header row."""
    languages = [c.strip() for c in columns]
    if not any(languages):
        raise NoLanguages("header has no language columns after the key column", line)
    seen = set()
    for position, lang in enumerate(languages, start=2):
        if not lang:
            raise InvalidHeader(f"header column {position} has no language name", line)
        if lang in seen:
            raise InvalidHeader(f"language '{lang}' appears more than once in the header", line)
        seen.add(lang)
    return tuple(languages)
