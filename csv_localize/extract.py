"""
extract.py -- Finds localization keys in source code and merges them into the CSV.

Dependencies within the package:
  - config (defaults)
  - table (TranslationTable)
  - sources (read_source, decode_source)
  - utils (log, plural, write_text)

Workflow:
  1. load the existing translation file (if any); its header defines the
     languages, its modification time the rescan threshold
  2. walk the source tree and collect every key passed to L("...")
  3. add new keys with empty translations, optionally drop unused ones
  4. write the file back (header first, keys sorted) and report every key
     that still lacks a translation
"""

# ============================================================
# External dependencies
# ============================================================
import os
import re
from dataclasses import dataclass, field

# ============================================================
# Internal package imports
# ============================================================
from csv_localize.config import (
    DEFAULT_DELIMITER,
    DEFAULT_EXTENSIONS,
    DEFAULT_FILE_NAME,
    DEFAULT_FUNCTION_NAME,
    DEFAULT_LANGUAGES,
)
from csv_localize.table import TranslationTable, DEFAULT_KEY_LABEL
from csv_localize.sources import read_source, decode_source
from csv_localize.utils import log, plural, write_text


# ============================================================
# Comment stripping
# ============================================================
# Group 1 = string literal (kept), group 2 = comment (dropped).
# Matching strings first keeps "#" or "//" inside literals intact.
_HASH_COMMENTS = re.compile(
    r"""("(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*')|(#[^\r\n]*)""")
_C_COMMENTS = re.compile(
    r"""("(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*')|(/\*.*?\*/|//[^\r\n]*)""", re.DOTALL)

_HASH_COMMENT_EXTENSIONS = frozenset({"py", "pyw", "pyi", "rb", "sh", "pl", "r", "yaml", "yml"})


def strip_comments(text: str, extension: str = "py") -> str:
    """Removes comments, leaving string literals untouched."""
    pattern = _HASH_COMMENTS if extension.lower() in _HASH_COMMENT_EXTENSIONS else _C_COMMENTS
    return pattern.sub(lambda m: m.group(1) or "", text)


# ============================================================
# Key matching
# ============================================================
def call_pattern(function_name: str = DEFAULT_FUNCTION_NAME) -> re.Pattern:
    """Regex for name("key") / name('key'); @"key" (Objective-C) also accepted."""
    return re.compile(
        rf"""\b{re.escape(function_name)}\s*\(\s*@?(?:"((?:\\.|[^"\\])*)"|'((?:\\.|[^'\\])*)')"""
    )


def _unescape(s: str) -> str:
    return s.replace('\\"', '"').replace("\\'", "'")


def find_keys(text: str, pattern: re.Pattern, extension: str = "py") -> list[str]:
    """Returns the keys referenced in `text` in order of appearance (duplicates kept)."""
    stripped = strip_comments(text, extension)
    keys = []
    for m in pattern.finditer(stripped):
        raw = m.group(1) if m.group(1) is not None else m.group(2)
        key = _unescape(raw)
        if key:
            keys.append(key)
    return keys


def iter_source_files(root: str, extensions) -> list[str]:
    """All files under `root` (or `root` itself) whose extension is listed.
    Hidden directories are skipped. Sorted for stable output."""
    wanted = {e.lower().lstrip(".") for e in extensions}

    def _ext(path):
        return os.path.splitext(path)[1].lower().lstrip(".")

    if os.path.isfile(root):
        return [root] if _ext(root) in wanted else []

    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        for name in sorted(filenames):
            if _ext(name) in wanted:
                found.append(os.path.join(dirpath, name))
    return found


# ============================================================
# Missing translations
# ============================================================
def check_table(table: TranslationTable, path: str) -> list[str]:
    """One compiler-style warning per key with missing translations."""
    warnings = []
    for key, langs in table.missing_translations().items():
        line = table.lines.get(key, 0)
        if len(langs) > 1:
            msg = f"Missing translations for key '{key}' for languages: {', '.join(langs)}"
        else:
            msg = f"Missing translation for key '{key}' for language {langs[0]}"
        warnings.append(f"{path}:{line}: warning: {msg}")
    return warnings


# ============================================================
# Extraction
# ============================================================
@dataclass
class ExtractResult:
    output_path: str
    languages: tuple = ()
    files_scanned: int = 0
    keys_found: int = 0
    keys_added: list[str] = field(default_factory=list)
    keys_removed: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    table: TranslationTable | None = None


def load_existing(path: str, delimiter: str = DEFAULT_DELIMITER) -> tuple[TranslationTable | None, float]:
    """Returns (table, mtime) of an existing translation file, or (None, 0.0).
    A file that exists but cannot be parsed raises ParseError."""
    if not os.path.isfile(path):
        return None, 0.0
    table = TranslationTable.build(decode_source(read_source(path), path), delimiter)
    log.info("Loaded %s from %s", plural(len(table), "key"), path)
    return table, os.path.getmtime(path)


def extract_keys(root: str, *,
                 function_name: str = DEFAULT_FUNCTION_NAME,
                 extensions=DEFAULT_EXTENSIONS,
                 localization_file: str = DEFAULT_FILE_NAME,
                 languages=None,
                 default_languages=DEFAULT_LANGUAGES,
                 force_rescan: bool = False,
                 clean: bool = False,
                 delimiter: str = DEFAULT_DELIMITER) -> ExtractResult:
    """Scans `root`, merges the keys into `localization_file` and writes it back.

    `languages` seeds the header of a new file (`default_languages` when not
    given); for an existing file, listed languages it lacks are appended as
    new (empty) columns. `clean` drops keys no longer referenced anywhere and
    implies a full rescan.

    Raises FileNotFoundError if `root` does not exist; the localization file
    is not touched in that case.
    """
    if not os.path.exists(root):
        raise FileNotFoundError(f"Source path not found: {root}")

    existing, mtime = load_existing(localization_file, delimiter)
    if existing is None:
        langs = list(languages or default_languages or DEFAULT_LANGUAGES)
        key_label = DEFAULT_KEY_LABEL
        entries: dict[str, dict[str, str]] = {}
    else:
        langs = list(existing.languages)
        key_label = existing.key_label
        entries = {k: dict(v) for k, v in existing.entries.items()}
        for lang in languages or ():
            if lang not in langs:
                log.info("Adding language column '%s'", lang)
                langs.append(lang)

    full_scan = force_rescan or clean or existing is None
    pattern = call_pattern(function_name)
    result = ExtractResult(output_path=localization_file)

    found = set()
    for path in iter_source_files(root, extensions):
        if not full_scan and os.path.getmtime(path) <= mtime:
            log.debug("File %s was not modified.", path)
            continue
        log.debug("Processing %s", path)
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
        keys = find_keys(text, pattern, os.path.splitext(path)[1].lstrip("."))
        if keys:
            log.debug("Parsed %s from %s", plural(len(keys), "key"), path)
        found.update(keys)
        result.files_scanned += 1

    for key in sorted(found):
        if key not in entries:
            entries[key] = {}
            result.keys_added.append(key)

    if clean:
        result.keys_removed = sorted(k for k in entries if k not in found)
        for key in result.keys_removed:
            del entries[key]

    # Line numbers as they will appear in the written file (header = line 1)
    lines = {key: i for i, key in enumerate(sorted(entries), start=2)}
    table = TranslationTable(languages=tuple(langs), entries=entries,
                             key_label=key_label, lines=lines)
    write_text(localization_file, table.to_csv(delimiter))

    result.languages = table.languages
    result.keys_found = len(found)
    result.table = table
    result.warnings = check_table(table, localization_file)
    log.info("Saved %s with %s (%d added, %d removed, %s scanned)",
             localization_file, plural(len(table), "key"),
             len(result.keys_added), len(result.keys_removed),
             plural(result.files_scanned, "file"))
    return result
