"""
language.py -- Host language preference and matching against table columns.

Leaf module with no internal package dependencies.

The service asks preferred_languages() once per initialize() call; nothing
is cached between calls.
"""

import locale
import os

# Checked in order, same precedence as gettext
_ENV_VARS = ("CSV_LOCALIZE_LANGUAGE", "LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG")
_NEUTRAL_LOCALES = ("", "c", "posix")


def normalize_tag(tag: str) -> str:
    """'de_DE.UTF-8@euro' -> 'de-DE'. Returns '' for C/POSIX and empty input."""
    tag = (tag or "").strip()
    tag = tag.split("@", 1)[0].split(".", 1)[0]
    if tag.lower() in _NEUTRAL_LOCALES:
        return ""
    return tag.replace("_", "-")


def primary_subtag(tag: str) -> str:
    return normalize_tag(tag).split("-", 1)[0].lower()


def preferred_languages() -> list[str]:
    """The host's language tags in priority order, [] if it has none.

    The first variable that names a language decides. Any of them may hold a
    colon-separated priority list like "ja:es" (the LANGUAGE convention).
    """
    for name in _ENV_VARS:
        tags = []
        for candidate in os.environ.get(name, "").split(":"):
            tag = normalize_tag(candidate)
            if tag and tag not in tags:
                tags.append(tag)
        if tags:
            return tags
    try:
        lang, _encoding = locale.getlocale()
    except ValueError:
        return []
    tag = normalize_tag(lang or "")
    return [tag] if tag else []


def system_language() -> str | None:
    """Returns the host's most preferred language tag, or None if it has none."""
    tags = preferred_languages()
    return tags[0] if tags else None


def match_language(preferred: str | None, languages) -> str | None:
    """Picks the table column that best matches `preferred`.

    Exact match (case-insensitive, '_' == '-') wins, then the first column
    sharing the primary subtag ('pt-BR' ~ 'pt'). None when nothing matches.
    """
    wanted = normalize_tag(preferred or "").lower()
    if not wanted:
        return None
    for lang in languages:
        if normalize_tag(lang).lower() == wanted:
            return lang
    wanted_primary = wanted.split("-", 1)[0]
    for lang in languages:
        if primary_subtag(lang) == wanted_primary:
            return lang
    return None


def match_preferences(preferences, languages) -> str | None:
    """match_language() over a priority list (or a single tag); the first
    preference with a matching column wins."""
    if isinstance(preferences, str):
        preferences = [preferences]
    for preferred in preferences or ():
        match = match_language(preferred, languages)
        if match is not None:
            return match
    return None
