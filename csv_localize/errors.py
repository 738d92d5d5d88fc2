"""
errors.py -- Exception types raised while loading translation tables.

Leaf module with no internal package dependencies.

Resolution misses are never errors: they are absorbed inside
LocalizationService.resolve() and only show up in the log.
"""


class LocalizeError(Exception):
    """Base class for everything this package raises."""


# ============================================================
# Parsing
# ============================================================
class ParseError(LocalizeError):
    """The translation source could not be turned into a table."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class NoLanguages(ParseError):
    """Header has no language column after the key column."""


class InvalidHeader(ParseError):
    """Header names a blank or repeated language."""


class EmptyKey(ParseError):
    """A data row has an empty key field."""


class DuplicateKey(ParseError):
    """The same key appears on more than one row."""

    def __init__(self, key: str, line: int | None = None, first_line: int | None = None):
        self.key = key
        self.first_line = first_line
        msg = f"duplicate key '{key}'"
        if first_line is not None:
            msg += f" (first defined on line {first_line})"
        super().__init__(msg, line)


class EmptyTable(ParseError):
    """A table without languages was asked for its default language."""


# ============================================================
# Initialization
# ============================================================
class InitError(LocalizeError):
    """initialize() failed; the previously loaded table stays active."""

    def __init__(self, message: str, source=None):
        self.source = source
        super().__init__(message)


class SourceUnavailable(InitError):
    """The translation source could not be read."""


class MalformedSource(InitError):
    """The translation source was read but could not be parsed."""

    def __init__(self, message: str, source=None, parse_error: ParseError | None = None):
        self.parse_error = parse_error
        super().__init__(message, source)


class SourceNotAllowed(InitError):
    """A reload asked for a source outside the configured ones."""
