"""
sources.py -- Reads raw translation sources (local files or http(s) URLs).

Dependencies within the package:
  - config (DEFAULT_HTTP_TIMEOUT)
  - errors (SourceUnavailable, MalformedSource)
  - utils (log, read_bytes)

The service only ever sees bytes; where they came from is decided here.
"""

# ============================================================
# External dependencies
# ============================================================
import os

import requests

# ============================================================
# Internal package imports
# ============================================================
from csv_localize.config import DEFAULT_HTTP_TIMEOUT
from csv_localize.errors import SourceUnavailable, MalformedSource
from csv_localize.utils import log, read_bytes


def is_url(source) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def describe_source(source) -> str:
    """Short human-readable label for log lines and error messages."""
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return os.fspath(source)


def read_source(source, timeout: float = DEFAULT_HTTP_TIMEOUT) -> bytes:
    """Returns the raw bytes of `source` (bytes, path or URL).

    Raises SourceUnavailable on any read failure.
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if is_url(source):
        return _fetch_url(source, timeout)

    path = os.fspath(source)
    try:
        data = read_bytes(path)
    except OSError as e:
        raise SourceUnavailable(f"Cannot read translation file {path}: {e.strerror or e}", source) from e
    log.debug("Read %d bytes from %s", len(data), path)
    return data


def _fetch_url(url: str, timeout: float) -> bytes:
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise SourceUnavailable(f"Cannot fetch translation source {url}: {e}", url) from e
    if resp.status_code != 200:
        raise SourceUnavailable(f"Cannot fetch translation source {url}: HTTP {resp.status_code}", url)
    log.debug("Fetched %d bytes from %s", len(resp.content), url)
    return resp.content


def decode_source(data: bytes, source=None) -> str:
    """Decodes UTF-8 (a BOM is allowed). Raises MalformedSource otherwise."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise MalformedSource(
            f"Translation source {describe_source(source if source is not None else data)} "
            f"is not valid UTF-8: {e}",
            source,
        ) from e
