"""
utils.py -- Logging setup and small file helpers.

Leaf module with no internal package dependencies.
Every other module logs through the `log` object defined here.
"""

# ============================================================
# External dependencies
# ============================================================
import os
import logging


# ============================================================
# Logging
# ============================================================
# Quiet by default. For more detail set ENV CSV_LOCALIZE_LOGLEVEL=DEBUG
LOGLEVEL = os.environ.get("CSV_LOCALIZE_LOGLEVEL", "INFO").upper().strip()
logging.basicConfig(level=getattr(logging, LOGLEVEL, logging.INFO),
                    format="%(asctime)s %(levelname)s %(message)s")
log = logging.getLogger("csv_localize")


# ============================================================
# File helpers
# ============================================================
def read_bytes(path: str) -> bytes:
    """Reads a whole file as bytes. OSError propagates to the caller."""
    with open(path, "rb") as f:
        return f.read()


def write_text(path: str, text: str) -> None:
    """
    Replaces the file at `path` with `text` (UTF-8).
    Writes to a sibling temp file first so readers never see half a file.
    """
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    try:
        os.replace(tmp_path, path)
    except OSError:
        safe_remove(tmp_path)
        raise


def safe_remove(path: str) -> None:
    """Deletes a file if it exists. Failures are logged at DEBUG."""
    try:
        os.remove(path)
        log.debug("Removed file: %s", path)
    except FileNotFoundError:
        log.debug("File not found (ok): %s", path)
    except OSError as e:
        log.debug("Could not remove %s: %s", path, e)


def plural(count: int, word: str) -> str:
    """plural(1, "key") -> "1 key", plural(3, "key") -> "3 keys"."""
    return f"{count} {word}" if count == 1 else f"{count} {word}s"
