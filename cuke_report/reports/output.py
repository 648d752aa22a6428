"""File naming and writing shared by the file-based reports."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def format_file_name(file_name: str, extension: str) -> str:
    """Append *extension* (e.g. ``".html"``) unless *file_name* already ends with it."""
    if file_name.endswith(extension):
        return file_name
    return file_name + extension


def write_report(file_name: str, text: str) -> str:
    """Write *text* to *file_name* and return the path.

    Raises:
        OSError: if the file cannot be opened or written.
    """
    with open(file_name, "w", encoding="utf-8") as f:
        f.write(text)
    logger.debug("Wrote %d characters to %s", len(text), Path(file_name).resolve())
    return file_name
