"""Infrastructure: text file reading and config file parsing."""

from __future__ import annotations

import configparser
import logging
import os
from pathlib import Path
from typing import Any

from moodlebox.core.models import ScannerMode
from moodlebox.core.text import parse_config_text

logger = logging.getLogger(__name__)


class FileReader:
    """Concrete :class:`~moodlebox.core.protocols.TextReader`."""

    def read_text(self, path: Path) -> str | None:
        try:
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.debug("Cannot read %s: %s", path, exc)
            return None


def parse_config_file(
    path: str | os.PathLike[str],
    sections: bool = False,
    mode: ScannerMode = ScannerMode.NORMAL,
) -> dict[str, Any] | None:
    """Parse a ``key=value`` file, ignoring lines that start with ``#``.

    Returns ``None`` when the file cannot be read or is malformed.
    See :func:`~moodlebox.core.text.parse_config_text` for the layout of
    the returned mapping.
    """
    text = FileReader().read_text(Path(path))
    if text is None:
        return None
    try:
        return parse_config_text(text, sections=sections, mode=mode)
    except configparser.Error as exc:
        logger.warning("Malformed config file %s: %s", path, exc)
        return None
