# cargo_runner/persistence.py
"""
Whole-file I/O for the configuration file.

Writes go through a temporary sibling file and os.replace(), so readers see
either the old file or the new one, never a partial write.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from .exceptions import ConfigIOError

logger = logging.getLogger(__name__)


def read_config_file(path: str | Path) -> bytes:
    """
    Return the raw content of path.

    Decoding is left to parse_config(), so invalid UTF-8 counts as a
    malformed file rather than an I/O failure.

    Raises:
        ConfigIOError: If the file cannot be opened or read
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        logger.warning(f"Failed to read config file {path}: {e}")
        raise ConfigIOError(path, f"Cannot read config file ({e})") from e
    logger.debug(f"Read {len(data)} bytes from {path}")
    return data


def write_config_file(path: str | Path, text: str) -> None:
    """
    Replace the content of path with text.

    Raises:
        ConfigIOError: If the file cannot be written (the original is left untouched)
    """
    path = Path(path)
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # Unique temp name per writer in the target directory
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except OSError as e:
        logger.warning(f"Failed to write config file {path}: {e}")
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise ConfigIOError(path, f"Cannot write config file ({e})") from e
    logger.debug(f"Wrote {len(text)} chars to {path}")
