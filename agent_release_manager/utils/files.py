"""Filesystem helpers."""

import os
import tempfile
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a text file, treating a missing file as empty."""
    if not path.exists():
        logger.warning("File not found, treating as empty", path=str(path))
        return ""
    return path.read_text(encoding=encoding)


def atomic_write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write text to path atomically using temp file + replace.

    Readers see either the old content or the new content, never a partial
    write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)
    logger.debug("Wrote file", path=str(path), length=len(content))
