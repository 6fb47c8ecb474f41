"""Scoped reads and atomic writes for local files."""

from __future__ import annotations

import contextlib
import logging
import os
import stat
import tempfile
from pathlib import Path

from pages_env.errors import FileIOError

logger = logging.getLogger(__name__)


def _target_mode(path: Path) -> int:
    """Mode for the replacement file: the existing one's, else 0666 minus umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def read_text(path: Path) -> str:
    """Read a UTF-8 text file, mapping OS errors to ``FileIOError``."""
    try:
        with path.open(encoding="utf-8") as f:
            content = f.read()
    except OSError as exc:
        raise FileIOError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise FileIOError(path, f"not valid UTF-8 ({exc.reason})") from exc
    logger.debug("Read %d bytes from %s", len(content), path)
    return content


def write_atomic(path: Path, content: str) -> None:
    """Write *content* to *path* via a temp file + rename.

    The destination is either left untouched or fully replaced. An existing
    file keeps its permission bits; mkstemp's 0600 is never left behind.
    """
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    except OSError as exc:
        raise FileIOError(path, exc.strerror or str(exc)) from exc

    tmp_file = Path(tmp_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        tmp_file.chmod(_target_mode(path))
        tmp_file.replace(path)
    except OSError as exc:
        raise FileIOError(path, exc.strerror or str(exc)) from exc
    finally:
        with contextlib.suppress(FileNotFoundError):
            tmp_file.unlink()
    logger.debug("Wrote %d bytes to %s", len(content), path)
