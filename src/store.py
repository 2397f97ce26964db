"""
Filesystem facade for the sheet cache.

The cache is a single JSON file. Writes go to a temporary file next to the
target and are moved into place with ``os.replace``, so readers see either the
previous document or the new one, never a partial write.
"""
from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

from loguru import logger


def ensure_directory(path: Path) -> Path:
    """Create ``path`` and any missing parents. No-op when it already exists."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _default_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _match_mode(tmp_name: str, path: Path) -> None:
    # mkstemp creates 0600; keep the replaced file readable as before
    if path.exists():
        shutil.copymode(path, tmp_name)
    else:
        os.chmod(tmp_name, _default_mode())


def write_text_atomic(path: Path, content: str, encoding: str = "utf-8") -> Path:
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        _match_mode(tmp_name, path)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    logger.debug(f"wrote {len(content)} chars to {path}")
    return path


__all__ = ["ensure_directory", "write_text_atomic"]
