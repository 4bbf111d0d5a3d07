from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterator

try:
    import fcntl  # Unix only
except ImportError:
    fcntl = None

logger = logging.getLogger("snipbox")


def lock_path_for(path: Path) -> Path:
    return path.with_name(path.name + ".lock")


@contextlib.contextmanager
def exclusive_lock(path: Path) -> Iterator[None]:
    """Hold an advisory exclusive lock on ``<path>.lock`` for the block.

    Only cooperating snipbox processes honour the lock. The lock file is
    left in place afterwards: unlinking it while another process waits on
    it would let a third process lock a fresh inode. On platforms without
    ``fcntl`` the block runs unlocked.
    """
    if fcntl is None:
        yield
        return

    lock_file = lock_path_for(path)
    lock_file.parent.mkdir(parents=True, exist_ok=True)
    with open(lock_file, "a") as lock_fd:
        fcntl.flock(lock_fd, fcntl.LOCK_EX)
        logger.debug("Acquired lock %s", lock_file)
        try:
            yield
        finally:
            fcntl.flock(lock_fd, fcntl.LOCK_UN)
            logger.debug("Released lock %s", lock_file)


def atomic_write_text(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Replace ``path`` with ``text`` via a temp file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path: str | None = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=path.name + ".", suffix=".tmp", dir=str(path.parent))
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
        tmp_path = None
    finally:
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)


__all__ = ["atomic_write_text", "exclusive_lock", "lock_path_for"]
