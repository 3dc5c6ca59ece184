"""
Module: storage.file_locking

Purpose:
    Cross-platform locked JSON access so several processes (e.g. a CLI run
    and a long-lived preview) can share one style store file.
    Uses portalocker for Mac, Windows and Linux compatibility.

Key Functions:
    - locked_file(): Context manager holding a lock on an open file
    - locked_read_json(): Read a JSON document under a shared lock
    - locked_update_json(): Read-modify-write under an exclusive lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - storage.style_store: JsonStyleStore
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Callable, Dict, Iterator

import portalocker

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


@contextmanager
def locked_file(
    path: Path,
    mode: str = "r",
    lock_type: int = portalocker.LOCK_EX,
) -> Iterator[IO[str]]:
    """
    Open path and hold a lock on it for the duration of the block.

    Args:
        path: File to open (parent directories are created)
        mode: File open mode
        lock_type: LOCK_EX for exclusive, LOCK_SH for shared

    Example:
        >>> with locked_file(path, "r", portalocker.LOCK_SH) as f:
        ...     data = f.read()
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if "r" in mode and not path.exists():
        path.touch()

    with open(path, mode, encoding="utf-8") as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


def _parse(content: str, default: Callable[[], Document], path: Path) -> Document:
    if not content.strip():
        return default()
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Corrupt JSON in {path}: {e}") from e


def locked_read_json(path: Path, default: Callable[[], Document] = dict) -> Document:
    """
    Read a JSON document under a shared lock.

    A missing or empty file yields default().

    Raises:
        ValueError: If the file holds malformed JSON
    """
    if not path.exists():
        return default()
    with locked_file(path, "r", portalocker.LOCK_SH) as f:
        return _parse(f.read(), default, path)


def locked_update_json(
    path: Path,
    modifier: Callable[[Document], Document],
    default: Callable[[], Document] = dict,
) -> Document:
    """
    Read JSON, apply modifier, write back, all under one exclusive lock.

    If modifier raises, the file is left untouched.

    Args:
        path: JSON file (created with default() if missing)
        modifier: Takes the current document, returns the new one
        default: Factory for the document of a missing/empty file

    Returns:
        The document that was written
    """
    with locked_file(path, "a+", portalocker.LOCK_EX) as f:
        f.seek(0)
        current = _parse(f.read(), default, path)
        modified = modifier(current)

        f.seek(0)
        f.truncate()
        json.dump(modified, f, indent=2, ensure_ascii=False)
        f.flush()

    logger.debug(f"Updated {path.name}")
    return modified
