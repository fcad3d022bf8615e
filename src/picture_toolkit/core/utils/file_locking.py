"""
Module: core.utils.file_locking

Purpose:
    Cross-platform file locking for definition JSON files that may be
    rewritten while a server process is reading them.
    Uses portalocker for Mac, Windows, and Linux compatibility.

Key Functions:
    - locked_file: Context manager for locked file access
    - locked_read_json: Read a JSON file under a shared lock
    - locked_write_json: Write a JSON file under an exclusive lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - definitions.serialization: Definition file load/save
    - cli: --config files
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

import portalocker

logger = logging.getLogger(__name__)


@contextmanager
def locked_file(
    path: Path,
    mode: str = 'r',
    lock_type: int = portalocker.LOCK_EX,
) -> Generator:
    """
    Context manager for cross-platform locked file access.

    Args:
        path: Path to file.
        mode: File open mode ('r', 'w', 'a', etc.).
        lock_type: Lock type (LOCK_EX for exclusive, LOCK_SH for shared).

    Yields:
        Open file handle with lock held.

    Raises:
        FileNotFoundError: If mode reads and the file does not exist.

    Example:
        >>> with locked_file(path, 'r', portalocker.LOCK_SH) as f:
        ...     data = f.read()
    """
    if 'r' not in mode:
        path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, mode, encoding='utf-8') as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


def locked_read_json(path: Path) -> Any:
    """
    Read and parse a JSON file while holding a shared lock.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    with locked_file(path, 'r', portalocker.LOCK_SH) as f:
        return json.load(f)


def locked_write_json(path: Path, data: Any) -> None:
    """
    Serialize data to a JSON file while holding an exclusive lock.

    Example:
        >>> locked_write_json(defs_dir / "hero.json", picture.to_dict())
    """
    with locked_file(path, 'w', portalocker.LOCK_EX) as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.debug(f"Wrote {path.name}")
