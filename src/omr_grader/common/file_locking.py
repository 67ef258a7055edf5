"""
Module: common.file_locking

Purpose:
    Cross-platform file locking for answer key files. Readers hold a shared
    lock and writers an exclusive one, so a key is never rewritten while
    another process is loading it.
    Uses portalocker for Mac, Windows, and Linux compatibility.

Key Functions:
    - locked_file: Context manager for locked file access

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - grading.answer_key: Loading and saving key files
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Generator, Optional, Union

import portalocker

logger = logging.getLogger(__name__)


@contextmanager
def locked_file(
    path: Union[str, Path],
    mode: str = 'r',
    lock_type: Optional[int] = None,
) -> Generator[IO, None, None]:
    """
    Context manager for cross-platform locked file access.

    Unlike plain open() callers don't pick a lock: read modes take a shared
    lock and anything that writes takes an exclusive one, unless lock_type
    is given. The file is never created for read modes.

    'w' modes do not truncate on open. The file is opened for append,
    locked, and only then emptied, so a reader holding the shared lock
    keeps seeing the old contents until it lets go.

    Args:
        path: Path to file.
        mode: File open mode ('r', 'rb', 'w', 'a', etc.).
        lock_type: Override lock type (portalocker.LOCK_EX / LOCK_SH).

    Yields:
        Open file handle with lock held (text handles are UTF-8).

    Raises:
        OSError: If the file cannot be opened or locked.

    Example:
        >>> with locked_file(path, 'w') as f:
        ...     f.write('1,MC,2\\n')
    """
    if lock_type is None:
        writes = any(flag in mode for flag in ('w', 'a', '+', 'x'))
        lock_type = portalocker.LOCK_EX if writes else portalocker.LOCK_SH

    truncate = 'w' in mode
    open_mode = mode.replace('w', 'a') if truncate else mode
    encoding = None if 'b' in mode else 'utf-8'

    with open(path, open_mode, encoding=encoding) as f:
        try:
            portalocker.lock(f, lock_type)
        except portalocker.LockException as e:
            raise OSError(f"Could not lock {path}: {e}") from e
        logger.debug(f"Locked {Path(path).name} ({mode})")
        try:
            if truncate:
                f.seek(0)
                f.truncate()
            yield f
        finally:
            portalocker.unlock(f)
