"""
Module: access.file_locking

Purpose:
    Locking for the JSON token store, which several server processes may
    read and redeem from at once.
    Uses portalocker for Mac, Windows, and Linux compatibility.

Key Functions:
    - locked_file: Shared or exclusive locked access to a token file
    - locked_read_modify_write_json: Read-modify-write JSON with lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - access.tokens: Token provisioning and redemption
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Generator

import portalocker

logger = logging.getLogger(__name__)


@contextmanager
def locked_file(path: Path, mode: str = 'r', *, shared: bool = False) -> Generator:
    """
    Open a token file with a portalocker lock held for the whole block.

    Readers such as ``TokenStore.stats`` pass ``shared=True`` so several
    processes can count tokens at once; any writer takes the exclusive
    lock and waits for them. A read of a missing file sees an empty
    file rather than an error.

    Yields:
        Open text handle (UTF-8)

    Example:
        >>> with locked_file(Path("tokens.json"), shared=True) as f:
        ...     records = json.load(f)
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if 'r' in mode and not path.exists():
        path.touch()

    lock_type = portalocker.LOCK_SH if shared else portalocker.LOCK_EX
    with open(path, mode, encoding='utf-8') as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


def locked_read_modify_write_json(
    path: Path,
    modifier: Callable[[Any], Any],
    default: Callable[[], Any] = dict,
    *,
    create: bool = True,
) -> Any:
    """
    Read JSON, apply modifier, write back - all with exclusive lock.

    The whole cycle runs under one lock, so a modifier that checks a
    value and then changes it is atomic with respect to other callers.

    Args:
        path: Path to JSON file.
        modifier: Function that takes existing data, returns modified data.
        default: Factory for default data if file doesn't exist or is empty.
        create: Create the file from ``default`` if missing. When False a
            missing file raises FileNotFoundError.

    Returns:
        The modified data that was written.

    Raises:
        FileNotFoundError: If the file is missing and ``create`` is False
        json.JSONDecodeError: If the existing content is not valid JSON
    """
    if create and not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(default(), indent=2), encoding='utf-8')

    with open(path, 'r+', encoding='utf-8') as f:
        portalocker.lock(f, portalocker.LOCK_EX)
        try:
            # Read existing
            f.seek(0)
            content = f.read()
            if content.strip():
                existing = json.loads(content)
            else:
                existing = default()

            # Modify
            modified = modifier(existing)

            # Write back
            f.seek(0)
            f.truncate()
            json.dump(modified, f, indent=2, ensure_ascii=False)
            f.flush()

            return modified
        finally:
            portalocker.unlock(f)
