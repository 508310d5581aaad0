"""
Contact storage backends.

Rule: the CLI only talks to ContactStore; open_store() is the one place a
concrete backend is picked.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from minicrm.errors import PersistenceError
from minicrm.storage.base import ContactStore
from minicrm.storage.json_store import PersistentContactStore
from minicrm.storage.memory import VolatileContactStore

BACKENDS = ("json", "memory")


def open_store(backend: str = "json", path: Union[str, Path, None] = None, *, fsync: bool = True) -> ContactStore:
    """
    Build the configured store.

    For "json" the parent directory of path is created if needed; an existing
    file is loaded (FormatError / PersistenceError propagate; a directory
    that cannot be created is a PersistenceError too).
    """
    if backend == "memory":
        return VolatileContactStore()
    if backend != "json":
        raise ValueError(f"unknown storage backend {backend!r} (expected one of {', '.join(BACKENDS)})")
    if path is None:
        raise ValueError("json backend requires a path")

    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PersistenceError(f"cannot create data directory {p.parent}: {e}") from e
    return PersistentContactStore(p, fsync=fsync)


__all__ = [
    "BACKENDS",
    "ContactStore",
    "PersistentContactStore",
    "VolatileContactStore",
    "open_store",
]
