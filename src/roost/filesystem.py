"""Filesystem capability consumed by the controller loader.

The loader never touches ``os`` directly: it asks a :class:`Filesystem`
for directory entries, so tests can substitute an in-memory tree
(see :class:`roost.testing.MemoryFilesystem`).
"""

import os
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from roost.errors import FilesystemError


@dataclass(frozen=True, slots=True)
class DirEntry:
    """A directory entry as reported by a filesystem capability.

    Attributes:
        name: Base name of the entry.
        path: Full path (the listed directory joined with ``name``).
        is_dir: True for directories, False for everything else.
    """

    name: str
    path: str
    is_dir: bool


@runtime_checkable
class Filesystem(Protocol):
    """Read-only directory listing."""

    def list_dir(self, path: str) -> list[DirEntry]:
        """Return the entries of *path*, in the order the walk should visit them.

        Raises ``FilesystemError`` if *path* is missing or unreadable.
        """
        ...


class LocalFilesystem:
    """The real filesystem, via ``os.scandir``.

    Entries are sorted by name so repeated walks over the same tree
    mount controllers in the same order.  Symlinks are classified by
    whatever ``os.DirEntry.is_dir()`` reports; nothing is resolved.
    """

    __slots__ = ()

    def list_dir(self, path: str) -> list[DirEntry]:
        try:
            with os.scandir(path) as it:
                entries = [
                    DirEntry(name=e.name, path=e.path, is_dir=e.is_dir())
                    for e in it
                ]
        except OSError as exc:
            raise FilesystemError(str(path), exc.strerror or str(exc)) from exc
        entries.sort(key=lambda e: e.name)
        return entries
