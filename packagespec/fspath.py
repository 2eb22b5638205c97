"""A directory file system that remembers where it is located."""

from __future__ import annotations

import fnmatch
import os
import posixpath
import re
from typing import BinaryIO

_MAGIC = re.compile(r"[*?\[\\]")


class DirFS:
    """File system rooted at a directory, using slash-separated names."""

    def __init__(self, path: str) -> None:
        self.path = path

    def location(self, *args: str) -> str:
        """Path of the given names, relative to the file system's location."""
        return posixpath.join(self.path, *args)

    def _full(self, name: str) -> str:
        parts = name.split("/")
        if name != "." and (not name or any(part in ("", ".", "..") for part in parts)):
            raise ValueError(f"invalid path name: {name!r}")
        return os.path.join(self.path, *parts)

    def open(self, name: str) -> BinaryIO:
        """Open the named file for binary reading."""
        return open(self._full(name), "rb")

    def read_bytes(self, name: str) -> bytes:
        """Read the whole named file."""
        with self.open(name) as handle:
            return handle.read()

    def stat(self, name: str) -> os.stat_result:
        """Information about the named file."""
        return os.stat(self._full(name))

    def _entries(self, base: str, segment: str) -> list[str]:
        directory = self._full(base) if base else self.path
        if not _MAGIC.search(segment):
            return [segment] if os.path.lexists(os.path.join(directory, segment)) else []
        if not os.path.isdir(directory):
            return []
        return [entry for entry in sorted(os.listdir(directory)) if fnmatch.fnmatchcase(entry, segment)]

    def glob(self, pattern: str) -> list[str]:
        """Names of the files matching *pattern*, in lexical order."""
        if not pattern or pattern.startswith("/"):
            return []
        matches = [""]
        for segment in pattern.split("/"):
            matches = [
                posixpath.join(base, entry)
                for base in matches
                for entry in self._entries(base, segment)
            ]
        return sorted(matches)