"""File systems that resolve or refuse link files."""

from __future__ import annotations

import os
import posixpath
from typing import Any, BinaryIO

from .linkedfiles import read_link

LINK_EXTENSION = ".link"


class UnsupportedLinkFileError(Exception):
    """Raised when a link file is opened where links are not allowed."""

    def __init__(self, message: str = "linked files are not supported in this filesystem") -> None:
        super().__init__(message)


class LinkNotUpToDateError(Exception):
    """Raised when a link file's checksum does not match the included file."""


def _extension(name: str) -> str:
    base = name.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


class LinkedFS:
    """Wraps a file system and serves the targets of up-to-date link files."""

    def __init__(self, work_dir: str, inner: Any) -> None:
        self.work_dir = work_dir
        self.inner = inner

    def open(self, name: str) -> BinaryIO:
        """Open *name*; for a link file, open the file it includes."""
        if _extension(name) != LINK_EXTENSION:
            return self.inner.open(name)
        link = read_link(os.path.join(self.work_dir, *name.split("/")))
        if not link.up_to_date:
            raise LinkNotUpToDateError(f"linked file {name} is not up to date")
        included = os.path.normpath(
            os.path.join(
                self.work_dir,
                *posixpath.dirname(name).split("/"),
                *link.included_file_path.split("/"),
            )
        )
        return open(included, "rb")


class BlockFS:
    """Wraps a file system and refuses to open link files."""

    def __init__(self, inner: Any) -> None:
        self.inner = inner

    def open(self, name: str) -> BinaryIO:
        """Open *name* unless it is a link file."""
        if _extension(name) == LINK_EXTENSION:
            raise UnsupportedLinkFileError()
        return self.inner.open(name)