"""Link files that point at other files together with their checksum."""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass


@dataclass
class Link:
    """A link file, the file it includes and whether its checksum is current."""

    link_file_path: str
    link_checksum: str = ""
    included_file_path: str = ""
    included_file_contents_checksum: str = ""
    up_to_date: bool = False


def checksum(data: bytes) -> str:
    """Hex encoded SHA-256 digest of *data*."""
    return hashlib.sha256(data).hexdigest()


def _read_first_line(file_path: str) -> str:
    with open(file_path, "rb") as handle:
        line = handle.readline()
    if not line:
        raise ValueError("file is empty or first line is missing")
    if line.endswith(b"\n"):
        line = line[:-1]
    if line.endswith(b"\r"):
        line = line[:-1]
    return line.decode("utf-8", errors="surrogateescape")


def read_link(link_file_path: str) -> Link:
    """Read the link file at *link_file_path* and check the included file."""
    fields = _read_first_line(link_file_path).split()
    if not fields:
        raise ValueError(f"link file {link_file_path} does not name a file")
    link = Link(link_file_path=link_file_path, included_file_path=fields[0])
    if len(fields) == 2:
        link.link_checksum = fields[1]

    target = os.path.normpath(
        os.path.join(os.path.dirname(link_file_path), *link.included_file_path.split("/"))
    )
    try:
        with open(target, "rb") as handle:
            contents = handle.read()
    except OSError as exc:
        raise OSError(
            exc.errno,
            f"could not collect file {link.included_file_path}: {exc.strerror}",
            exc.filename,
        ) from exc

    link.included_file_contents_checksum = checksum(contents)
    link.up_to_date = link.link_checksum == link.included_file_contents_checksum
    return link