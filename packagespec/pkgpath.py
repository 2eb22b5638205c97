"""Files of a package located by glob, with access to their structured values."""

from __future__ import annotations

import json
import os
import posixpath
from dataclasses import dataclass
from typing import Any

import yaml

from . import jpath
from .fspath import DirFS


class FilesError(Exception):
    """Raised when some of the files matching a glob cannot be inspected."""

    def __init__(self, errors: list[Exception], files: list[PackageFile]) -> None:
        super().__init__("; ".join(str(error) for error in errors))
        self.errors = errors
        self.files = files


def _load_yaml(contents: bytes) -> Any:
    return next(iter(yaml.safe_load_all(contents)), None)


@dataclass
class PackageFile:
    """A file in a package."""

    fsys: DirFS
    path: str
    info: os.stat_result

    @property
    def name(self) -> str:
        """Base name of the file."""
        return posixpath.basename(self.path)

    def values(self, path: str) -> Any:
        """Values in this YAML or JSON file that match the JSONPath *path*."""
        name = self.name
        dot = name.rfind(".")
        extension = name[dot + 1 :] if dot >= 0 else ""
        if extension not in ("json", "yaml", "yml"):
            raise ValueError(f"cannot extract values from file type = {extension}")

        try:
            contents = self.fsys.read_bytes(self.path)
        except OSError as exc:
            raise OSError(
                exc.errno, f"reading file content failed: {exc.strerror}", exc.filename
            ) from exc

        load, kind = (json.loads, "JSON") if extension == "json" else (_load_yaml, "YAML")
        try:
            document = load(contents)
        except (ValueError, yaml.YAMLError) as exc:
            raise ValueError(
                f"unmarshalling {kind} file failed (path: {self.fsys.location(name)}): {exc}"
            ) from exc
        return jpath.get(path, document)


def find_files(fsys: DirFS, pattern: str) -> list[PackageFile]:
    """Files of *fsys* whose names match the glob *pattern*."""
    files: list[PackageFile] = []
    errors: list[Exception] = []
    for path in fsys.glob(pattern):
        try:
            files.append(PackageFile(fsys, path, fsys.stat(path)))
        except OSError as exc:
            errors.append(exc)
    if errors:
        raise FilesError(errors, files)
    return files