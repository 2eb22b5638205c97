"""Interfaces shared by item specifications and file schemas."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol

from .contenttype import ContentType
from .filesize import FileSize


class ItemType(str, enum.Enum):
    """Kind of item described by a specification."""

    FILE = "file"
    FOLDER = "folder"


class LimitsSpec(Protocol):
    """Limits that a specification can impose on an item."""

    def max_total_contents(self) -> int: ...

    def max_total_size(self) -> FileSize: ...

    def max_file_size(self) -> FileSize: ...

    def max_configuration_size(self) -> FileSize: ...

    def max_relative_path_size(self) -> FileSize: ...

    def max_fields_per_data_stream(self) -> int: ...


class FileSchema(ABC):
    """Expected schema for a file."""

    @abstractmethod
    def validate(self, fsys: Any, path: str) -> list:
        """Return the validation errors of the file at *path*; empty if valid."""


@dataclass
class FileSchemaLoadOptions:
    """Extra information handed to a file schema loader."""

    content_type: ContentType | None = None
    limits: LimitsSpec | None = None
    spec_version: Any = None


class FileSchemaLoader(ABC):
    """Loads schemas for files."""

    @abstractmethod
    def load(self, fsys: Any, spec_path: str, options: FileSchemaLoadOptions) -> FileSchema:
        """Load a schema from *spec_path* within *fsys*."""