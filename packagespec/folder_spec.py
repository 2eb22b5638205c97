"""Loading of folder specifications from a file system."""

from __future__ import annotations

import posixpath
from collections import deque
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

import semver
import yaml

from .folder_item_spec import (
    VISIBILITY_PRIVATE,
    VISIBILITY_PUBLIC,
    FolderItemSpec,
)
from .folder_schema_spec import folder_schema_from_dict
from .item import FileSchemaLoader, FileSchemaLoadOptions, ItemType


class SpecLoadError(Exception):
    """Raised when a folder specification cannot be loaded."""


def _assign(target: FolderItemSpec, source: FolderItemSpec) -> None:
    for item in fields(source):
        setattr(target, item.name, getattr(source, item.name))


def _join(base: str, ref: str) -> str:
    return posixpath.normpath(posixpath.join(posixpath.dirname(base), ref))


class FolderSpecLoader:
    """Loads folder specifications, resolving ``$ref`` references."""

    def __init__(
        self,
        fsys: Any,
        file_schema_loader: FileSchemaLoader | None,
        version: semver.Version | str | None,
    ) -> None:
        self.fsys = fsys
        self.file_schema_loader = file_schema_loader
        if version is None:
            version = semver.Version(0, 0, 0)
        elif isinstance(version, str):
            version = semver.Version.parse(version)
        self.version = version

    def load(self, spec_path: str) -> FolderItemSpec:
        """Load the specification in ``<spec_path>/spec.yml``."""
        return self._load_folder_spec(FolderItemSpec(), posixpath.join(spec_path, "spec.yml"))

    def _read(self, spec_path: str) -> Mapping:
        try:
            handle = self.fsys.open(spec_path)
        except (OSError, ValueError) as exc:
            raise SpecLoadError(f"could not open folder specification file: {exc}") from exc
        with handle:
            try:
                data = handle.read()
            except OSError as exc:
                raise SpecLoadError(f"could not read folder specification file: {exc}") from exc
        try:
            document = yaml.safe_load(data)
        except yaml.YAMLError as exc:
            raise SpecLoadError(f"could not parse folder specification file: {exc}") from exc
        if document is None:
            return {}
        if not isinstance(document, Mapping):
            raise SpecLoadError("could not parse folder specification file: not a mapping")
        return document

    def _load_folder_spec(self, base: FolderItemSpec, spec_path: str) -> FolderItemSpec:
        document = dict(self._read(spec_path))
        raw_spec = document.get("spec")
        if raw_spec is not None and not isinstance(raw_spec, Mapping):
            raise SpecLoadError("could not parse folder specification file: spec is not a mapping")
        document["spec"] = {**base.to_dict(), **(raw_spec or {})}
        try:
            folder_schema = folder_schema_from_dict(document)
        except ValueError as exc:
            raise SpecLoadError(f"could not parse folder specification file: {exc}") from exc

        try:
            spec = folder_schema.resolve(self.version)
        except ValueError as exc:
            raise SpecLoadError(str(exc)) from exc

        self._load_contents(spec, spec_path)
        spec.set_default_values()
        spec.propagate_content_limits()
        return spec

    def _load_contents(self, spec: FolderItemSpec, spec_path: str) -> None:
        pending = deque(spec.contents)
        while pending:
            content = pending.popleft()

            visibility = content.visibility
            if visibility and visibility not in (VISIBILITY_PRIVATE, VISIBILITY_PUBLIC):
                raise SpecLoadError(
                    f"item [{posixpath.join(spec_path, content.name)}] visibility is expected "
                    f"to be private or public, not [{visibility}]"
                )

            # Everything below a development folder is a development folder too.
            if spec.development_folder:
                content.development_folder = True

            if content.ref:
                if content.item_type == ItemType.FILE.value:
                    self._load_file_schema(content, spec_path)
                elif content.item_type == ItemType.FOLDER.value:
                    target = _join(spec_path, content.ref)
                    try:
                        loaded = self._load_folder_spec(content, target)
                    except SpecLoadError as exc:
                        raise SpecLoadError(f'could not load spec for "{target}": {exc}') from exc
                    _assign(content, loaded)
            elif content.contents:
                pending.extend(content.contents)

    def _load_file_schema(self, content: FolderItemSpec, spec_path: str) -> None:
        if self.file_schema_loader is None:
            return
        schema_path = _join(spec_path, content.ref)
        options = FileSchemaLoadOptions(
            content_type=content.content_media_type,
            limits=content,
            spec_version=self.version,
        )
        try:
            content.schema = self.file_schema_loader.load(self.fsys, schema_path, options)
        except Exception as exc:
            raise SpecLoadError(
                f'could not load schema for "{posixpath.dirname(schema_path)}": {exc}'
            ) from exc