"""A folder specification file: the spec itself and its version patches."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import semver

from .folder_item_spec import FolderItemSpec, item_spec_from_dict
from .specpatch import PatchError, VersionPatch, patch_for_version, resolve_patch


@dataclass
class FolderSchemaSpec:
    """Specification of a folder together with per-version patches."""

    spec: FolderItemSpec = field(default_factory=FolderItemSpec)
    versions: list[VersionPatch] = field(default_factory=list)

    def resolve(self, target: semver.Version | str) -> FolderItemSpec:
        """The specification as it applies to version *target*."""
        operations = patch_for_version(target, self.versions)
        if not operations:
            return self.spec
        try:
            patched = resolve_patch(self.spec, operations)
        except PatchError as exc:
            raise PatchError(f"failed to apply patch: {exc}") from exc
        try:
            return item_spec_from_dict(patched)
        except ValueError as exc:
            raise ValueError(f"failed to unmarshal resolved spec: {exc}") from exc


def _version_patch(item: Any) -> VersionPatch:
    if not isinstance(item, Mapping):
        raise ValueError(f"version entry must be a mapping, not {item!r}")
    before = item.get("before")
    patch = item.get("patch") or []
    if not isinstance(patch, list):
        raise ValueError(f"patch must be a list, not {patch!r}")
    return VersionPatch(before="" if before is None else str(before), patch=list(patch))


def folder_schema_from_dict(data: Mapping) -> FolderSchemaSpec:
    """Build a folder schema from a decoded specification file."""
    if not isinstance(data, Mapping):
        raise ValueError(f"folder specification must be a mapping, not {data!r}")
    raw_spec = data.get("spec")
    spec = FolderItemSpec() if raw_spec is None else item_spec_from_dict(raw_spec)
    raw_versions = data.get("versions") or []
    if not isinstance(raw_versions, list):
        raise ValueError(f"versions must be a list, not {raw_versions!r}")
    return FolderSchemaSpec(spec=spec, versions=[_version_patch(item) for item in raw_versions])