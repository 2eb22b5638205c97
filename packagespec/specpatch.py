"""Version-dependent JSON patches (RFC 6902) applied to specifications."""

from __future__ import annotations

import copy
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import semver


class PatchError(ValueError):
    """Raised when a JSON patch cannot be decoded or applied."""


@dataclass
class VersionPatch:
    """Patch operations that apply to every version before ``before``."""

    before: str
    patch: list = field(default_factory=list)


def _parse_version(text: str) -> semver.Version:
    candidate = text.strip()
    if candidate[:1] in ("v", "V"):
        candidate = candidate[1:]
    try:
        return semver.Version.parse(candidate, optional_minor_and_patch=True)
    except (ValueError, TypeError) as exc:
        raise ValueError(f"invalid semantic version: {text!r}") from exc


def patch_for_version(
    target: semver.Version | str, versions: Iterable[VersionPatch | Mapping]
) -> list:
    """Collect the patch operations for *target*; empty when nothing applies."""
    if isinstance(target, str):
        target = _parse_version(target)
    operations: list = []
    for item in versions:
        if not isinstance(item, VersionPatch):
            item = VersionPatch(str(item.get("before", "")), list(item.get("patch") or []))
        if target < _parse_version(item.before):
            operations.extend(item.patch)
    return operations


def _parse_pointer(pointer: Any) -> list[str]:
    if not isinstance(pointer, str) or (pointer and not pointer.startswith("/")):
        raise PatchError(f"invalid JSON pointer: {pointer!r}")
    if pointer == "":
        return []
    return [token.replace("~1", "/").replace("~0", "~") for token in pointer[1:].split("/")]


def _array_index(token: str, length: int, allow_end: bool) -> int:
    if token == "-" and allow_end:
        return length
    if not (token.isascii() and token.isdigit()) or (len(token) > 1 and token.startswith("0")):
        raise PatchError(f"invalid array index: {token!r}")
    index = int(token)
    if index > (length if allow_end else length - 1):
        raise PatchError(f"array index out of bounds: {index}")
    return index


def _get(document: Any, tokens: list[str]) -> Any:
    for token in tokens:
        if isinstance(document, dict):
            if token not in document:
                raise PatchError(f"unable to find key {token!r}")
            document = document[token]
        elif isinstance(document, list):
            document = document[_array_index(token, len(document), allow_end=False)]
        else:
            raise PatchError(f"cannot traverse into {type(document).__name__} with {token!r}")
    return document


def _set(document: Any, tokens: list[str], value: Any, insert: bool) -> Any:
    if not tokens:
        return value
    parent, key = _get(document, tokens[:-1]), tokens[-1]
    if isinstance(parent, dict):
        if not insert and key not in parent:
            raise PatchError(f"unable to replace nonexistent key {key!r}")
        parent[key] = value
    elif isinstance(parent, list):
        index = _array_index(key, len(parent), allow_end=insert)
        if insert:
            parent.insert(index, value)
        else:
            parent[index] = value
    else:
        raise PatchError(f"cannot set a value in {type(parent).__name__}")
    return document


def _remove(document: Any, tokens: list[str]) -> tuple[Any, Any]:
    if not tokens:
        raise PatchError("cannot remove the document root")
    parent, key = _get(document, tokens[:-1]), tokens[-1]
    if isinstance(parent, dict):
        if key not in parent:
            raise PatchError(f"unable to remove nonexistent key {key!r}")
        return document, parent.pop(key)
    if isinstance(parent, list):
        return document, parent.pop(_array_index(key, len(parent), allow_end=False))
    raise PatchError(f"cannot remove from {type(parent).__name__}")


def _json_equal(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(_json_equal(left[k], right[k]) for k in left)
    if isinstance(left, list) and isinstance(right, list):
        return len(left) == len(right) and all(map(_json_equal, left, right))
    if isinstance(left, (dict, list)) or isinstance(right, (dict, list)):
        return False
    return left == right


def _require(operation: Mapping, name: str) -> Any:
    if name not in operation:
        raise PatchError(f"{operation.get('op')} operation is missing {name!r}")
    return operation[name]


def _apply_one(document: Any, operation: Any) -> Any:
    if not isinstance(operation, Mapping):
        raise PatchError(f"patch operation must be an object, not {operation!r}")
    kind = operation.get("op")
    path = _parse_pointer(_require(operation, "path"))
    if kind in ("add", "replace"):
        return _set(document, path, copy.deepcopy(_require(operation, "value")), kind == "add")
    if kind == "remove":
        return _remove(document, path)[0]
    if kind == "move":
        source = _parse_pointer(_require(operation, "from"))
        if source == path:
            return document
        if path[: len(source)] == source:
            raise PatchError("cannot move a value into one of its children")
        document, value = _remove(document, source)
        return _set(document, path, value, insert=True)
    if kind == "copy":
        source = _parse_pointer(_require(operation, "from"))
        return _set(document, path, copy.deepcopy(_get(document, source)), insert=True)
    if kind == "test":
        if not _json_equal(_get(document, path), _require(operation, "value")):
            raise PatchError(f"testing value {operation['path']!r} failed")
        return document
    raise PatchError(f"unexpected patch operation kind: {kind!r}")


def apply_patch(document: Any, operations: Iterable) -> Any:
    """Apply RFC 6902 *operations* to a copy of *document* and return it."""
    result = copy.deepcopy(document)
    for operation in operations:
        result = _apply_one(result, operation)
    return result


def resolve_patch(spec: Any, operations: Iterable) -> Any:
    """Apply *operations* to the JSON form of *spec* and return the patched document."""
    try:
        operations = list(operations)
    except TypeError as exc:
        raise PatchError(f"failed to decode patch: {exc}") from exc
    data = spec.to_dict() if callable(getattr(spec, "to_dict", None)) else spec
    try:
        document = json.loads(json.dumps(data, default=str))
    except (TypeError, ValueError) as exc:
        raise PatchError(f"failed to serialise spec for patching: {exc}") from exc
    return apply_patch(document, operations)