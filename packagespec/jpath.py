"""A JSONPath evaluator for decoded JSON and YAML documents."""

from __future__ import annotations

import re
from typing import Any, Iterator


class JSONPathError(ValueError):
    """Raised for malformed paths and for values a plain path cannot reach."""


_QUOTED = r"""'(?:[^'\\]|\\[\s\S])*'|"(?:[^"\\]|\\[\s\S])*\""""
_STEP = re.compile(
    rf"""(?P<dots>\.\.?)?(?:\[(?P<bracket>(?:{_QUOTED}|[^\]'"])*)\]|(?P<star>\*)|(?P<name>[^.\[]+))"""
)
_TOP_COMMA = re.compile(rf""",(?=(?:{_QUOTED}|[^'"])*$)""")
_MULTI = ("wild", "slice", "union")


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError as exc:
        raise JSONPathError(f"invalid index {text!r}") from exc


def _parse_item(text: str) -> tuple[str, Any]:
    if len(text) >= 2 and text[0] in "'\"" and text[-1] == text[0]:
        return "key", re.sub(r"\\([\s\S])", r"\1", text[1:-1])
    return "index", _parse_int(text)


def _parse_bracket(content: str) -> tuple[str, Any]:
    if content == "*":
        return "wild", None
    if content.startswith(("?", "(")):
        raise JSONPathError(f"unsupported expression [{content}]")
    parts = [part.strip() for part in _TOP_COMMA.split(content)]
    if not all(parts):
        raise JSONPathError(f"empty selector in [{content}]")
    if len(parts) == 1 and ":" in parts[0] and parts[0][0] not in "'\"":
        bounds = parts[0].split(":")
        if len(bounds) > 3:
            raise JSONPathError(f"invalid slice [{content}]")
        values = [_parse_int(b.strip()) if b.strip() else None for b in bounds]
        values += [None] * (3 - len(values))
        if values[2] == 0:
            raise JSONPathError("slice step cannot be zero")
        return "slice", slice(*values)
    items = [_parse_item(part) for part in parts]
    return items[0] if len(items) == 1 else ("union", items)


def _parse(path: str) -> list[tuple[tuple[str, Any], bool]]:
    if not path.startswith("$"):
        raise JSONPathError(f"path must start with '$': {path!r}")
    steps = []
    pos = 1
    while pos < len(path):
        match = _STEP.match(path, pos)
        if match is None or (match["bracket"] is None and not match["dots"]):
            raise JSONPathError(f"unexpected {path[pos]!r} at position {pos} in {path!r}")
        if match["bracket"] is not None:
            selector = _parse_bracket(match["bracket"].strip())
        elif match["star"]:
            selector = ("wild", None)
        else:
            selector = ("key", match["name"])
        steps.append((selector, match["dots"] == ".."))
        pos = match.end()
    return steps


def _walk(value: Any) -> Iterator[Any]:
    yield value
    children = [value[k] for k in sorted(value, key=str)] if isinstance(value, dict) else value
    if isinstance(value, (dict, list)):
        for child in children:
            yield from _walk(child)


def _select(selector: tuple[str, Any], value: Any, strict: bool) -> list:
    kind, arg = selector
    if kind == "key":
        if isinstance(value, dict) and arg in value:
            return [value[arg]]
        if strict:
            raise JSONPathError(f"unknown key {arg}")
        return []
    if kind == "index":
        if isinstance(value, list) and -len(value) <= arg < len(value):
            return [value[arg]]
        if strict:
            raise JSONPathError(
                f"index {arg} out of bounds"
                if isinstance(value, list)
                else f"cannot index {type(value).__name__} with {arg}"
            )
        return []
    if kind == "wild":
        if isinstance(value, dict):
            return [value[key] for key in sorted(value, key=str)]
        return list(value) if isinstance(value, list) else []
    if kind == "slice":
        return value[arg] if isinstance(value, list) else []
    return [found for item in arg for found in _select(item, value, False)]


def get(path: str, value: Any) -> Any:
    """Evaluate *path* on *value*.

    A path made only of names and indices returns the single value it reaches;
    a path with wildcards, slices, unions or recursive descent returns a list.
    """
    steps = _parse(path)
    if not any(descend or selector[0] in _MULTI for selector, descend in steps):
        for selector, _ in steps:
            value = _select(selector, value, strict=True)[0]
        return value
    matches = [value]
    for selector, descend in steps:
        matches = [
            found
            for item in matches
            for node in (_walk(item) if descend else (item,))
            for found in _select(selector, node, False)
        ]
    return matches