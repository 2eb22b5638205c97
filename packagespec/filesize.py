"""File sizes expressed in bytes, kilobytes or megabytes."""

from __future__ import annotations

import json
import re

import yaml

_MAX_SIZE = 1 << 63

_UNITS = {"MB": 1024 * 1024, "KB": 1024, "B": 1, "": 1}
_PATTERN = re.compile(r"^(\d+)(B|KB|MB|)$")


class FileSize(int):
    """A size of a file in bytes."""

    def __str__(self) -> str:
        value = int(self)
        if value >= MEGABYTE and value % MEGABYTE == 0:
            return f"{value // MEGABYTE}MB"
        if value >= KILOBYTE and value % KILOBYTE == 0:
            return f"{value // KILOBYTE}KB"
        return f"{value}B"

    def __repr__(self) -> str:
        return f"FileSize({int(self)})"

    def to_json(self) -> str:
        """JSON string that decodes back to the same size."""
        return f'"{self}"'

    def to_yaml(self) -> str:
        """YAML document that decodes back to the same size."""
        return f"{self}\n"


BYTE = FileSize(1)
KILOBYTE = FileSize(1024)
MEGABYTE = FileSize(1024 * 1024)


def _parse_count(text: str) -> int:
    if not text.isascii() or not text.isdigit():
        raise ValueError(f"invalid number for file size ({text})")
    value = int(text)
    if value >= _MAX_SIZE:
        raise ValueError(f"file size out of range ({text})")
    return value


def parse_file_size(value: int | str) -> FileSize:
    """Parse a size given as a plain number or a string like ``10MB``."""
    if isinstance(value, bool):
        raise ValueError(f"invalid format for file size ({value})")
    if isinstance(value, int):
        if not 0 <= value < _MAX_SIZE:
            raise ValueError(f"file size out of range ({value})")
        return FileSize(value)
    match = _PATTERN.match(value)
    if match is None:
        raise ValueError(f"invalid format for file size ({value})")
    quantity = _parse_count(match.group(1))
    return FileSize(quantity * _UNITS[match.group(2)])


def file_size_from_json(data: str | bytes) -> FileSize:
    """Decode a size from JSON, accepting unquoted numbers or strings."""
    text = data.decode() if isinstance(data, bytes) else data
    if text.isascii() and text.isdigit():
        return parse_file_size(_parse_count(text))
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON for file size: {exc}") from exc
    if not isinstance(raw, str):
        raise ValueError(f"invalid format for file size ({text})")
    return parse_file_size(raw)


def file_size_from_yaml(data: str | bytes) -> FileSize:
    """Decode a size from a YAML scalar."""
    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid YAML for file size: {exc}") from exc
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise ValueError(f"invalid format for file size ({raw!r})")
    return parse_file_size(str(raw))