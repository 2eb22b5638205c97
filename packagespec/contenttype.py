"""Content media types with parameters, as used in item specifications."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field

import yaml

_WORD_PATTERN = r"[^\x00-\x20\x7f-\U0010ffff()<>@,;:\\\"/\[\]?=]+"
_WORD_RE = re.compile(_WORD_PATTERN)
_MEDIA_RE = re.compile(rf"{_WORD_PATTERN}(?:/{_WORD_PATTERN})?")
_PARAM_RE = re.compile(
    rf'[ \t]*;[ \t]*({_WORD_PATTERN})[ \t]*=[ \t]*({_WORD_PATTERN}|"((?:[^"\\\r\n]|\\[\s\S])*)")'
)


def _is_word(text: str) -> bool:
    return _WORD_RE.fullmatch(text) is not None


def _parse_media_type(text: str) -> tuple[str, dict[str, str]]:
    head, sep, tail = text.partition(";")
    media_type = head.strip().lower()
    if not _MEDIA_RE.fullmatch(media_type):
        raise ValueError(f"mime: invalid media type {media_type!r}")
    params: dict[str, str] = {}
    rest = sep + tail
    while rest.strip(" \t"):
        match = _PARAM_RE.match(rest)
        if match is None:
            if rest.strip() == ";":
                break
            raise ValueError("mime: invalid media parameter")
        name = match.group(1).lower()
        quoted = match.group(3)
        value = match.group(2) if quoted is None else re.sub(r"\\([\s\S])", r"\1", quoted)
        if name in params:
            raise ValueError("mime: duplicate parameter name")
        params[name] = value
        rest = rest[match.end() :]
    return media_type, params


def _format_media_type(media_type: str, params: dict[str, str] | None) -> str:
    major, slash, sub = media_type.partition("/")
    if not _is_word(major) or (slash and not _is_word(sub)):
        return ""
    out = media_type.lower()
    for name, value in sorted((params or {}).items()):
        if not _is_word(name):
            return ""
        if not _is_word(value):
            value = '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
        out += f"; {name.lower()}={value}"
    return out


@dataclass
class ContentType:
    """A content media type together with its parameters."""

    media_type: str = ""
    params: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return _format_media_type(self.media_type, self.params)

    def to_json(self) -> str:
        """JSON representation: the formatted media type as a string."""
        return f'"{self}"'

    def to_yaml(self) -> str:
        """YAML document holding the formatted media type."""
        text = str(self)
        if not text:
            return '""\n'
        dumped = yaml.safe_dump(text)
        return dumped.removesuffix("...\n") if dumped.endswith("\n...\n") else dumped


def parse_content_type(text: str) -> ContentType:
    """Parse a media type string such as ``application/json; charset=utf-8``."""
    media_type, params = _parse_media_type(text)
    if _format_media_type(media_type, params) == "":
        raise ValueError("invalid token in media type")
    return ContentType(media_type, params)


def content_type_from_json(data: str | bytes) -> ContentType:
    """Decode a content type from a JSON string value."""
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON for content type: {exc}") from exc
    if not isinstance(raw, str):
        raise ValueError("content type must be a JSON string")
    return parse_content_type(raw)


def content_type_from_yaml(data: str | bytes) -> ContentType:
    """Decode a content type from a YAML scalar."""
    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid YAML for content type: {exc}") from exc
    if raw is None or isinstance(raw, (list, dict)):
        raise ValueError("content type must be a YAML scalar")
    return parse_content_type(str(raw))