"""Parse rules with YAML frontmatter and inline rule references."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from rulebook.constants import (
    HEADER_ALWAYS_APPLY_ALIASES,
    HEADER_ALWAYS_APPLY_KEY,
    HEADER_DELIMITER,
    HEADER_DESCRIPTION_KEY,
    HEADER_GLOBS_KEY,
)
from rulebook.errors import LoadError, ParseError
from rulebook.rules.globs import split_top_level
from rulebook.rules.models import (
    LiteralSegment,
    ReferenceSegment,
    Rule,
    RuleMetadata,
    Segment,
)

REFERENCE_RE = re.compile(r"\{\{\s*rule:\s*([^\s{}]+)\s*\}\}")

_RECOGNIZED_KEYS = frozenset(
    {HEADER_DESCRIPTION_KEY, HEADER_GLOBS_KEY, HEADER_ALWAYS_APPLY_KEY}
    | set(HEADER_ALWAYS_APPLY_ALIASES)
)


def parse_rule(path: Path, name: str | None = None) -> Rule:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"not valid UTF-8 at byte {exc.start}") from exc
    except OSError as exc:
        raise LoadError(path, f"Cannot read rule file ({exc.strerror or exc})") from exc
    return parse_rule_text(name or path.stem, text, path)


def parse_rule_text(name: str, text: str, path: Path) -> Rule:
    header, content = split_header(text, path)
    raw = _load_header(header, path) if header is not None else {}

    warnings = [
        f"Rule '{name}' has unknown header key '{key}'"
        for key in raw
        if key not in _RECOGNIZED_KEYS
    ]
    metadata = RuleMetadata(
        description=_parse_description(raw, path),
        globs=_parse_globs(raw, path),
        always_apply=_parse_always_apply(raw, path),
    )
    return Rule(
        name=name,
        source_path=path,
        metadata=metadata,
        body=parse_body(content),
        content=content,
        warnings=tuple(warnings),
    )


def split_header(text: str, path: Path) -> tuple[str | None, str]:
    """Return (header, body); header is None when the file has no frontmatter."""
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != HEADER_DELIMITER:
        return None, text

    for index in range(1, len(lines)):
        if lines[index].strip() == HEADER_DELIMITER:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return header, body

    raise ParseError(path, "missing closing '---' delimiter")


def parse_body(content: str) -> tuple[Segment, ...]:
    segments: list[Segment] = []
    cursor = 0
    for match in REFERENCE_RE.finditer(content):
        if match.start() > cursor:
            segments.append(LiteralSegment(content[cursor : match.start()]))
        segments.append(ReferenceSegment(match.group(1)))
        cursor = match.end()
    if cursor < len(content):
        segments.append(LiteralSegment(content[cursor:]))
    return tuple(segments)


def _load_header(header: str, path: Path) -> dict[str, Any]:
    try:
        raw = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        raise ParseError(path, f"invalid YAML: {_first_line(exc)}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ParseError(path, "header must be a mapping")
    return {str(key): value for key, value in raw.items()}


def _parse_description(raw: dict[str, Any], path: Path) -> str:
    value = raw.get(HEADER_DESCRIPTION_KEY)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ParseError(path, f"'{HEADER_DESCRIPTION_KEY}' must be a string")
    return value.strip()


def _parse_globs(raw: dict[str, Any], path: Path) -> tuple[str, ...]:
    value = raw.get(HEADER_GLOBS_KEY)
    if value is None:
        return ()

    if isinstance(value, str):
        if not value.strip():
            return ()
        items: list[Any] = [item.strip() for item in split_top_level(value)]
    elif isinstance(value, list):
        items = value
    else:
        raise ParseError(path, f"'{HEADER_GLOBS_KEY}' must be a list of strings")

    globs: list[str] = []
    for item in items:
        if not isinstance(item, str):
            raise ParseError(path, f"'{HEADER_GLOBS_KEY}' entries must be strings")
        if not item.strip():
            raise ParseError(path, f"'{HEADER_GLOBS_KEY}' entries must not be empty")
        globs.append(item.strip())
    return tuple(globs)


def _parse_always_apply(raw: dict[str, Any], path: Path) -> bool:
    keys = [HEADER_ALWAYS_APPLY_KEY, *HEADER_ALWAYS_APPLY_ALIASES]
    present = [key for key in keys if key in raw]
    if not present:
        return False
    if len(present) > 1 and len({repr(raw[key]) for key in present}) > 1:
        raise ParseError(path, f"conflicting values for {', '.join(present)}")

    value = raw[present[0]]
    if not isinstance(value, bool):
        raise ParseError(path, f"'{present[0]}' must be a boolean")
    return value


def _first_line(exc: Exception) -> str:
    return str(exc).strip().splitlines()[0] if str(exc).strip() else type(exc).__name__
