"""Path glob matching for rule patterns.

Patterns are anchored to the whole relative path and matched case-sensitively.

- ``*`` matches any run of characters except ``/``
- ``**`` matches across ``/``; as a whole segment it spans zero or more
  segments (``src/**/*.py`` matches ``src/a.py``)
- ``?`` matches one character except ``/``
- ``[...]`` matches one character from the class, ``[!...]`` or ``[^...]``
  negates it; classes never match ``/``
- ``{a,b}`` matches either alternative; alternatives may hold any of the above
"""

from __future__ import annotations

import functools
import re
from typing import Iterable, Pattern

SEPARATOR = "/"


def normalize_path(path: str) -> str:
    text = path.replace("\\", SEPARATOR)
    text = re.sub(r"/{2,}", SEPARATOR, text)
    while text.startswith("./"):
        text = text[2:]
    return text


def matches(pattern: str, path: str) -> bool:
    return compile_pattern(pattern).fullmatch(normalize_path(path)) is not None


def matches_any(patterns: Iterable[str], path: str) -> bool:
    normalized = normalize_path(path)
    return any(
        compile_pattern(pattern).fullmatch(normalized) is not None
        for pattern in patterns
    )


@functools.lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> Pattern[str]:
    return re.compile(translate(pattern), re.DOTALL)


def translate(pattern: str) -> str:
    parts: list[str] = []
    index = 0
    length = len(pattern)

    while index < length:
        char = pattern[index]

        if char == "*":
            if pattern.startswith("**", index):
                end = index + 2
                while end < length and pattern[end] == "*":
                    end += 1
                at_segment_start = index == 0 or pattern[index - 1] == SEPARATOR
                if at_segment_start and end < length and pattern[end] == SEPARATOR:
                    # "**/" spans zero or more whole segments
                    parts.append("(?:.*/)?")
                    index = end + 1
                    continue
                if end == length and index > 0 and pattern[index - 1] == SEPARATOR:
                    # trailing "/**" also matches the directory itself
                    parts.pop()
                    parts.append("(?:/.*)?")
                    index = end
                    continue
                parts.append(".*")
                index = end
                continue
            parts.append("[^/]*")
            index += 1
            continue

        if char == "?":
            parts.append("[^/]")
            index += 1
            continue

        if char == "{":
            translated, next_index = _translate_braces(pattern, index)
            if translated is not None:
                parts.append(translated)
                index = next_index
                continue

        if char == "[":
            translated, index = _translate_class(pattern, index)
            parts.append(translated)
            continue

        if char == "\\" and index + 1 < length:
            parts.append(re.escape(pattern[index + 1]))
            index += 2
            continue

        parts.append(re.escape(char))
        index += 1

    return "".join(parts)


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    index = start + 1
    negate = False
    if index < len(pattern) and pattern[index] in "!^":
        negate = True
        index += 1

    members_start = index
    # a "]" right after the opening bracket is a literal member
    if index < len(pattern) and pattern[index] == "]":
        index += 1
    while index < len(pattern) and pattern[index] != "]":
        index += 1

    if index >= len(pattern):
        return re.escape("["), start + 1

    members = pattern[members_start:index]
    escaped = "".join(
        "\\" + char if char in "\\^[]" else char for char in members
    )
    if negate:
        return f"[^/{escaped}]", index + 1
    return f"(?!/)[{escaped}]", index + 1


def _translate_braces(pattern: str, start: int) -> tuple[str | None, int]:
    depth = 0
    for index in range(start, len(pattern)):
        char = pattern[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                alternatives = split_top_level(pattern[start + 1 : index])
                if len(alternatives) < 2:
                    return None, start
                joined = "|".join(translate(item) for item in alternatives)
                return f"(?:{joined})", index + 1
    return None, start


def split_top_level(value: str) -> list[str]:
    """Split on commas that are not inside ``{...}``."""
    items: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(value):
        if char == "{":
            depth += 1
        elif char == "}" and depth:
            depth -= 1
        elif char == "," and depth == 0:
            items.append(value[start:index])
            start = index + 1
    items.append(value[start:])
    return items
