"""Rule data models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union


@dataclass(frozen=True)
class RuleMetadata:
    description: str = ""
    globs: tuple[str, ...] = ()
    always_apply: bool = False

    @property
    def is_reachable(self) -> bool:
        return self.always_apply or bool(self.globs)


@dataclass(frozen=True)
class LiteralSegment:
    text: str


@dataclass(frozen=True)
class ReferenceSegment:
    name: str


Segment = Union[LiteralSegment, ReferenceSegment]


@dataclass(frozen=True)
class Rule:
    name: str
    source_path: Path
    metadata: RuleMetadata
    body: tuple[Segment, ...] = ()
    content: str = ""
    warnings: tuple[str, ...] = ()

    @property
    def references(self) -> tuple[str, ...]:
        return tuple(
            segment.name
            for segment in self.body
            if isinstance(segment, ReferenceSegment)
        )


@dataclass(frozen=True)
class ResolvedSegment:
    source: str
    text: str

    def as_dict(self) -> dict[str, str]:
        return {"source": self.source, "text": self.text}


@dataclass(frozen=True)
class ResolvedDocument:
    target_path: str
    segments: tuple[ResolvedSegment, ...] = ()
    warnings: tuple[str, ...] = ()
    rules: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.segments

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)

    def as_dict(self) -> dict[str, Any]:
        return {
            "segments": [segment.as_dict() for segment in self.segments],
            "warnings": list(self.warnings),
        }
