"""Output formats for composed documents."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from enum import Enum

from rulebook.rules.models import ResolvedDocument


class OutputFormat(str, Enum):
    MARKDOWN = "markdown"
    JSON = "json"


class IDocumentRenderer(ABC):
    @abstractmethod
    def render(self, document: ResolvedDocument) -> str:
        """Return the document serialized for output."""


class MarkdownRenderer(IDocumentRenderer):
    """Concatenate segment text, optionally under one heading per source rule."""

    def __init__(self, headings: bool = False) -> None:
        self.headings = headings

    def render(self, document: ResolvedDocument) -> str:
        if not self.headings:
            return document.text

        parts: list[str] = []
        current: str | None = None
        for segment in document.segments:
            if segment.source != current and segment.text.strip():
                if parts and not parts[-1].endswith("\n"):
                    parts.append("\n")
                if parts:
                    parts.append("\n")
                parts.append(f"## {segment.source}\n\n")
                current = segment.source
                parts.append(segment.text.lstrip("\n"))
                continue
            parts.append(segment.text)
        return "".join(parts)


class JsonRenderer(IDocumentRenderer):
    def render(self, document: ResolvedDocument) -> str:
        return json.dumps(document.as_dict(), indent=2) + "\n"


def get_renderer(output_format: OutputFormat | str, headings: bool = False) -> IDocumentRenderer:
    fmt = OutputFormat(output_format)
    if fmt == OutputFormat.JSON:
        return JsonRenderer()
    return MarkdownRenderer(headings=headings)
