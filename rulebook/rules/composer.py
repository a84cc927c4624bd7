"""Merge selected, reference-expanded rules into one document."""

from __future__ import annotations

import logging

from rulebook.rules.globs import normalize_path
from rulebook.rules.models import ResolvedDocument, ResolvedSegment
from rulebook.rules.resolver import ReferenceResolver
from rulebook.rules.selector import select
from rulebook.rules.store import RuleStore

logger = logging.getLogger(__name__)


class Composer:
    def __init__(self, resolver: ReferenceResolver | None = None) -> None:
        self.resolver = resolver or ReferenceResolver()

    def compose(self, store: RuleStore, target_path: str) -> ResolvedDocument:
        path = normalize_path(target_path)
        selected = select(store, path)

        groups = [self.resolver.resolve(store, rule) for rule in selected]

        segments = deduplicate(groups)
        dropped = sum(len(group) for group in groups) - len(segments)
        if dropped:
            logger.debug("Dropped %d repeated segments for %r", dropped, path)

        return ResolvedDocument(
            target_path=path,
            segments=tuple(segments),
            warnings=store.warnings,
            rules=tuple(rule.name for rule in selected),
        )


def deduplicate(groups: list[list[ResolvedSegment]]) -> list[ResolvedSegment]:
    """Flatten per-rule segments, dropping text an earlier rule already emitted.

    Repeats inside one rule's own expansion are kept; whitespace-only text
    is never dropped.
    """
    emitted: set[str] = set()
    kept: list[ResolvedSegment] = []
    for group in groups:
        own: set[str] = set()
        for segment in group:
            if segment.text.strip() and segment.text in emitted:
                continue
            own.add(segment.text)
            kept.append(segment)
        emitted |= own
    return kept


def compose(store: RuleStore, target_path: str) -> ResolvedDocument:
    return Composer().compose(store, target_path)
