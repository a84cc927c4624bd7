"""Expand inline rule references into literal text."""

from __future__ import annotations

from rulebook.errors import CycleError, MissingReferenceError
from rulebook.rules.models import LiteralSegment, ResolvedSegment, Rule
from rulebook.rules.store import RuleStore


class ReferenceResolver:
    """Depth-first expansion of ``{{rule:name}}`` references.

    Cycle detection tracks the chain of rules currently being expanded, so
    the same rule may be included several times along separate branches
    (a diamond), but never inside its own expansion.
    """

    def resolve(self, store: RuleStore, rule: Rule) -> list[ResolvedSegment]:
        resolved: list[ResolvedSegment] = []
        self._expand(store, rule, chain=[], out=resolved)
        return resolved

    def _expand(
        self,
        store: RuleStore,
        rule: Rule,
        chain: list[str],
        out: list[ResolvedSegment],
    ) -> None:
        if rule.name in chain:
            start = chain.index(rule.name)
            raise CycleError([*chain[start:], rule.name])

        chain.append(rule.name)
        for segment in rule.body:
            if isinstance(segment, LiteralSegment):
                out.append(ResolvedSegment(source=rule.name, text=segment.text))
                continue
            target = store.get(segment.name)
            if target is None:
                raise MissingReferenceError(segment.name, referrer=rule.name)
            self._expand(store, target, chain, out)
        chain.pop()


def resolve(store: RuleStore, rule: Rule) -> list[ResolvedSegment]:
    return ReferenceResolver().resolve(store, rule)
