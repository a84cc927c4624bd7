"""Pick the rules that apply to a target path."""

from __future__ import annotations

import logging

from rulebook.rules.globs import matches_any, normalize_path
from rulebook.rules.models import Rule
from rulebook.rules.store import RuleStore

logger = logging.getLogger(__name__)


def select(store: RuleStore, target_path: str) -> list[Rule]:
    """Always-apply rules first, then glob matches; each group sorted by name."""
    path = normalize_path(target_path)
    always: list[Rule] = []
    matched: list[Rule] = []
    for rule in sorted(store, key=lambda item: item.name):
        if rule.metadata.always_apply:
            always.append(rule)
        elif matches_any(rule.metadata.globs, path):
            matched.append(rule)

    selected = always + matched
    logger.debug(
        "Selected %d rules for %r: %s",
        len(selected),
        path,
        ", ".join(rule.name for rule in selected) or "(none)",
    )
    return selected


def selection_reason(rule: Rule, target_path: str) -> str:
    if rule.metadata.always_apply:
        return "alwaysApply"
    path = normalize_path(target_path)
    for pattern in rule.metadata.globs:
        if matches_any([pattern], path):
            return f"glob {pattern}"
    return ""
