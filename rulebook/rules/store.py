"""Immutable index of rule documents loaded from a directory tree."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from rulebook.constants import RULE_EXTENSIONS
from rulebook.errors import DuplicateNameError, LoadError, UnreachableRuleError
from rulebook.rules.models import Rule
from rulebook.rules.parser import parse_rule

logger = logging.getLogger(__name__)


class RuleStore:
    def __init__(self, rules: Iterable[Rule], root: Path | None = None) -> None:
        by_name: dict[str, Rule] = {}
        for rule in rules:
            existing = by_name.get(rule.name)
            if existing is not None:
                raise DuplicateNameError(
                    rule.name, [existing.source_path, rule.source_path]
                )
            by_name[rule.name] = rule
        self._rules: Mapping[str, Rule] = MappingProxyType(
            dict(sorted(by_name.items()))
        )
        self._root = root
        self._warnings = tuple(self._collect_warnings())

    @classmethod
    def load(
        cls,
        root: Path,
        root_document: Path | None = None,
        extensions: Iterable[str] = RULE_EXTENSIONS,
        strict: bool = False,
    ) -> "RuleStore":
        if not root.exists() or not root.is_dir():
            raise LoadError(root, "Rules directory not found")

        suffixes = tuple(extensions)
        try:
            paths = discover_rule_files(root, suffixes)
        except OSError as exc:
            raise LoadError(root, f"Cannot scan rules directory ({exc.strerror or exc})") from exc
        rules = [parse_rule(path) for path in paths]
        if root_document is not None:
            rules.append(load_root_document(root_document))

        store = cls(rules, root=root)
        logger.debug("Loaded %d rules from %s", len(store), root)
        if strict:
            store.ensure_reachable()
        for warning in store.warnings:
            logger.warning(warning)
        return store

    @property
    def root(self) -> Path | None:
        return self._root

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._warnings

    def names(self) -> list[str]:
        return list(self._rules)

    def get(self, name: str) -> Rule | None:
        return self._rules.get(name)

    def __getitem__(self, name: str) -> Rule:
        return self._rules[name]

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def ensure_reachable(self) -> None:
        for rule in self:
            if not rule.metadata.is_reachable:
                raise UnreachableRuleError(rule.name, rule.source_path)

    def _collect_warnings(self) -> Iterator[str]:
        for rule in self:
            yield from rule.warnings
            if not rule.metadata.is_reachable:
                yield (
                    f"Rule '{rule.name}' is never selected "
                    "(no globs and alwaysApply is false)"
                )


def discover_rule_files(root: Path, extensions: tuple[str, ...]) -> list[Path]:
    found: list[Path] = []
    for path in sorted(root.rglob("*")):
        relative = path.relative_to(root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if path.is_file() and path.suffix in extensions:
            found.append(path)
    return found


def load_root_document(path: Path) -> Rule:
    if not path.exists() or not path.is_file():
        raise LoadError(path, "Root document not found")
    rule = parse_rule(path)
    return replace(rule, metadata=replace(rule.metadata, always_apply=True, globs=()))
