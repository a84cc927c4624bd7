from rulebook.rules.composer import Composer, compose
from rulebook.rules.globs import matches, matches_any
from rulebook.rules.models import (
    LiteralSegment,
    ReferenceSegment,
    ResolvedDocument,
    ResolvedSegment,
    Rule,
    RuleMetadata,
)
from rulebook.rules.parser import parse_rule
from rulebook.rules.resolver import ReferenceResolver, resolve
from rulebook.rules.selector import select
from rulebook.rules.store import RuleStore

__all__ = [
    "Composer",
    "LiteralSegment",
    "ReferenceResolver",
    "ReferenceSegment",
    "ResolvedDocument",
    "ResolvedSegment",
    "Rule",
    "RuleMetadata",
    "RuleStore",
    "compose",
    "matches",
    "matches_any",
    "parse_rule",
    "resolve",
    "select",
]
