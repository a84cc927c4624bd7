from pathlib import Path
from typing import Sequence


class RulebookError(Exception):
    """Base user-facing application error."""


class LoadError(RulebookError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class ParseError(LoadError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid rule header ({detail})")


class DuplicateNameError(LoadError):
    def __init__(self, name: str, paths: Sequence[Path]) -> None:
        self.name = name
        self.paths = tuple(paths)
        super().__init__(
            path=self.paths[-1],
            message=f"Duplicate rule name '{name}' (also defined in {self.paths[0]})",
        )


class UnreachableRuleError(LoadError):
    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        super().__init__(
            path=path,
            message=f"Rule '{name}' has no globs and alwaysApply is false",
        )


class ConfigError(RulebookError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config ({detail}): {path}")


class ResolutionError(RulebookError):
    """Failure while answering a single query."""


class RuleReferenceError(ResolutionError):
    pass


class MissingReferenceError(RuleReferenceError):
    def __init__(self, name: str, referrer: str) -> None:
        self.name = name
        self.referrer = referrer
        super().__init__(f"Rule '{referrer}' references unknown rule '{name}'")


class CycleError(RuleReferenceError):
    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = tuple(cycle)
        self.name = self.cycle[0]
        super().__init__(f"Reference cycle detected: {' -> '.join(self.cycle)}")
