from typing import Final


CONFIG_FILENAME: Final[str] = "rulebook.json"
DEFAULT_RULES_DIRNAME: Final[str] = ".rules"

RULE_EXTENSIONS: Final[tuple[str, ...]] = (
    ".md",
    ".mdc",
)

HEADER_DELIMITER: Final[str] = "---"

HEADER_DESCRIPTION_KEY: Final[str] = "description"
HEADER_GLOBS_KEY: Final[str] = "globs"
HEADER_ALWAYS_APPLY_KEY: Final[str] = "alwaysApply"
HEADER_ALWAYS_APPLY_ALIASES: Final[tuple[str, ...]] = ("always_apply",)
