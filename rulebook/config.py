"""Project configuration (``rulebook.json``)."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from rulebook.constants import CONFIG_FILENAME, DEFAULT_RULES_DIRNAME, RULE_EXTENSIONS
from rulebook.errors import ConfigError
from rulebook.utils import format_schema_error, read_json

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "rulesDir": {"type": "string", "minLength": 1},
        "rootDocument": {"type": ["string", "null"], "minLength": 1},
        "extensions": {
            "type": "array",
            "items": {"type": "string", "pattern": r"^\.[^./\\]+$"},
            "minItems": 1,
            "uniqueItems": True,
        },
        "strict": {"type": "boolean"},
    },
    "additionalProperties": False,
}

_VALIDATOR = Draft202012Validator(CONFIG_SCHEMA)


@dataclass(frozen=True)
class RulebookConfig:
    rules_dir: Path
    root_document: Path | None = None
    extensions: tuple[str, ...] = RULE_EXTENSIONS
    strict: bool = False
    source: Path | None = None

    @classmethod
    def default(cls, project_root: Path) -> "RulebookConfig":
        return cls(rules_dir=project_root / DEFAULT_RULES_DIRNAME)

    def with_overrides(
        self,
        rules_dir: Path | None = None,
        root_document: Path | None = None,
        strict: bool | None = None,
    ) -> "RulebookConfig":
        config = self
        if rules_dir is not None:
            config = replace(config, rules_dir=rules_dir)
        if root_document is not None:
            config = replace(config, root_document=root_document)
        if strict is not None:
            config = replace(config, strict=strict)
        return config


def load_config(project_root: Path, config_path: Path | None = None) -> RulebookConfig:
    """Read the config file, falling back to defaults when it does not exist.

    An explicitly requested ``config_path`` must exist.
    """
    path = config_path if config_path is not None else project_root / CONFIG_FILENAME
    if not path.exists():
        if config_path is not None:
            raise ConfigError(path, "file not found")
        return RulebookConfig.default(project_root)

    try:
        payload = read_json(path)
    except json.JSONDecodeError as exc:
        raise ConfigError(path, f"invalid JSON: {exc.msg}") from exc

    error = next(iter(_VALIDATOR.iter_errors(payload)), None)
    if error is not None:
        raise ConfigError(path, format_schema_error(error))

    base = path.parent
    root_document = payload.get("rootDocument")
    return RulebookConfig(
        rules_dir=base / payload.get("rulesDir", DEFAULT_RULES_DIRNAME),
        root_document=base / root_document if root_document else None,
        extensions=tuple(payload.get("extensions", RULE_EXTENSIONS)),
        strict=bool(payload.get("strict", False)),
        source=path,
    )
