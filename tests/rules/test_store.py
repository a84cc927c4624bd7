"""Tests for RuleStore loading and indexing."""

import logging
from pathlib import Path

import pytest

from rulebook.errors import (
    DuplicateNameError,
    LoadError,
    ParseError,
    UnreachableRuleError,
)
from rulebook.rules.models import Rule, RuleMetadata
from rulebook.rules.store import RuleStore


def test_load_empty(rules_dir: Path) -> None:
    store = RuleStore.load(rules_dir)
    assert len(store) == 0
    assert list(store) == []
    assert store.warnings == ()


def test_load_sorted_by_name(rules_dir: Path, write_rule) -> None:
    write_rule("beta", "Beta content.\n", always_apply=True)
    write_rule("alpha", "Alpha content.\n", always_apply=True)
    store = RuleStore.load(rules_dir)
    assert store.names() == ["alpha", "beta"]
    assert [rule.name for rule in store] == ["alpha", "beta"]


def test_load_recurses_into_subdirectories(rules_dir: Path, write_rule) -> None:
    write_rule("top", always_apply=True)
    write_rule("nested", globs=["*.py"], subdir="backend/python")
    store = RuleStore.load(rules_dir)
    assert "nested" in store
    assert store["nested"].metadata.globs == ("*.py",)


def test_load_accepts_mdc_and_md(rules_dir: Path, write_rule) -> None:
    write_rule("cursor-style", always_apply=True, suffix=".mdc")
    write_rule("plain", always_apply=True, suffix=".md")
    store = RuleStore.load(rules_dir)
    assert store.names() == ["cursor-style", "plain"]


def test_load_custom_extensions(rules_dir: Path, write_rule) -> None:
    write_rule("only-mdc", always_apply=True, suffix=".mdc")
    write_rule("ignored", always_apply=True, suffix=".md")
    store = RuleStore.load(rules_dir, extensions=[".mdc"])
    assert store.names() == ["only-mdc"]


def test_ignores_dotfiles_and_dot_directories(rules_dir: Path, write_rule) -> None:
    (rules_dir / ".hidden.md").write_text("hidden", encoding="utf-8")
    write_rule("secret", always_apply=True, subdir=".drafts")
    write_rule("visible", always_apply=True)
    store = RuleStore.load(rules_dir)
    assert store.names() == ["visible"]


def test_ignores_other_files(rules_dir: Path, write_rule) -> None:
    (rules_dir / "readme.txt").write_text("text", encoding="utf-8")
    write_rule("rule", always_apply=True)
    assert RuleStore.load(rules_dir).names() == ["rule"]


def test_duplicate_stem_fails(rules_dir: Path, write_rule) -> None:
    write_rule("style", always_apply=True)
    write_rule("style", always_apply=True, subdir="frontend")
    with pytest.raises(DuplicateNameError) as excinfo:
        RuleStore.load(rules_dir)
    assert excinfo.value.name == "style"
    assert len(excinfo.value.paths) == 2
    assert isinstance(excinfo.value, LoadError)


def test_duplicate_across_extensions_fails(rules_dir: Path, write_rule) -> None:
    write_rule("style", always_apply=True, suffix=".md")
    write_rule("style", always_apply=True, suffix=".mdc")
    with pytest.raises(DuplicateNameError):
        RuleStore.load(rules_dir)


def test_names_are_case_sensitive(rules_dir: Path, write_rule) -> None:
    write_rule("Style", always_apply=True, subdir="a")
    write_rule("style", always_apply=True, subdir="b")
    assert RuleStore.load(rules_dir).names() == ["Style", "style"]


def test_parse_error_aborts_load(rules_dir: Path, write_rule) -> None:
    write_rule("good", always_apply=True)
    (rules_dir / "bad.md").write_text("---\nalwaysApply: nope\n---\n", encoding="utf-8")
    with pytest.raises(ParseError):
        RuleStore.load(rules_dir)


def test_missing_root_directory(tmp_path: Path) -> None:
    with pytest.raises(LoadError, match="Rules directory not found"):
        RuleStore.load(tmp_path / "missing")


def test_unreachable_rule_is_warning(rules_dir: Path, write_rule) -> None:
    write_rule("orphan", "Never used.\n", description="Orphan")
    store = RuleStore.load(rules_dir)
    assert "orphan" in store
    assert any("orphan" in warning for warning in store.warnings)


def test_unreachable_rule_strict_mode(rules_dir: Path, write_rule) -> None:
    write_rule("orphan", "Never used.\n")
    with pytest.raises(UnreachableRuleError):
        RuleStore.load(rules_dir, strict=True)


def test_unknown_header_key_warning(rules_dir: Path) -> None:
    (rules_dir / "extra.md").write_text(
        "---\nalwaysApply: true\nowner: web-team\n---\nBody\n", encoding="utf-8"
    )
    store = RuleStore.load(rules_dir)
    assert store.warnings == ("Rule 'extra' has unknown header key 'owner'",)


def test_root_document_is_always_applied(
    project_root: Path, rules_dir: Path, write_rule
) -> None:
    write_rule("python", globs=["**/*.py"])
    agents = project_root / "AGENTS.md"
    agents.write_text("# Project guidance\n", encoding="utf-8")

    store = RuleStore.load(rules_dir, root_document=agents)
    root_rule = store["AGENTS"]
    assert root_rule.metadata.always_apply is True
    assert root_rule.metadata.globs == ()
    assert root_rule.content == "# Project guidance\n"


def test_root_document_name_collision(
    project_root: Path, rules_dir: Path, write_rule
) -> None:
    write_rule("AGENTS", always_apply=True)
    agents = project_root / "AGENTS.md"
    agents.write_text("Root\n", encoding="utf-8")
    with pytest.raises(DuplicateNameError):
        RuleStore.load(rules_dir, root_document=agents)


def test_missing_root_document(project_root: Path, rules_dir: Path) -> None:
    with pytest.raises(LoadError, match="Root document not found"):
        RuleStore.load(rules_dir, root_document=project_root / "AGENTS.md")


def test_store_is_read_only() -> None:
    rule = Rule(
        name="a",
        source_path=Path("/fake/a.md"),
        metadata=RuleMetadata(always_apply=True),
    )
    store = RuleStore([rule])
    assert store.get("a") is rule
    assert store.get("missing") is None
    with pytest.raises(TypeError):
        store._rules["b"] = rule  # type: ignore[index]


def test_load_logs_warnings(rules_dir: Path, write_rule, caplog) -> None:
    write_rule("orphan", "Never used.\n")
    with caplog.at_level(logging.WARNING, logger="rulebook.rules.store"):
        RuleStore.load(rules_dir)
    assert "orphan" in caplog.text


def test_undecodable_rule_file_is_load_error(rules_dir: Path, write_rule) -> None:
    write_rule("good", always_apply=True)
    (rules_dir / "bad.md").write_bytes(b"---\nalwaysApply: true\n---\nBody \xff\xfe\n")
    with pytest.raises(ParseError, match="not valid UTF-8") as excinfo:
        RuleStore.load(rules_dir)
    assert excinfo.value.path == rules_dir / "bad.md"
    assert isinstance(excinfo.value, LoadError)


def test_unreadable_rule_file_is_load_error(
    rules_dir: Path, write_rule, monkeypatch
) -> None:
    locked = write_rule("locked", always_apply=True)
    original = Path.read_text

    def _read_text(self: Path, *args, **kwargs) -> str:
        if self == locked:
            raise PermissionError(13, "Permission denied", str(self))
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", _read_text)
    with pytest.raises(LoadError, match="Cannot read rule file") as excinfo:
        RuleStore.load(rules_dir)
    assert excinfo.value.path == locked
    assert "Permission denied" in str(excinfo.value)
