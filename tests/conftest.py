import sys
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def rules_dir(project_root: Path) -> Path:
    path = project_root / ".rules"
    path.mkdir()
    return path


@pytest.fixture
def write_rule(rules_dir: Path):
    def _write(
        name: str,
        body: str = "",
        *,
        description: str | None = None,
        globs: list[str] | None = None,
        always_apply: bool | None = None,
        suffix: str = ".md",
        subdir: str | None = None,
    ) -> Path:
        header: list[str] = []
        if description is not None:
            header.append(f"description: {description}")
        if globs is not None:
            header.append("globs:")
            header.extend(f'  - "{item}"' for item in globs)
        if always_apply is not None:
            header.append(f"alwaysApply: {'true' if always_apply else 'false'}")

        text = body
        if header:
            text = "---\n" + "\n".join(header) + "\n---\n" + body

        parent = rules_dir / subdir if subdir else rules_dir
        parent.mkdir(parents=True, exist_ok=True)
        path = parent / f"{name}{suffix}"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
