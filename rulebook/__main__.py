import logging
from pathlib import Path
from typing import Any, Dict

import click
from rich.console import Console
from rich.logging import RichHandler

from rulebook.config import load_config
from rulebook.errors import RulebookError
from rulebook.rules.renderers import OutputFormat, get_renderer
from rulebook.rules.selector import selection_reason
from rulebook.service import RulebookService
from rulebook.tui import RulebookConsoleUI


FORMAT_VALUES = [item.value for item in OutputFormat]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _service_from_obj(obj: Dict[str, Any]) -> RulebookService:
    project_root: Path = obj["root"]
    try:
        config = load_config(project_root, obj.get("config"))
        config = config.with_overrides(
            rules_dir=obj.get("rules_dir"),
            root_document=obj.get("root_document"),
            strict=obj.get("strict"),
        )
        return RulebookService(config)
    except RulebookError as exc:
        raise click.ClickException(str(exc))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--root",
    type=click.Path(path_type=Path, file_okay=False),
    default=Path("."),
    show_default=True,
    help="Project root holding rulebook.json.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Explicit config file.",
)
@click.option(
    "--rules-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory of rule documents (overrides config).",
)
@click.option(
    "--root-document",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Extra always-applied document, e.g. AGENTS.md.",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Treat rules that can never be selected as load errors.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    root: Path,
    config_path: Path | None,
    rules_dir: Path | None,
    root_document: Path | None,
    strict: bool | None,
    verbose: bool,
) -> None:
    """Select and compose rule documents for a file path."""
    _configure_logging(verbose)
    ctx.obj = {
        "root": root,
        "config": config_path,
        "rules_dir": rules_dir,
        "root_document": root_document,
        "strict": strict,
    }


@cli.command(help="Print the composed guidance for a target path.")
@click.argument("target_path")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(FORMAT_VALUES, case_sensitive=False),
    default=OutputFormat.MARKDOWN.value,
    show_default=True,
)
@click.option("--headings", is_flag=True, help="Prefix each rule's text with a heading.")
@click.pass_obj
def compose(
    obj: Dict[str, Any], target_path: str, output_format: str, headings: bool
) -> None:
    service = _service_from_obj(obj)
    try:
        document = service.compose(target_path)
    except RulebookError as exc:
        raise click.ClickException(str(exc))

    renderer = get_renderer(output_format.lower(), headings=headings)
    click.echo(renderer.render(document), nl=False)
    if output_format.lower() != OutputFormat.JSON.value:
        RulebookConsoleUI(Console(stderr=True)).render_warnings(document.warnings)


@cli.command("select", help="Show which rules apply to a target path.")
@click.argument("target_path")
@click.pass_obj
def select_rules(obj: Dict[str, Any], target_path: str) -> None:
    ui = RulebookConsoleUI(Console())
    service = _service_from_obj(obj)
    rows = [
        (rule, selection_reason(rule, target_path))
        for rule in service.select(target_path)
    ]
    ui.render_selection(target_path, rows)


@cli.command("list", help="List all loaded rules.")
@click.pass_obj
def list_rules(obj: Dict[str, Any]) -> None:
    ui = RulebookConsoleUI(Console())
    service = _service_from_obj(obj)
    ui.render_rules(list(service.store), str(service.config.rules_dir))
    ui.render_warnings(service.store.warnings)


@cli.command(help="Load all rules and resolve every reference.")
@click.pass_obj
def check(obj: Dict[str, Any]) -> None:
    ui = RulebookConsoleUI(Console())
    service = _service_from_obj(obj)
    errors = [str(error) for error in service.check()]
    ui.render_check(len(service.store), service.store.warnings, errors)
    if errors:
        raise click.exceptions.Exit(1)


def main() -> int:
    try:
        code = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
