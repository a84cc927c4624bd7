from typing import Sequence

from rich.console import Console
from rich.markup import escape

from rulebook.rules.models import Rule
from rulebook.tui.enums import UIStyle
from rulebook.tui.sections import UISection
from rulebook.tui.tables import CheckTable, RulesTable, SelectionTable
from rulebook.utils import compact_home_path


class RulebookConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_rules(self, rules: list[Rule], rules_dir: str) -> None:
        location = escape(compact_home_path(rules_dir))
        if not rules:
            self.console.print(
                UISection.note(
                    "rules", f"No rules found in {location}.", style=UIStyle.YELLOW.value
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "rules",
                RulesTable.rules_table(rules),
                style=UIStyle.BLUE.value,
                subtitle=location,
            )
        )

    def render_selection(self, target_path: str, rows: list[tuple[Rule, str]]) -> None:
        if not rows:
            self.console.print(
                UISection.note(
                    "selection",
                    f"No rules apply to [bold]{escape(target_path)}[/bold].",
                    style=UIStyle.DIM.value,
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "selection",
                SelectionTable.selection_table(rows),
                style=UIStyle.CYAN.value,
                subtitle=escape(target_path),
            )
        )

    def render_warnings(self, warnings: Sequence[str]) -> None:
        if warnings:
            self.console.print(
                UISection.bullets("warnings", warnings, style=UIStyle.YELLOW.value)
            )

    def render_check(
        self, rules: int, warnings: Sequence[str], errors: Sequence[str]
    ) -> None:
        border = UIStyle.GREEN.value if not errors else UIStyle.RED.value
        self.console.print(
            UISection.wrap(
                "check",
                CheckTable.summary_block(rules, len(warnings), len(errors)),
                style=border,
            )
        )
        self.render_warnings(warnings)
        if errors:
            self.console.print(
                UISection.bullets("errors", errors, style=UIStyle.RED.value)
            )
