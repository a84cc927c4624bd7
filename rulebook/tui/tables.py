from rich.markup import escape
from rich.table import Column, Table

from rulebook.rules.models import Rule
from rulebook.tui.enums import RULE_KIND_STYLE, RuleKind


def rule_kind(rule: Rule) -> RuleKind:
    if rule.metadata.always_apply:
        return RuleKind.ALWAYS
    if rule.metadata.globs:
        return RuleKind.GLOB
    return RuleKind.UNREACHABLE


def _kind_text(rule: Rule) -> str:
    kind = rule_kind(rule)
    style = RULE_KIND_STYLE[kind]
    return f"[{style}]{kind.value}[/{style}]"


class RulesTable:
    @staticmethod
    def rules_table(rules: list[Rule]) -> Table:
        table = Table(
            Column(header="Rule", width=24),
            Column(header="Kind", width=12),
            Column(header="Globs", overflow="fold"),
            Column(header="Refs", overflow="fold"),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for rule in rules:
            table.add_row(
                escape(rule.name),
                _kind_text(rule),
                escape(", ".join(rule.metadata.globs)),
                escape(", ".join(rule.references)),
                escape(rule.metadata.description),
            )
        return table


class SelectionTable:
    @staticmethod
    def selection_table(rows: list[tuple[Rule, str]]) -> Table:
        table = Table(
            Column(header="#", width=4, justify="right"),
            Column(header="Rule", width=24),
            Column(header="Reason", overflow="fold"),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for index, (rule, reason) in enumerate(rows, start=1):
            table.add_row(
                str(index),
                escape(rule.name),
                escape(reason),
                escape(rule.metadata.description),
            )
        return table


class CheckTable:
    @staticmethod
    def summary_block(rules: int, warnings: int, errors: int) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Rules", str(rules))
        table.add_row("Warnings", str(warnings))
        table.add_row("Errors", str(errors))
        return table
