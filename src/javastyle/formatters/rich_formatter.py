"""Rich terminal formatter for javastyle."""

from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..verdict import Verdict
from .base import BaseFormatter

console = Console()

# Human labels for violation rules
RULE_LABELS = {
    "identifier_too_short": "identifier too short",
    "identifier_too_long": "identifier too long",
    "naming_style": "naming style",
    "one_line_scope_space": "no space inside one-line braces",
    "space_after_comma": "no space after comma",
    "space_after_semicolon": "no space after semicolon",
    "space_around_operator": "no spaces around operator",
    "brace_style": "inconsistent brace placement",
    "mixed_tabs_and_spaces": "tabs and spaces mixed",
    "comment_space": "no space after //",
    "doc_subject_mismatch": "doc comment does not document what follows",
    "doc_unmatched_tags": "doc tags do not match declaration",
    "doc_undocumented_parameters": "parameters not documented",
    "doc_return_missing": "@return missing",
    "line_too_long": "line too long",
    "trailing_whitespace": "trailing whitespace",
    "mixed_indentation": "indentation mixes tabs and spaces",
}


def _status_label(verdict: Verdict) -> str:
    if verdict.passed and verdict.total_violations == 0:
        return "[green]passed[/green]"
    if verdict.passed:
        return "[yellow]passed (within allowance)[/yellow]"
    return "[red bold]failed[/red bold]"


class RichFormatter(BaseFormatter):
    """Rich terminal output: one violation table per file plus a summary."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def render(self, verdicts: List[Verdict]) -> None:
        for verdict in verdicts:
            self._print_verdict(verdict)
        self._print_summary(verdicts)

    def format(self, verdicts: List[Verdict]) -> str:
        # Rich output goes directly to console; return empty string
        self.render(verdicts)
        return ""

    def _print_verdict(self, verdict: Verdict) -> None:
        console.print()
        console.print(
            f"[bold]{escape(str(verdict.path))}[/bold]  {_status_label(verdict)}  "
            f"[dim]{verdict.total_violations} violation(s)[/dim]"
        )

        violations = verdict.violations
        if violations:
            table = Table(show_header=True, show_lines=False, pad_edge=True)
            table.add_column("Line", justify="right", style="cyan")
            table.add_column("Col", justify="right", style="dim")
            table.add_column("Problem", min_width=24)
            table.add_column("Token")
            table.add_column("Detail", style="dim")
            for v in violations:
                table.add_row(
                    str(v.line),
                    str(v.column + 1),
                    RULE_LABELS.get(v.rule, v.rule),
                    escape(v.text.split("\n", 1)[0][:40]),
                    escape(v.detail),
                )
            console.print(table)

        if self.verbose:
            self._print_counts(verdict)

    def _print_counts(self, verdict: Verdict) -> None:
        table = Table(title="Categories", show_header=True, pad_edge=True)
        table.add_column("Category")
        table.add_column("Items", justify="right")
        table.add_column("Violations", justify="right")
        for category, summary in verdict.summaries.items():
            count = len(summary.violations)
            style = "red" if count else "green"
            table.add_row(category, str(summary.count), f"[{style}]{count}[/{style}]")
        console.print(table)

    def _print_summary(self, verdicts: List[Verdict]) -> None:
        failed = sum(1 for v in verdicts if not v.passed)
        total = sum(v.total_violations for v in verdicts)
        console.print()
        if failed:
            console.print(
                f"[red bold]{failed} of {len(verdicts)} file(s) failed[/red bold] "
                f"[dim]({total} violations)[/dim]"
            )
        else:
            console.print(
                f"[green]All {len(verdicts)} file(s) passed[/green] [dim]({total} violations)[/dim]"
            )
