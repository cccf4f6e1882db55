"""Diff rendering."""

from __future__ import annotations

import json

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gram.contracts.diff import DiffResult, FieldDiff
from gram.contracts.settings import SettingValue

DRIFT_HEADER = "Actual settings differ from expected!"
NO_DRIFT_LINE = "No drift: actual settings match expected."
ABSENT = "<absent>"


def format_value(value: SettingValue) -> str:
    """Render a value as a TOML literal so ``"true"`` and ``true`` stay distinct."""
    if value is None:
        return ABSENT
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return json.dumps(value, ensure_ascii=False)


def format_diff_line(diff: FieldDiff) -> str:
    if diff.missing_actual:
        return f"[{diff.key}]: expected [{format_value(diff.desired)}] but it has no value"
    if diff.undeclared:
        return f"[{diff.key}]: not declared but has value [{format_value(diff.actual)}]"
    return f"[{diff.key}]: expected [{format_value(diff.desired)}] got [{format_value(diff.actual)}]"


def format_diff_lines(result: DiffResult) -> list[str]:
    return [format_diff_line(diff) for diff in result]


def format_diff_report(result: DiffResult, *, owner: str | None = None, repo: str | None = None) -> str:
    target = f"{owner}/{repo}" if owner and repo else None
    if not result.has_drift:
        return f"{target}: {NO_DRIFT_LINE}" if target else NO_DRIFT_LINE

    header = f"{target}: {DRIFT_HEADER}" if target else DRIFT_HEADER
    return "\n".join([header, *format_diff_lines(result)])


class RichDiffReporter:
    """Render a diff as a table on a Rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def render(self, result: DiffResult, *, owner: str | None = None, repo: str | None = None) -> None:
        title = f"{owner}/{repo}" if owner and repo else None
        if not result.has_drift:
            prefix = f"{title}: " if title else ""
            self._console.print(f"[green]✓[/green] {prefix}{NO_DRIFT_LINE}")
            return

        table = Table(title=title, caption=DRIFT_HEADER)
        table.add_column("Setting", style="cyan", no_wrap=True)
        table.add_column("Expected", style="green")
        table.add_column("Actual", style="red")
        for diff in result:
            table.add_row(escape(diff.key), escape(format_value(diff.desired)), escape(format_value(diff.actual)))
        self._console.print(table)
