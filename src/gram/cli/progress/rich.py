"""Rich-based diff progress display."""

from __future__ import annotations

from types import TracebackType
from typing import ClassVar

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from gram.progress import DiffProgress


class RichDiffProgress(DiffProgress):
    """Live terminal spinners powered by Rich.

    Use as a context manager so the live display is properly started/stopped::

        with RichDiffProgress() as progress:
            result = await gram.diff_settings(...)
    """

    _PHASE_LABELS: ClassVar[dict[str, str]] = {
        "Load": "[cyan]Load[/]",
        "Fetch": "[blue]Fetch[/]",
        "Compare": "[magenta]Compare[/]",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>10}"),
            TimeElapsedColumn(),
            console=self._console,
            transient=True,
        )
        self._task_ids: dict[str, RichTaskID] = {}

    def __enter__(self) -> RichDiffProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def phase_start(self, phase: str) -> None:
        label = self._PHASE_LABELS.get(phase, phase)
        self._task_ids[phase] = self._progress.add_task(label, total=None)

    def phase_done(self, phase: str) -> None:
        task_id = self._task_ids.get(phase)
        if task_id is None:
            return
        self._progress.update(task_id, total=1, completed=1)

    def phase_error(self, phase: str, error: BaseException) -> None:
        task_id = self._task_ids.get(phase)
        if task_id is None:
            return
        self._progress.update(task_id, description=f"[red]✗[/red] {phase:>8}")
        self._progress.stop_task(task_id)
