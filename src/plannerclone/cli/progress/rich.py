"""Rich-based clone progress display."""

from __future__ import annotations

from types import TracebackType
from typing import ClassVar

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from plannerclone.engine.progress import CloneProgress


class RichCloneProgress(CloneProgress):
    """One Rich progress row per clone phase, written to stderr.

    Enter it around the run so the live display starts and stops with it::

        with RichCloneProgress() as progress:
            result = await PlannerClone(config=config, progress=progress).clone(request)
    """

    _PHASE_STYLES: ClassVar[dict[str, str]] = {
        "Verify": "cyan",
        "Snapshot": "blue",
        "Buckets": "magenta",
        "Tasks": "green",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>10}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console or Console(stderr=True),
        )
        self._rows: dict[str, RichTaskID] = {}

    def __enter__(self) -> RichCloneProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def phase_start(self, phase: str, total: int | None = None) -> None:
        style = self._PHASE_STYLES.get(phase)
        label = f"[{style}]{phase}[/]" if style else phase
        self._rows[phase] = self._progress.add_task(label, total=total)

    def item_done(self, phase: str) -> None:
        if phase in self._rows:
            self._progress.advance(self._rows[phase])

    def phase_done(self, phase: str) -> None:
        row = self._rows.get(phase)
        if row is None:
            return
        # Indeterminate and empty phases get a total of one so the row reads as finished.
        total = self._progress.tasks[row].total or 1
        self._progress.update(row, total=total, completed=total)

    def phase_error(self, phase: str, error: BaseException) -> None:
        row = self._rows.get(phase)
        if row is None:
            return
        self._progress.update(row, description=f"[red]{phase}[/]")
        self._progress.stop_task(row)
