"""Progress observer that records every event for assertions."""

from __future__ import annotations

from plannerclone.engine.progress import CloneProgress


class RecordingProgress(CloneProgress):
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def phase_start(self, phase: str, total: int | None = None) -> None:
        self.events.append(("start", f"{phase}:{total}"))

    def item_done(self, phase: str) -> None:
        self.events.append(("item", phase))

    def phase_done(self, phase: str) -> None:
        self.events.append(("done", phase))

    def phase_error(self, phase: str, error: BaseException) -> None:
        self.events.append(("error", phase))

    def phases(self, kind: str) -> list[str]:
        return [value for event, value in self.events if event == kind]
