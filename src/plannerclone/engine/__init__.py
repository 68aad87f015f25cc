"""Engine module exports."""

from plannerclone.engine.engine import CloneEngine, build_checklist
from plannerclone.engine.pacing import Pacer
from plannerclone.engine.progress import CloneProgress, NullCloneProgress
from plannerclone.engine.snapshot import SnapshotBuilder

__all__ = ["CloneEngine", "CloneProgress", "NullCloneProgress", "Pacer", "SnapshotBuilder", "build_checklist"]
