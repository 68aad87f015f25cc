"""CLI progress displays."""

from plannerclone.cli.progress.rich import RichCloneProgress

__all__ = ["RichCloneProgress"]
