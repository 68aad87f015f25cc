"""Command-line interface for plannerclone."""

from plannerclone.cli.app import main
from plannerclone.cli.commands.clone import build_request, format_clone_summary, run_clone
from plannerclone.cli.parser import build_parser

__all__ = ["build_parser", "build_request", "format_clone_summary", "main", "run_clone"]
