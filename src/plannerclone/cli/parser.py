"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("plannerclone")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="plannerclone")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    clone_parser = subparsers.add_parser("clone", help="Clone a plan into a new plan owned by another group")
    clone_parser.add_argument("--source-plan", required=True, help="Id of the plan to clone")
    clone_parser.add_argument("--owner", required=True, help="Id of the group that will own the new plan")
    clone_parser.add_argument("--title", required=True, help="Title of the new plan")
    clone_parser.add_argument("--config", default=None, help="Optional path to a plannerclone.json config file")
    clone_parser.add_argument("--auth", choices=["azure-cli", "env", "token"], default=None, help="Token source")
    clone_parser.add_argument("--dry-run", action="store_true", help="Read the source but do not write anything")
    clone_parser.add_argument("--json", action="store_true", help="Print the result record as JSON")
    clone_parser.add_argument("--output", "-o", default=None, help="Also write the result record to this file")
    clone_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


__all__ = ["build_parser"]
