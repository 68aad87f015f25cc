"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import asyncio
import logging
import sys

from plannerclone.cli.commands.clone import run_clone
from plannerclone.cli.parser import build_parser
from plannerclone.contracts.exceptions import (
    AuthenticationError,
    CloneError,
    ConfigError,
    ProviderError,
    SnapshotError,
)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s", stream=sys.stderr)

    try:
        asyncio.run(run_clone(args))
        return 0
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except (AuthenticationError, ProviderError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except (SnapshotError, CloneError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except Exception as exc:  # pragma: no cover - defensive fallback
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
