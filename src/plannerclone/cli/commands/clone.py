"""Clone command execution and formatting."""

from __future__ import annotations

import argparse
from pathlib import Path

from plannerclone.cli.persistence import persist_result, result_json
from plannerclone.cli.progress.rich import RichCloneProgress
from plannerclone.config import load_config
from plannerclone.contracts.clone import CloneRequest, CloneResult
from plannerclone.contracts.exceptions import ConfigError
from plannerclone.sdk import PlannerClone


def format_clone_summary(result: CloneResult) -> str:
    mode = "dry-run" if result.dry_run else "apply"
    lines = [
        "",
        f"plannerclone - clone complete ({mode})",
        "",
        f"  Source:    {result.source_plan_title}",
        f"  New plan:  {result.new_plan_id}",
        f"  URL:       {result.new_plan_url}",
        "",
        f"  Buckets:   {result.buckets_created} created",
        f"  Tasks:     {result.tasks_created} of {result.tasks_attempted} created",
    ]
    if result.orphaned_tasks:
        lines.append(f"  Orphaned:  {len(result.orphaned_tasks)} task(s) without a readable bucket")
    lines.append(f"  Status:    {result.status}")

    if result.warnings:
        lines.append("")
        lines.append(f"  Warnings ({len(result.warnings)}):")
        lines.extend(f"    - {warning}" for warning in result.warnings)

    if result.dry_run:
        lines.append("")
        lines.append("  [dry-run] No changes were made")

    lines.append("")
    return "\n".join(lines)


def build_request(args: argparse.Namespace) -> CloneRequest:
    try:
        return CloneRequest(
            source_plan_id=args.source_plan,
            destination_owner=args.owner,
            destination_title=args.title,
        )
    except ValueError as exc:
        raise ConfigError(f"invalid arguments: {exc}") from exc


async def run_clone(args: argparse.Namespace) -> CloneResult:
    config = load_config(args.config, auth=args.auth)
    request = build_request(args)

    if not args.verbose:
        with RichCloneProgress() as progress:
            pc = await PlannerClone.from_config(config, progress=progress)
            result = await pc.clone(request, dry_run=args.dry_run)
    else:
        pc = await PlannerClone.from_config(config)
        result = await pc.clone(request, dry_run=args.dry_run)

    if args.output:
        persist_result(result=result, path=Path(args.output))

    print(result_json(result) if args.json else format_clone_summary(result))
    return result


__all__ = ["build_request", "format_clone_summary", "run_clone"]
