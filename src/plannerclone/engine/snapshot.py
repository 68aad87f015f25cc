"""Read a source plan into an in-memory snapshot."""

from __future__ import annotations

import logging

from plannerclone.contracts.config import CloneConfig
from plannerclone.contracts.exceptions import ProviderError, SnapshotError
from plannerclone.contracts.plan import Bucket, Plan, PlanSnapshot, Task, TaskSnapshot
from plannerclone.contracts.provider import Provider
from plannerclone.engine.progress import CloneProgress, NullCloneProgress

_LOG = logging.getLogger(__name__)


class SnapshotBuilder:
    """Builds a :class:`PlanSnapshot` for one source plan.

    The plan and its task list are required; failing to read either raises
    :class:`SnapshotError`. Task details and buckets are fetched one by one and
    any that cannot be read are dropped with a warning.
    """

    def __init__(
        self,
        provider: Provider,
        config: CloneConfig,
        *,
        progress: CloneProgress | None = None,
    ) -> None:
        self._provider = provider
        self._config = config
        self._progress: CloneProgress = progress or NullCloneProgress()

    async def build(self, plan_id: str, *, plan: Plan | None = None) -> PlanSnapshot:
        if plan is None:
            plan = await self._read_plan(plan_id)
        warnings: list[str] = []

        try:
            tasks = await self._provider.list_tasks(plan_id)
        except ProviderError as exc:
            raise SnapshotError(f"Unable to list tasks of source plan '{plan_id}': {exc}") from exc

        self._progress.phase_start("Snapshot", total=len(tasks))
        try:
            task_snapshots = await self._read_details(tasks, warnings)
            buckets = await self._read_buckets(tasks, warnings)
            placed, orphaned = self._split_orphans(task_snapshots, buckets, warnings)
            self._progress.phase_done("Snapshot")
        except BaseException as exc:
            self._progress.phase_error("Snapshot", exc)
            raise

        return PlanSnapshot(
            plan=plan,
            buckets=buckets,
            tasks=placed,
            orphaned_tasks=orphaned,
            warnings=warnings,
        )

    async def _read_plan(self, plan_id: str) -> Plan:
        try:
            return await self._provider.get_plan(plan_id)
        except ProviderError as exc:
            raise SnapshotError(f"Unable to read source plan '{plan_id}': {exc}") from exc

    async def _read_details(self, tasks: list[Task], warnings: list[str]) -> list[TaskSnapshot]:
        snapshots: list[TaskSnapshot] = []
        for task in tasks:
            try:
                detail = await self._provider.get_task_detail(task.id)
            except ProviderError as exc:
                self._warn(warnings, f"Skipping task '{task.title}' ({task.id}): detail fetch failed: {exc}")
            else:
                snapshots.append(TaskSnapshot(task=task, detail=detail))
            self._progress.item_done("Snapshot")
        return snapshots

    async def _read_buckets(self, tasks: list[Task], warnings: list[str]) -> list[Bucket]:
        bucket_ids = list(dict.fromkeys(task.bucket_id for task in tasks if task.bucket_id))
        buckets: list[Bucket] = []
        for bucket_id in bucket_ids:
            try:
                buckets.append(await self._provider.get_bucket(bucket_id))
            except ProviderError as exc:
                self._warn(warnings, f"Skipping bucket {bucket_id}: fetch failed: {exc}")
        return buckets

    def _split_orphans(
        self,
        snapshots: list[TaskSnapshot],
        buckets: list[Bucket],
        warnings: list[str],
    ) -> tuple[list[TaskSnapshot], list[TaskSnapshot]]:
        known = {bucket.id for bucket in buckets}
        placed = [s for s in snapshots if s.task.bucket_id in known]
        orphaned = [s for s in snapshots if s.task.bucket_id not in known]
        if not orphaned:
            return placed, orphaned

        if self._config.orphan_policy == "fail":
            ids = ", ".join(s.task.id for s in orphaned)
            raise SnapshotError(f"{len(orphaned)} task(s) have no readable source bucket: {ids}")
        for snapshot in orphaned:
            self._warn(
                warnings,
                f"Skipping task '{snapshot.task.title}' ({snapshot.task.id}): "
                f"source bucket {snapshot.task.bucket_id or '(none)'} is unavailable",
            )
        return placed, orphaned

    @staticmethod
    def _warn(warnings: list[str], message: str) -> None:
        _LOG.warning(message)
        warnings.append(message)
