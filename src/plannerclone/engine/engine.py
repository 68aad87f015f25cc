"""Staged replication of a source plan into a new destination plan."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

from plannerclone.contracts.clone import STATUS_COMPLETED, CloneRequest, CloneResult
from plannerclone.contracts.config import CloneConfig
from plannerclone.contracts.exceptions import (
    AttachmentValidationError,
    AuthenticationError,
    CloneError,
    ProviderError,
)
from plannerclone.contracts.plan import (
    AttachmentReference,
    Bucket,
    ChecklistItem,
    Plan,
    PlanSnapshot,
    TaskDetailUpdate,
    TaskSnapshot,
)
from plannerclone.contracts.provider import Provider
from plannerclone.core.attachments import normalize_reference
from plannerclone.core.ordering import sort_by_order_key
from plannerclone.engine.pacing import Pacer
from plannerclone.engine.progress import CloneProgress, NullCloneProgress
from plannerclone.engine.snapshot import SnapshotBuilder

_LOG = logging.getLogger(__name__)

PREVIEW_CHECKLIST = "checklist"
PREVIEW_DESCRIPTION = "description"


@dataclass
class _CloneRun:
    """Mutable state owned by a single :meth:`CloneEngine.clone` call."""

    request: CloneRequest
    bucket_ids: dict[str, str] = field(default_factory=dict)
    tasks_created: int = 0
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        _LOG.warning(message)
        self.warnings.append(message)


class CloneEngine:
    """Runs Verify → Snapshot → CreatePlan → CreateBuckets → Tasks → Summarize.

    Every stage completes for the whole collection before the next one
    starts, and every remote call is awaited before the next is issued.
    """

    def __init__(
        self,
        provider: Provider,
        config: CloneConfig,
        *,
        progress: CloneProgress | None = None,
        pacer: Pacer | None = None,
        dry_run: bool = False,
    ) -> None:
        self._provider = provider
        self._config = config
        self._progress: CloneProgress = progress or NullCloneProgress()
        self._pacer = pacer or Pacer.from_config(config)
        self._dry_run = dry_run

    async def clone(self, request: CloneRequest) -> CloneResult:
        run = _CloneRun(request=request)

        source = await self._verify(request)
        snapshot = await SnapshotBuilder(self._provider, self._config, progress=self._progress).build(
            request.source_plan_id, plan=source
        )
        run.warnings.extend(snapshot.warnings)

        buckets = sort_by_order_key(snapshot.buckets, key=lambda b: b.order_key, strategy=self._config.order_strategy)
        destination = await self._create_plan(request)
        await self._create_buckets(run, destination, buckets)
        await self._create_tasks(run, destination, snapshot, buckets)

        return self._summarize(run, snapshot, destination)

    async def _verify(self, request: CloneRequest) -> Plan:
        self._progress.phase_start("Verify")
        try:
            try:
                await self._provider.verify_session()
            except AuthenticationError:
                raise
            except ProviderError as exc:
                raise AuthenticationError(f"Unable to verify the authenticated session: {exc}") from exc
            try:
                source = await self._provider.get_plan(request.source_plan_id)
            except ProviderError as exc:
                raise CloneError(f"Source plan '{request.source_plan_id}' is not readable: {exc}") from exc
            self._progress.phase_done("Verify")
        except BaseException as exc:
            self._progress.phase_error("Verify", exc)
            raise
        _LOG.debug("Verified session and source plan '%s'", source.title)
        return source

    async def _create_plan(self, request: CloneRequest) -> Plan:
        try:
            destination = await self._provider.create_plan(request.destination_owner, request.destination_title)
        except ProviderError as exc:
            raise CloneError(f"Failed to create destination plan '{request.destination_title}': {exc}") from exc
        _LOG.info("Created destination plan '%s' (%s)", destination.title, destination.id)
        return destination

    async def _create_buckets(self, run: _CloneRun, destination: Plan, buckets: list[Bucket]) -> None:
        self._progress.phase_start("Buckets", total=len(buckets))
        try:
            for bucket in buckets:
                try:
                    created = await self._provider.create_bucket(destination.id, bucket.name)
                except ProviderError as exc:
                    raise CloneError(
                        f"Failed to create bucket '{bucket.name}' ({bucket.id}); aborting before any task "
                        f"is created: {exc}"
                    ) from exc
                run.bucket_ids[bucket.id] = created.id
                _LOG.debug("Bucket '%s': %s -> %s", bucket.name, bucket.id, created.id)
                self._progress.item_done("Buckets")
            self._progress.phase_done("Buckets")
        except BaseException as exc:
            self._progress.phase_error("Buckets", exc)
            raise

    async def _create_tasks(
        self, run: _CloneRun, destination: Plan, snapshot: PlanSnapshot, buckets: list[Bucket]
    ) -> None:
        groups: dict[str, list[TaskSnapshot]] = {}
        for task_snapshot in snapshot.tasks:
            groups.setdefault(task_snapshot.task.bucket_id or "", []).append(task_snapshot)

        self._progress.phase_start("Tasks", total=len(snapshot.tasks))
        try:
            for bucket in buckets:
                ordered = sort_by_order_key(
                    groups.get(bucket.id, []),
                    key=lambda s: s.task.order_key,
                    strategy=self._config.order_strategy,
                )
                for task_snapshot in ordered:
                    await self._clone_task(run, destination, task_snapshot)
                    self._progress.item_done("Tasks")
                    await self._pacer.after_task()
            self._progress.phase_done("Tasks")
        except BaseException as exc:
            self._progress.phase_error("Tasks", exc)
            raise

    async def _clone_task(self, run: _CloneRun, destination: Plan, snapshot: TaskSnapshot) -> None:
        task = snapshot.task
        bucket_id = run.bucket_ids.get(task.bucket_id or "")
        if bucket_id is None:
            run.warn(f"Skipping task '{task.title}' ({task.id}): no destination bucket for {task.bucket_id}")
            return

        try:
            created = await self._provider.create_task(destination.id, bucket_id, task.title, task.priority)
        except ProviderError as exc:
            run.warn(f"Failed to create task '{task.title}' ({task.id}): {exc}")
            return
        run.tasks_created += 1
        _LOG.debug("Task '%s': %s -> %s", task.title, task.id, created.id)

        await self._apply_details(run, snapshot, created.id)
        await self._apply_references(run, snapshot, created.id)

    async def _apply_details(self, run: _CloneRun, snapshot: TaskSnapshot, task_id: str) -> None:
        detail = snapshot.detail
        update = TaskDetailUpdate()
        if (detail.description or "").strip():
            update.description = detail.description
            update.preview_type = PREVIEW_DESCRIPTION
        if detail.checklist:
            update.checklist = build_checklist(detail.checklist)
            update.preview_type = PREVIEW_CHECKLIST
        if update.is_empty():
            return

        await self._pacer.before_detail()
        await self._conditional_update(run, snapshot, task_id, update, what="details")

    async def _apply_references(self, run: _CloneRun, snapshot: TaskSnapshot, task_id: str) -> None:
        references = snapshot.detail.references
        if not references:
            return

        normalized: dict[str, AttachmentReference] = {}
        for reference in references.values():
            try:
                result = normalize_reference(reference)
            except AttachmentValidationError as exc:
                run.warn(f"Task '{snapshot.task.title}': skipping attachment: {exc}")
                continue
            normalized[result.key] = result.reference
        update = TaskDetailUpdate(references=normalized)
        if update.is_empty():
            return

        await self._pacer.before_detail()
        await self._conditional_update(run, snapshot, task_id, update, what="attachments")

    async def _conditional_update(
        self,
        run: _CloneRun,
        snapshot: TaskSnapshot,
        task_id: str,
        update: TaskDetailUpdate,
        *,
        what: str,
    ) -> None:
        # A token consumed by an earlier update is stale, so always fetch a fresh one.
        try:
            current = await self._provider.get_task_detail(task_id)
            await self._provider.update_task_detail(task_id, current.concurrency_token, update)
        except ProviderError as exc:
            run.warn(f"Task '{snapshot.task.title}': failed to apply {what}: {exc}")

    def _summarize(self, run: _CloneRun, snapshot: PlanSnapshot, destination: Plan) -> CloneResult:
        result = CloneResult(
            source_plan_title=snapshot.plan.title,
            new_plan_id=destination.id,
            new_plan_url=self._config.plan_url(destination.id),
            tasks_created=run.tasks_created,
            tasks_attempted=snapshot.task_count,
            buckets_created=len(run.bucket_ids),
            status=STATUS_COMPLETED,
            orphaned_tasks=[s.task.id for s in snapshot.orphaned_tasks],
            warnings=list(run.warnings),
            dry_run=self._dry_run,
        )
        _LOG.info(
            "Clone complete: %d/%d task(s), %d bucket(s)",
            result.tasks_created,
            result.tasks_attempted,
            result.buckets_created,
        )
        return result


def build_checklist(items: dict[str, ChecklistItem]) -> dict[str, ChecklistItem]:
    """Re-key *items* with fresh ids, unchecked, in the source's iteration order."""
    return {str(uuid.uuid4()): ChecklistItem(title=item.title, is_checked=False) for item in items.values()}
