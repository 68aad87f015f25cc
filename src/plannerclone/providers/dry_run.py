"""Dry-run provider: real reads, in-memory writes."""

from __future__ import annotations

from types import TracebackType

from plannerclone.contracts.exceptions import ConcurrencyTokenError, ResourceNotFoundError
from plannerclone.contracts.plan import Bucket, Plan, Task, TaskDetail, TaskDetailUpdate
from plannerclone.contracts.provider import Provider

DRY_RUN_TOKEN = "dry-run"


class DryRunProvider(Provider):
    """Reads the source through *reader* and records every write without sending it.

    Created entities get deterministic placeholder ids so the rest of the
    pipeline runs unchanged.
    """

    def __init__(self, reader: Provider) -> None:
        self._reader = reader
        self._counter = 0
        self._details: dict[str, TaskDetail] = {}
        self.plans: list[Plan] = []
        self.buckets: list[Bucket] = []
        self.tasks: list[Task] = []
        self.updates: list[tuple[str, TaskDetailUpdate]] = []

    async def __aenter__(self) -> DryRunProvider:
        await self._reader.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self._reader.__aexit__(exc_type, exc_val, exc_tb)

    async def verify_session(self) -> None:
        await self._reader.verify_session()

    async def get_plan(self, plan_id: str) -> Plan:
        return await self._reader.get_plan(plan_id)

    async def list_tasks(self, plan_id: str) -> list[Task]:
        return await self._reader.list_tasks(plan_id)

    async def get_task_detail(self, task_id: str) -> TaskDetail:
        if task_id in self._details:
            return self._details[task_id]
        return await self._reader.get_task_detail(task_id)

    async def get_bucket(self, bucket_id: str) -> Bucket:
        return await self._reader.get_bucket(bucket_id)

    async def create_plan(self, owner: str, title: str) -> Plan:
        plan = Plan(id=self._next_id("plan"), title=title, container_url=f"dry-run:{owner}")
        self.plans.append(plan)
        return plan

    async def create_bucket(self, plan_id: str, name: str) -> Bucket:
        bucket = Bucket(id=self._next_id("bucket"), name=name, plan_id=plan_id)
        self.buckets.append(bucket)
        return bucket

    async def create_task(self, plan_id: str, bucket_id: str, title: str, priority: int | None = None) -> Task:
        task = Task(id=self._next_id("task"), title=title, priority=priority, bucket_id=bucket_id)
        self.tasks.append(task)
        self._details[task.id] = TaskDetail(task_id=task.id, concurrency_token=DRY_RUN_TOKEN)
        return task

    async def update_task_detail(self, task_id: str, concurrency_token: str, update: TaskDetailUpdate) -> None:
        if task_id not in self._details:
            raise ResourceNotFoundError(f"Task not found: {task_id}")
        if concurrency_token != DRY_RUN_TOKEN:
            raise ConcurrencyTokenError(f"Stale concurrency token for task {task_id}")
        self.updates.append((task_id, update))

    def _next_id(self, kind: str) -> str:
        self._counter += 1
        return f"dry-run-{kind}-{self._counter}"
