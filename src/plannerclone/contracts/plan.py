"""Plan, bucket, task and task-detail contracts."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Plan(BaseModel):
    id: str
    title: str
    container_url: str | None = None


class Bucket(BaseModel):
    id: str
    name: str
    order_key: str = ""
    plan_id: str | None = None


class Task(BaseModel):
    id: str
    title: str
    priority: int | None = None
    order_key: str = ""
    bucket_id: str | None = None


class ChecklistItem(BaseModel):
    title: str
    is_checked: bool = False


class AttachmentReference(BaseModel):
    """External link on a task.

    ``key`` is the reference's identity on the service *and* its URL payload.
    It may arrive percent-encoded any number of times.
    """

    key: str
    alias: str = ""
    type: str | None = None
    preview_priority: str | None = None
    last_modified: str | None = None


class TaskDetail(BaseModel):
    task_id: str
    description: str | None = None
    checklist: dict[str, ChecklistItem] = Field(default_factory=dict)
    references: dict[str, AttachmentReference] = Field(default_factory=dict)
    concurrency_token: str = ""


class TaskDetailUpdate(BaseModel):
    """Partial field set for a conditional task-detail update.

    ``None`` fields are left out of the request.
    """

    description: str | None = None
    checklist: dict[str, ChecklistItem] | None = None
    preview_type: str | None = None
    references: dict[str, AttachmentReference] | None = None

    def is_empty(self) -> bool:
        return self.description is None and not self.checklist and not self.references


class TaskSnapshot(BaseModel):
    task: Task
    detail: TaskDetail


class PlanSnapshot(BaseModel):
    plan: Plan
    buckets: list[Bucket] = Field(default_factory=list)
    tasks: list[TaskSnapshot] = Field(default_factory=list)
    orphaned_tasks: list[TaskSnapshot] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def task_count(self) -> int:
        return len(self.tasks) + len(self.orphaned_tasks)
