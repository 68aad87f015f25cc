"""Clone request and result contracts."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

STATUS_COMPLETED = "Completed"


class CloneRequest(BaseModel):
    source_plan_id: str
    destination_owner: str
    destination_title: str

    model_config = {"frozen": True}

    @field_validator("source_plan_id", "destination_owner", "destination_title")
    @classmethod
    def require_non_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class CloneResult(BaseModel):
    """Structured record emitted by a completed run.

    Serialize with ``model_dump(by_alias=True)`` to get the published field names.
    """

    source_plan_title: str = Field(alias="SourcePlanTitle")
    new_plan_id: str = Field(alias="NewPlanId")
    new_plan_url: str = Field(alias="NewPlanUrl")
    tasks_created: int = Field(alias="TasksCreated")
    tasks_attempted: int = Field(alias="TasksAttempted")
    buckets_created: int = Field(alias="BucketsCreated")
    status: str = Field(default=STATUS_COMPLETED, alias="Status")
    orphaned_tasks: list[str] = Field(default_factory=list, alias="OrphanedTasks")
    warnings: list[str] = Field(default_factory=list, alias="Warnings")
    dry_run: bool = Field(default=False, alias="DryRun")

    model_config = {"populate_by_name": True}
