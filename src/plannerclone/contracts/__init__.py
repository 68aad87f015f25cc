"""Public contracts for plannerclone."""

from plannerclone.contracts.clone import STATUS_COMPLETED, CloneRequest, CloneResult
from plannerclone.contracts.config import CloneConfig
from plannerclone.contracts.exceptions import (
    AttachmentValidationError,
    AuthenticationError,
    CloneError,
    ConcurrencyTokenError,
    ConfigError,
    PlannerCloneError,
    ProviderError,
    ResourceNotFoundError,
    SnapshotError,
)
from plannerclone.contracts.plan import (
    AttachmentReference,
    Bucket,
    ChecklistItem,
    Plan,
    PlanSnapshot,
    Task,
    TaskDetail,
    TaskDetailUpdate,
    TaskSnapshot,
)
from plannerclone.contracts.provider import Provider

__all__ = [
    "STATUS_COMPLETED",
    "AttachmentReference",
    "AttachmentValidationError",
    "AuthenticationError",
    "Bucket",
    "ChecklistItem",
    "CloneConfig",
    "CloneError",
    "CloneRequest",
    "CloneResult",
    "ConcurrencyTokenError",
    "ConfigError",
    "Plan",
    "PlanSnapshot",
    "PlannerCloneError",
    "Provider",
    "ProviderError",
    "ResourceNotFoundError",
    "SnapshotError",
    "Task",
    "TaskDetail",
    "TaskDetailUpdate",
    "TaskSnapshot",
]
