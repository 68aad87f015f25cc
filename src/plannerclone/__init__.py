"""Public API surface for plannerclone."""

__version__ = "0.1.0"

from plannerclone.config import load_config
from plannerclone.contracts import (
    AttachmentReference,
    AttachmentValidationError,
    AuthenticationError,
    Bucket,
    ChecklistItem,
    CloneConfig,
    CloneError,
    CloneRequest,
    CloneResult,
    ConcurrencyTokenError,
    ConfigError,
    Plan,
    PlannerCloneError,
    PlanSnapshot,
    Provider,
    ProviderError,
    ResourceNotFoundError,
    SnapshotError,
    Task,
    TaskDetail,
    TaskDetailUpdate,
    TaskSnapshot,
)
from plannerclone.core import rank_order_keys, sort_by_order_key
from plannerclone.engine import CloneEngine, CloneProgress, NullCloneProgress, Pacer, SnapshotBuilder
from plannerclone.providers import DryRunProvider, GraphPlannerProvider, create_provider
from plannerclone.sdk import PlannerClone

__all__ = [
    "AttachmentReference",
    "AttachmentValidationError",
    "AuthenticationError",
    "Bucket",
    "ChecklistItem",
    "CloneConfig",
    "CloneEngine",
    "CloneError",
    "CloneProgress",
    "CloneRequest",
    "CloneResult",
    "ConcurrencyTokenError",
    "ConfigError",
    "DryRunProvider",
    "GraphPlannerProvider",
    "NullCloneProgress",
    "Pacer",
    "Plan",
    "PlanSnapshot",
    "PlannerClone",
    "PlannerCloneError",
    "Provider",
    "ProviderError",
    "ResourceNotFoundError",
    "SnapshotBuilder",
    "SnapshotError",
    "Task",
    "TaskDetail",
    "TaskDetailUpdate",
    "TaskSnapshot",
    "__version__",
    "create_provider",
    "load_config",
    "rank_order_keys",
    "sort_by_order_key",
]
