"""Provider implementations and factory."""

from plannerclone.providers.dry_run import DryRunProvider
from plannerclone.providers.factory import create_provider
from plannerclone.providers.graph import GraphPlannerProvider

__all__ = ["DryRunProvider", "GraphPlannerProvider", "create_provider"]
