"""Microsoft Graph Planner provider."""

from plannerclone.providers.graph.provider import GraphPlannerProvider

__all__ = ["GraphPlannerProvider"]
