"""Factory for creating provider instances by name."""

from __future__ import annotations

from plannerclone.contracts.config import CloneConfig
from plannerclone.contracts.provider import Provider
from plannerclone.providers.graph.provider import GraphPlannerProvider

# Registry mapping provider names to their classes
_REGISTRY: dict[str, type[GraphPlannerProvider]] = {
    "graph": GraphPlannerProvider,
}


def create_provider(name: str, *, token: str, config: CloneConfig) -> Provider:
    """Create a provider instance by name.

    The returned provider is an async context manager::

        async with create_provider("graph", token=token, config=config) as provider:
            plan = await provider.get_plan(plan_id)

    Raises:
        ValueError: If the provider name is not registered.
    """
    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY)) or "(none registered)"
        raise ValueError(f"Unknown provider: {name!r}. Available: {available}")

    provider_cls = _REGISTRY[name]
    return provider_cls(token=token, base_url=config.graph_base_url, max_retries=config.max_retries)
