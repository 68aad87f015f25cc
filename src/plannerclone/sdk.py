"""SDK composition root for plannerclone."""

from __future__ import annotations

from plannerclone.auth import create_token_resolver
from plannerclone.contracts.clone import CloneRequest, CloneResult
from plannerclone.contracts.config import CloneConfig
from plannerclone.contracts.exceptions import ConfigError
from plannerclone.contracts.provider import Provider
from plannerclone.engine import CloneEngine, CloneProgress, Pacer
from plannerclone.providers.dry_run import DryRunProvider
from plannerclone.providers.factory import create_provider


class PlannerClone:
    """plannerclone SDK public API."""

    def __init__(
        self,
        *,
        config: CloneConfig,
        provider: Provider | None = None,
        progress: CloneProgress | None = None,
        pacer: Pacer | None = None,
    ) -> None:
        self._config = config
        self._provider = provider
        self._progress = progress
        self._pacer = pacer

    @classmethod
    async def from_config(cls, config: CloneConfig, *, progress: CloneProgress | None = None) -> PlannerClone:
        return cls(config=config, progress=progress)

    async def clone(self, request: CloneRequest, *, dry_run: bool = False) -> CloneResult:
        provider = self._provider or await self._resolve_provider()
        if dry_run:
            provider = DryRunProvider(provider)

        async with provider:
            engine = CloneEngine(
                provider,
                self._config,
                progress=self._progress,
                pacer=self._pacer,
                dry_run=dry_run,
            )
            return await engine.clone(request)

    async def _resolve_provider(self) -> Provider:
        token = await create_token_resolver(self._config).resolve()
        try:
            return create_provider(self._config.provider, token=token, config=self._config)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
