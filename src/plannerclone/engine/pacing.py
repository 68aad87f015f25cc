"""Fixed-delay pacing between remote calls."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from plannerclone.contracts.config import CloneConfig


class Pacer:
    """Client-side spacing between remote calls.

    ``before_detail`` runs ahead of every task-detail round-trip and
    ``after_task`` once each task has been fully processed. Both only wait;
    they make no ordering promise beyond that.
    """

    def __init__(
        self,
        *,
        task_delay: float,
        detail_delay: float,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if task_delay < 0 or detail_delay < 0:
            raise ValueError("delays must be non-negative")
        self.task_delay = task_delay
        self.detail_delay = detail_delay
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: CloneConfig) -> Pacer:
        return cls(task_delay=config.task_delay, detail_delay=config.detail_delay)

    async def before_detail(self) -> None:
        await self._pause(self.detail_delay)

    async def after_task(self) -> None:
        await self._pause(self.task_delay)

    async def _pause(self, seconds: float) -> None:
        if seconds > 0:
            await self._sleep(seconds)
