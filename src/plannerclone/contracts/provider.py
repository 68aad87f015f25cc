"""Remote planning service contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from plannerclone.contracts.plan import Bucket, Plan, Task, TaskDetail, TaskDetailUpdate


class Provider(ABC):
    """Async adapter over the remote work-management service.

    Every method raises :class:`~plannerclone.contracts.exceptions.ProviderError`
    (or a subclass) when the remote call fails.
    """

    @abstractmethod
    async def __aenter__(self) -> Provider: ...

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...

    @abstractmethod
    async def verify_session(self) -> None:
        """Confirm an authenticated session exists.

        Raises:
            AuthenticationError: If the session is missing or rejected.
        """

    @abstractmethod
    async def get_plan(self, plan_id: str) -> Plan: ...

    @abstractmethod
    async def list_tasks(self, plan_id: str) -> list[Task]: ...

    @abstractmethod
    async def get_task_detail(self, task_id: str) -> TaskDetail: ...

    @abstractmethod
    async def get_bucket(self, bucket_id: str) -> Bucket: ...

    @abstractmethod
    async def create_plan(self, owner: str, title: str) -> Plan: ...

    @abstractmethod
    async def create_bucket(self, plan_id: str, name: str) -> Bucket: ...

    @abstractmethod
    async def create_task(self, plan_id: str, bucket_id: str, title: str, priority: int | None = None) -> Task: ...

    @abstractmethod
    async def update_task_detail(self, task_id: str, concurrency_token: str, update: TaskDetailUpdate) -> None:
        """Apply *update* only if *concurrency_token* still matches the server's value.

        Raises:
            ConcurrencyTokenError: If the token is stale.
        """
