"""Microsoft Graph Planner provider adapter."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from plannerclone.contracts.config import DEFAULT_GRAPH_BASE_URL
from plannerclone.contracts.exceptions import (
    AuthenticationError,
    ConcurrencyTokenError,
    ProviderError,
    ResourceNotFoundError,
)
from plannerclone.contracts.plan import Bucket, Plan, Task, TaskDetail, TaskDetailUpdate
from plannerclone.contracts.provider import Provider
from plannerclone.providers.graph._retrying_transport import RetryingTransport
from plannerclone.providers.graph.mapper import (
    bucket_from_payload,
    detail_from_payload,
    group_container_url,
    plan_from_payload,
    task_from_payload,
    update_to_payload,
)

_LOG = logging.getLogger(__name__)


class GraphPlannerProvider(Provider):
    def __init__(
        self,
        *,
        token: str,
        base_url: str = DEFAULT_GRAPH_BASE_URL,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._max_retries = max_retries
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GraphPlannerProvider:
        self._open_transport()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def verify_session(self) -> None:
        await self._request("GET", "/me")

    async def get_plan(self, plan_id: str) -> Plan:
        return plan_from_payload(await self._request("GET", f"/planner/plans/{plan_id}"))

    async def list_tasks(self, plan_id: str) -> list[Task]:
        payload = await self._request("GET", f"/planner/plans/{plan_id}/tasks")
        nodes = payload.get("value")
        if not isinstance(nodes, list):
            raise ProviderError("Missing/invalid list at key 'value'")
        return [task_from_payload(node) for node in nodes if isinstance(node, dict)]

    async def get_task_detail(self, task_id: str) -> TaskDetail:
        return detail_from_payload(task_id, await self._request("GET", f"/planner/tasks/{task_id}/details"))

    async def get_bucket(self, bucket_id: str) -> Bucket:
        return bucket_from_payload(await self._request("GET", f"/planner/buckets/{bucket_id}"))

    async def create_plan(self, owner: str, title: str) -> Plan:
        body = {"container": {"url": group_container_url(self._base_url, owner)}, "title": title}
        return plan_from_payload(await self._request("POST", "/planner/plans", json=body))

    async def create_bucket(self, plan_id: str, name: str) -> Bucket:
        body = {"name": name, "planId": plan_id}
        return bucket_from_payload(await self._request("POST", "/planner/buckets", json=body))

    async def create_task(self, plan_id: str, bucket_id: str, title: str, priority: int | None = None) -> Task:
        body: dict[str, Any] = {"planId": plan_id, "bucketId": bucket_id, "title": title}
        if priority is not None:
            body["priority"] = priority
        return task_from_payload(await self._request("POST", "/planner/tasks", json=body))

    async def update_task_detail(self, task_id: str, concurrency_token: str, update: TaskDetailUpdate) -> None:
        if not concurrency_token:
            raise ConcurrencyTokenError(f"No concurrency token for task {task_id} details")
        await self._request(
            "PATCH",
            f"/planner/tasks/{task_id}/details",
            json=update_to_payload(update),
            headers={"If-Match": concurrency_token, "Prefer": "return=minimal"},
        )

    def _open_transport(self) -> None:
        transport = RetryingTransport(transport=self._transport, max_retries=self._max_retries)
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            transport=transport,
            headers={"Authorization": f"Bearer {self._token}", "Accept": "application/json"},
            timeout=httpx.Timeout(30.0),
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        if self._client is None:
            raise ProviderError("Provider is not initialized. Use 'async with'.")

        _LOG.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as exc:
            raise ProviderError(f"{method} {path} failed: {exc}") from exc

        status = response.status_code
        if status >= 400:
            message = f"{method} {path} returned {status}: {self._error_message(response)}"
            if status in {401, 403}:
                raise AuthenticationError(message, status_code=status)
            if status == 404:
                raise ResourceNotFoundError(message, status_code=status)
            if status == 412:
                raise ConcurrencyTokenError(message, status_code=status)
            raise ProviderError(message, status_code=status)

        if status == 204 or not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError(f"{method} {path} returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise ProviderError(f"{method} {path} returned a non-object payload")
        return payload

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text.strip() or response.reason_phrase
        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        return response.reason_phrase
