"""Shared test fixtures for plannerclone tests."""

from __future__ import annotations

import pytest

from plannerclone.contracts.clone import CloneRequest
from plannerclone.contracts.config import CloneConfig
from plannerclone.engine.pacing import Pacer
from tests.fakes.provider import FakePlannerProvider


@pytest.fixture
def config() -> CloneConfig:
    """Config with pacing disabled so tests never sleep."""
    return CloneConfig(auth="token", token="test-token", task_delay=0.0, detail_delay=0.0)


@pytest.fixture
def recorded_sleeps() -> list[float]:
    return []


@pytest.fixture
def pacer(recorded_sleeps: list[float]) -> Pacer:
    async def fake_sleep(seconds: float) -> None:
        recorded_sleeps.append(seconds)

    return Pacer(task_delay=0.5, detail_delay=1.0, sleep=fake_sleep)


@pytest.fixture
def provider() -> FakePlannerProvider:
    return FakePlannerProvider()


@pytest.fixture
def request_for():
    def build(source_plan_id: str, *, owner: str = "group-dest", title: str = "Copy") -> CloneRequest:
        return CloneRequest(source_plan_id=source_plan_id, destination_owner=owner, destination_title=title)

    return build
