"""Configuration contracts."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
DEFAULT_PLAN_URL_TEMPLATE = "https://tasks.office.com/Home/PlanViews/{plan_id}"


class CloneConfig(BaseModel):
    provider: str = "graph"
    auth: str = "azure-cli"
    token: str | None = None
    graph_base_url: str = DEFAULT_GRAPH_BASE_URL
    plan_url_template: str = DEFAULT_PLAN_URL_TEMPLATE
    task_delay: float = Field(default=0.5, ge=0.0)
    detail_delay: float = Field(default=1.0, ge=0.0)
    max_retries: int = Field(default=3, ge=0, le=10)
    order_strategy: Literal["pivot", "lexicographic"] = "pivot"
    orphan_policy: Literal["skip", "fail"] = "skip"

    model_config = {"frozen": True}

    @field_validator("plan_url_template")
    @classmethod
    def validate_plan_url_template(cls, value: str) -> str:
        if "{plan_id}" not in value:
            raise ValueError("plan_url_template must contain '{plan_id}'")
        return value

    @model_validator(mode="after")
    def validate_auth_token(self) -> CloneConfig:
        token = (self.token or "").strip()
        if self.auth == "token":
            if not token:
                raise ValueError("token auth requires a non-empty token")
            return self
        if token:
            raise ValueError("token must be unset when auth is not 'token'")
        if self.auth not in {"azure-cli", "env", "token"}:
            raise ValueError("auth must be one of: azure-cli, env, token")
        return self

    def plan_url(self, plan_id: str) -> str:
        return self.plan_url_template.format(plan_id=plan_id)
