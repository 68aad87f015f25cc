"""Translate between Microsoft Graph Planner payloads and plannerclone contracts."""

from __future__ import annotations

from typing import Any

from plannerclone.contracts.exceptions import ProviderError
from plannerclone.contracts.plan import (
    AttachmentReference,
    Bucket,
    ChecklistItem,
    Plan,
    Task,
    TaskDetail,
    TaskDetailUpdate,
)

CHECKLIST_ITEM_TYPE = "#microsoft.graph.plannerChecklistItem"
EXTERNAL_REFERENCE_TYPE = "#microsoft.graph.plannerExternalReference"


def group_container_url(base_url: str, group_id: str) -> str:
    return f"{base_url.rstrip('/')}/groups/{group_id}"


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ProviderError(f"Missing/invalid string at key '{key}'")
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _mapping(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def plan_from_payload(payload: dict[str, Any]) -> Plan:
    container = _mapping(payload, "container")
    return Plan(
        id=_require_str(payload, "id"),
        title=_require_str(payload, "title"),
        container_url=_optional_str(container, "url"),
    )


def bucket_from_payload(payload: dict[str, Any]) -> Bucket:
    return Bucket(
        id=_require_str(payload, "id"),
        name=_require_str(payload, "name"),
        order_key=_optional_str(payload, "orderHint") or "",
        plan_id=_optional_str(payload, "planId"),
    )


def task_from_payload(payload: dict[str, Any]) -> Task:
    priority = payload.get("priority")
    return Task(
        id=_require_str(payload, "id"),
        title=_require_str(payload, "title"),
        priority=priority if isinstance(priority, int) and not isinstance(priority, bool) else None,
        order_key=_optional_str(payload, "orderHint") or "",
        bucket_id=_optional_str(payload, "bucketId"),
    )


def detail_from_payload(task_id: str, payload: dict[str, Any]) -> TaskDetail:
    checklist: dict[str, ChecklistItem] = {}
    for key, item in _mapping(payload, "checklist").items():
        if not isinstance(item, dict):
            continue
        checklist[key] = ChecklistItem(title=item.get("title") or "", is_checked=bool(item.get("isChecked")))

    references: dict[str, AttachmentReference] = {}
    for key, item in _mapping(payload, "references").items():
        if not isinstance(item, dict):
            continue
        references[key] = AttachmentReference(
            key=key,
            alias=item.get("alias") or "",
            type=_optional_str(item, "type"),
            preview_priority=_optional_str(item, "previewPriority"),
            last_modified=_optional_str(item, "lastModifiedDateTime"),
        )

    return TaskDetail(
        task_id=task_id,
        description=_optional_str(payload, "description"),
        checklist=checklist,
        references=references,
        concurrency_token=_optional_str(payload, "@odata.etag") or "",
    )


def update_to_payload(update: TaskDetailUpdate) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    if update.description is not None:
        payload["description"] = update.description
    if update.preview_type is not None:
        payload["previewType"] = update.preview_type
    if update.checklist:
        payload["checklist"] = {
            key: {"@odata.type": CHECKLIST_ITEM_TYPE, "title": item.title, "isChecked": item.is_checked}
            for key, item in update.checklist.items()
        }
    if update.references:
        references: dict[str, Any] = {}
        for key, reference in update.references.items():
            entry: dict[str, Any] = {"@odata.type": EXTERNAL_REFERENCE_TYPE, "alias": reference.alias}
            if reference.type is not None:
                entry["type"] = reference.type
            if reference.preview_priority is not None:
                entry["previewPriority"] = reference.preview_priority
            references[key] = entry
        payload["references"] = references
    return payload
