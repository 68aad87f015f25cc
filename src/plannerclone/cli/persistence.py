"""Result record persistence."""

from __future__ import annotations

import json
from pathlib import Path

from plannerclone.contracts.clone import CloneResult
from plannerclone.contracts.exceptions import CloneError


def result_json(result: CloneResult) -> str:
    return json.dumps(result.model_dump(mode="json", by_alias=True), indent=2)


def persist_result(*, result: CloneResult, path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(result_json(result) + "\n", encoding="utf-8")
    except OSError as exc:
        raise CloneError(f"failed to persist result record: {path}") from exc
