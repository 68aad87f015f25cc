"""Config loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from plannerclone.contracts.config import CloneConfig
from plannerclone.contracts.exceptions import ConfigError


def load_config(path: str | Path | None = None, **overrides: Any) -> CloneConfig:
    """Load a :class:`CloneConfig` from JSON, applying non-``None`` *overrides* on top.

    With no *path* only defaults and overrides are used.
    """
    raw_payload: dict[str, Any] = {}
    if path is not None:
        config_path = Path(path).expanduser().resolve()
        try:
            loaded: Any = json.loads(config_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(f"failed reading config file: {config_path}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"config file must contain a JSON object: {config_path}")
        raw_payload = loaded

    raw_payload.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return CloneConfig.model_validate(raw_payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc
