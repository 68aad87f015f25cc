from __future__ import annotations

import json
from pathlib import Path

import pytest

from plannerclone.config import load_config
from plannerclone.contracts.exceptions import ConfigError


def test_load_config_without_path_uses_defaults() -> None:
    config = load_config()

    assert config.auth == "azure-cli"
    assert config.task_delay == 0.5


def test_load_config_reads_json_file(tmp_path: Path) -> None:
    path = tmp_path / "plannerclone.json"
    path.write_text(json.dumps({"auth": "env", "detail_delay": 2.5, "order_strategy": "lexicographic"}))

    config = load_config(path)

    assert config.auth == "env"
    assert config.detail_delay == 2.5
    assert config.order_strategy == "lexicographic"


def test_overrides_win_and_none_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "plannerclone.json"
    path.write_text(json.dumps({"auth": "env", "max_retries": 5}))

    config = load_config(path, auth="azure-cli", max_retries=None)

    assert config.auth == "azure-cli"
    assert config.max_retries == 5


def test_missing_file_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="failed reading config file"):
        load_config(tmp_path / "missing.json")


def test_invalid_json_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "plannerclone.json"
    path.write_text("{not json")

    with pytest.raises(ConfigError, match="invalid JSON"):
        load_config(path)


def test_non_object_payload_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "plannerclone.json"
    path.write_text("[1, 2]")

    with pytest.raises(ConfigError, match="JSON object"):
        load_config(path)


def test_validation_failure_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "plannerclone.json"
    path.write_text(json.dumps({"task_delay": -1}))

    with pytest.raises(ConfigError, match="invalid config"):
        load_config(path)
