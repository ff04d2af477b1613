from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import pytest

from jconf import (
    ConfigCreateError,
    ConfigError,
    ConfigMappingError,
    ConfigPathNotFoundError,
    ConfigWriteError,
    JsonSerializer,
    read_config,
    write_config,
)


@dataclass
class Thresholds:
    warn: float = 0.5
    fail: float = 0.9


class Unmappable:
    def __init__(self, value: object) -> None:
        self.value = value


def test_read_config_loads_record(tmp_path: Path) -> None:
    path = tmp_path / "thresholds.json"
    path.write_text('{"warn": 0.25}', encoding="utf-8")
    assert read_config(path, Thresholds) == Thresholds(warn=0.25, fail=0.9)


def test_read_config_checks_existence_first(tmp_path: Path) -> None:
    with pytest.raises(ConfigPathNotFoundError) as excinfo:
        read_config(tmp_path / "missing.json", Thresholds)
    assert isinstance(excinfo.value.cause, FileNotFoundError)


def test_read_config_unstatable_path_is_not_found(tmp_path: Path) -> None:
    with pytest.raises(ConfigPathNotFoundError) as excinfo:
        read_config(tmp_path / ("x" * 300), Thresholds)
    assert isinstance(excinfo.value.cause, OSError)


def test_read_config_rejects_unsupported_type(tmp_path: Path) -> None:
    path = tmp_path / "thresholds.json"
    path.write_text('{"value": 1}', encoding="utf-8")
    with pytest.raises(ConfigMappingError):
        read_config(path, Unmappable)


def test_write_config_creates_parent_dirs(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "dir" / "thresholds.json"
    text = write_config(Thresholds(warn=0.1), target)
    assert target.read_text(encoding="utf-8") == text
    assert json.loads(text) == {"warn": 0.1, "fail": 0.9}


def test_write_config_uses_given_serializer(tmp_path: Path) -> None:
    target = tmp_path / "thresholds.json"
    write_config(Thresholds(), target, JsonSerializer.compact())
    assert target.read_text(encoding="utf-8") == '{"warn": 0.5, "fail": 0.9}'


def test_write_config_wraps_serialization_errors(tmp_path: Path) -> None:
    target = tmp_path / "bad.json"
    with pytest.raises(ConfigWriteError):
        write_config(Unmappable(object()), target)
    assert not target.exists()


def test_error_hierarchy() -> None:
    assert issubclass(ConfigMappingError, ConfigCreateError)
    assert issubclass(ConfigCreateError, ConfigError)
    assert issubclass(ConfigWriteError, ConfigError)
    assert not issubclass(ConfigWriteError, ConfigCreateError)

    cause = OSError("disk full")
    error = ConfigWriteError("Couldn't write config file", cause)
    assert str(error) == "Couldn't write config file"
    assert error.message == "Couldn't write config file"
    assert error.cause is cause
