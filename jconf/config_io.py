"""Helpers for loading and saving configs."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional, Type, TypeVar

from .errors import (
    ConfigMappingError,
    ConfigPathNotFoundError,
    ConfigReadError,
    ConfigWriteError,
)
from .serializer import JsonSerializer

T = TypeVar("T")

_LOGGER = logging.getLogger(__name__)

DEFAULT_SERIALIZER = JsonSerializer()


def read_config(
    path: str | os.PathLike[str],
    record_type: Type[T],
    serializer: Optional[JsonSerializer] = None,
) -> T:
    """Read JSON from ``path`` then map it onto ``record_type``.

    The three failure kinds are checked in order and only the first one is
    raised: :class:`ConfigPathNotFoundError`, :class:`ConfigReadError`,
    :class:`ConfigMappingError`.
    """

    source = Path(path)
    serializer = serializer or DEFAULT_SERIALIZER
    try:
        source.stat()
    except OSError as exc:
        # anything that keeps the file from being found counts as missing
        raise ConfigPathNotFoundError(f"File does not exist: {source}", exc) from exc

    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(f"Failed to read file: {source}", exc) from exc

    try:
        record = serializer.loads(text, record_type)
    except Exception as exc:
        raise ConfigMappingError(
            f"Couldn't map JSON in {source} to {_type_name(record_type)}: {exc}", exc
        ) from exc

    _LOGGER.debug("Loaded %s from %s", _type_name(record_type), source)
    return record


def write_config(
    record: Any,
    path: str | os.PathLike[str],
    serializer: Optional[JsonSerializer] = None,
    record_type: Optional[Type[Any]] = None,
) -> str:
    """Write ``record`` to ``path`` in JSON format and return the written text."""

    target = Path(path)
    serializer = serializer or DEFAULT_SERIALIZER
    try:
        text = serializer.dumps(record, record_type)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except Exception as exc:
        raise ConfigWriteError(f"Couldn't write config file to: {target}", exc) from exc

    _LOGGER.debug("Wrote %d characters to %s", len(text), target)
    return text


def _type_name(record_type: Any) -> str:
    return getattr(record_type, "__qualname__", None) or repr(record_type)
