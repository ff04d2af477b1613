"""Typed handle bound to a single JSON config file."""
from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Generic, Optional, Type, TypeVar

from .config_io import DEFAULT_SERIALIZER, read_config, write_config
from .errors import ConfigCreateError, ConfigWriteError
from .serializer import JsonSerializer

T = TypeVar("T")

_LOGGER = logging.getLogger(__name__)


class JsonConfig(Generic[T]):
    """Load a JSON file into ``record_type`` and write it back on demand.

    The file is read once on construction; if that fails no handle is created
    and one of the :class:`~jconf.errors.ConfigCreateError` subclasses is
    raised instead.

    :meth:`get` hands out the live record without copying it, so callers
    mutate it in place and call :meth:`save` to persist. ``save`` writes the
    file and then reads it back, which means the record afterwards is exactly
    what is on disk: transient fields are back at their declared defaults and
    defaults missing from the original file are now written out.

    Concurrent ``save`` calls on one handle run one at a time. Nothing
    coordinates different handles (or processes) writing the same path.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        record_type: Type[T],
        serializer: Optional[JsonSerializer] = None,
    ) -> None:
        self._path = Path(path)
        self._record_type = record_type
        self._serializer = serializer or DEFAULT_SERIALIZER
        self._lock = threading.Lock()
        self._record: T = self._load()

    @classmethod
    def create(
        cls,
        path: str | os.PathLike[str],
        record_type: Type[T],
        serializer: Optional[JsonSerializer] = None,
    ) -> "JsonConfig[T]":
        """Uses the default pretty-printing serializer unless one is given."""

        return cls(path, record_type, serializer)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def record_type(self) -> Type[T]:
        return self._record_type

    @property
    def serializer(self) -> JsonSerializer:
        return self._serializer

    def get(self) -> T:
        return self._record

    def get_json(self) -> str:
        """Serialize the live record, including unsaved in-place changes."""

        return self._serializer.dumps(self._record, self._record_type)

    def save(self) -> None:
        """Write the live record to :attr:`path`, then reload it from there.

        Raises :class:`ConfigWriteError` when either step fails. If the write
        failed the live record is untouched. If the write went through but the
        reload failed, the file has already been replaced; the handle keeps the
        record it had before the call and should be recreated.
        """

        with self._lock:
            write_config(self._record, self._path, self._serializer, self._record_type)
            try:
                record = self._load()
            except ConfigCreateError as exc:
                _LOGGER.warning(
                    "Wrote %s but could not reload it; the handle may be stale", self._path
                )
                raise ConfigWriteError(
                    f"Couldn't reload config file after writing: {self._path}", exc
                ) from exc
            self._record = record
            _LOGGER.debug("Saved %s", self._path)

    def reload(self) -> None:
        """Re-read :attr:`path`, replacing the live record only on success."""

        with self._lock:
            self._record = self._load()

    def _load(self) -> T:
        return read_config(self._path, self._record_type, self._serializer)

    def __repr__(self) -> str:
        type_name = getattr(self._record_type, "__qualname__", repr(self._record_type))
        return f"{type(self).__name__}(path={str(self._path)!r}, record_type={type_name})"


def create(
    path: str | os.PathLike[str],
    record_type: Type[T],
    serializer: Optional[JsonSerializer] = None,
) -> JsonConfig[T]:
    """Shortcut for :meth:`JsonConfig.create`."""

    return JsonConfig.create(path, record_type, serializer)
