"""Conversion between JSON text and typed config records."""
from __future__ import annotations

import json
import types
import typing
from collections import abc
from dataclasses import MISSING, dataclass, field, fields, is_dataclass
from functools import lru_cache
from typing import Any, Dict, Iterator, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter

T = TypeVar("T")

TRANSIENT = "transient"


def transient(default: Any = MISSING, *, default_factory: Any = MISSING) -> Any:
    """Declare a dataclass field that is never read from or written to JSON.

    The field keeps its declared default whenever a record is loaded, even if
    the file happens to contain a value for it.
    """

    return field(default=default, default_factory=default_factory, metadata={TRANSIENT: True})


@dataclass(frozen=True)
class JsonSerializer:
    """JSON formatting options plus the record <-> JSON mapping.

    Records can be standard dataclasses, pydantic models, anything else
    pydantic can validate, or classes providing a ``from_dict``/``as_dict``
    pair that convert themselves.
    """

    indent: Optional[int] = 2
    ensure_ascii: bool = False
    sort_keys: bool = False

    @classmethod
    def compact(cls) -> "JsonSerializer":
        """Serializer writing single-line JSON."""

        return cls(indent=None)

    def dumps(self, record: Any, record_type: Optional[Type[Any]] = None) -> str:
        """Return ``record`` as JSON text."""

        return json.dumps(
            self.to_payload(record, record_type),
            indent=self.indent,
            ensure_ascii=self.ensure_ascii,
            sort_keys=self.sort_keys,
        )

    def loads(self, text: str, record_type: Type[T]) -> T:
        """Parse ``text`` and map it onto a new ``record_type`` instance."""

        return self.from_payload(json.loads(text), record_type)

    def to_payload(self, record: Any, record_type: Optional[Type[Any]] = None) -> Any:
        target = record_type or type(record)
        if _maps_itself(target):
            return record.as_dict()
        payload = _adapter(target).dump_python(record, mode="json", by_alias=True)
        _drop_transient(record, payload)
        return payload

    def from_payload(self, payload: Any, record_type: Type[T]) -> T:
        if _maps_itself(record_type):
            return record_type.from_dict(payload)  # type: ignore[attr-defined]
        return _adapter(record_type).validate_python(_strip_transient(record_type, payload))


def is_transient(record_type: Any, name: str) -> bool:
    """Return ``True`` when field ``name`` of ``record_type`` is excluded from JSON."""

    return any(attr == name and excluded for attr, _, _, excluded in _record_fields(record_type))


@lru_cache(maxsize=None)
def _adapter(record_type: Any) -> TypeAdapter:
    return TypeAdapter(record_type)


def _maps_itself(record_type: Any) -> bool:
    return callable(getattr(record_type, "from_dict", None)) and callable(
        getattr(record_type, "as_dict", None)
    )


def _type_hints(record_type: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(record_type)
    except NameError:
        # names from a local scope; fall back to the annotations as written
        return {}


def _record_fields(record_type: Any) -> Iterator[Tuple[str, str, Any, bool]]:
    """Yield ``(attribute, json key, annotation, transient)`` for a record class."""

    if not isinstance(record_type, type):
        return
    if issubclass(record_type, BaseModel):
        for name, info in record_type.model_fields.items():
            yield name, info.alias or name, info.annotation, bool(info.exclude)
    elif is_dataclass(record_type):
        hints = _type_hints(record_type)
        for field_info in fields(record_type):
            annotation = hints.get(field_info.name, field_info.type)
            yield field_info.name, field_info.name, annotation, bool(field_info.metadata.get(TRANSIENT))


def _drop_transient(value: Any, payload: Any) -> None:
    """Remove transient fields from a dumped payload, in place."""

    if isinstance(value, abc.Mapping) and isinstance(payload, dict):
        for item, dumped in zip(value.values(), payload.values()):
            _drop_transient(item, dumped)
    elif isinstance(value, (list, tuple)) and isinstance(payload, list):
        for item, dumped in zip(value, payload):
            _drop_transient(item, dumped)
    elif isinstance(payload, dict):
        for attr, key, _, excluded in _record_fields(type(value)):
            if excluded:
                payload.pop(key, None)
            elif key in payload:
                _drop_transient(getattr(value, attr), payload[key])


def _strip_transient(record_type: Any, payload: Any) -> Any:
    """Return ``payload`` without the keys of transient fields of ``record_type``."""

    origin = typing.get_origin(record_type)
    args = typing.get_args(record_type)

    if origin is Union or origin is types.UnionType:
        candidates = [arg for arg in args if arg is not type(None)]
        # only Optional[X] is unambiguous
        return _strip_transient(candidates[0], payload) if len(candidates) == 1 else payload
    if origin in (list, abc.Sequence) and args and isinstance(payload, list):
        return [_strip_transient(args[0], item) for item in payload]
    if origin in (dict, abc.Mapping) and len(args) == 2 and isinstance(payload, dict):
        return {key: _strip_transient(args[1], item) for key, item in payload.items()}
    if not isinstance(payload, dict):
        return payload

    record = list(_record_fields(record_type))
    if not record:
        return payload
    dropped = {key for _, key, _, excluded in record if excluded}
    children = {key: annotation for _, key, annotation, excluded in record if not excluded}
    return {
        key: _strip_transient(children[key], item) if key in children else item
        for key, item in payload.items()
        if key not in dropped
    }
