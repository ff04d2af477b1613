"""Typed JSON config files: load into a record, mutate it, save it back."""

from .config_io import read_config, write_config
from .errors import (
    ConfigCreateError,
    ConfigError,
    ConfigMappingError,
    ConfigPathNotFoundError,
    ConfigReadError,
    ConfigWriteError,
)
from .handle import JsonConfig, create
from .serializer import JsonSerializer, is_transient, transient

__all__ = [
    "ConfigCreateError",
    "ConfigError",
    "ConfigMappingError",
    "ConfigPathNotFoundError",
    "ConfigReadError",
    "ConfigWriteError",
    "JsonConfig",
    "JsonSerializer",
    "create",
    "is_transient",
    "read_config",
    "transient",
    "write_config",
]
