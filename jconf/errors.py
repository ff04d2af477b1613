"""Exceptions raised while loading and saving config files."""
from __future__ import annotations

from typing import Optional


class ConfigError(Exception):
    """Base class for every error raised by :mod:`jconf`."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigCreateError(ConfigError):
    """The load cycle failed; catch this to handle any of its subclasses."""


class ConfigPathNotFoundError(ConfigCreateError):
    """The bound file does not exist."""


class ConfigReadError(ConfigCreateError):
    """The file exists but its contents could not be read."""


class ConfigMappingError(ConfigCreateError):
    """The file was read but could not be mapped onto the target type."""


class ConfigWriteError(ConfigError):
    """Writing the file, or reloading it right after the write, failed."""
