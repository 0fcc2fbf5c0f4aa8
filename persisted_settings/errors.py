"""Exception types raised by the settings persistence layer."""

from __future__ import annotations

from pathlib import Path


class SettingsError(Exception):
    """Base class for every error raised by this package."""


class PathResolutionError(SettingsError):
    """Raised when no standard configuration directory can be determined."""


class LoadError(SettingsError):
    """A stored settings file could not be read or decoded.

    Never escapes :class:`~persisted_settings.settings_store.SettingsStore`;
    it only exists so load failures can be logged uniformly.
    """


class DecodeError(SettingsError, ValueError):
    """Raised by a codec when text cannot be turned into a mapping."""


class EncodeError(SettingsError, ValueError):
    """Raised by a codec when a mapping cannot be serialized."""


class PersistError(SettingsError):
    """Writing a settings value to disk failed."""

    reason = "persist failed"

    def __init__(self, path: Path, settings_type: type | None = None, detail: str = "") -> None:
        self.path = path
        self.settings_type = settings_type
        self.detail = detail
        message = f"{self.reason}: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class DirectoryCreateFailed(PersistError):
    reason = "could not create settings directory"


class EncodeFailed(PersistError):
    reason = "could not encode settings"


class WriteFailed(PersistError):
    reason = "could not write settings file"


__all__ = [
    "DecodeError",
    "DirectoryCreateFailed",
    "EncodeError",
    "EncodeFailed",
    "LoadError",
    "PathResolutionError",
    "PersistError",
    "SettingsError",
    "WriteFailed",
]
