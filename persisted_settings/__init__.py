"""Top-level package for persisted settings."""

from .config import SettingsFormat, SettingsIdentity
from .controller import PersistenceController, PersistRequest, PersistState, Registration
from .errors import (
    DirectoryCreateFailed,
    EncodeFailed,
    PathResolutionError,
    PersistError,
    SettingsError,
    WriteFailed,
)
from .host import SettingsHost
from .settings_store import SettingsStore
from .utils.paths import SettingsPath, resolve_settings_path

__all__ = [
    "DirectoryCreateFailed",
    "EncodeFailed",
    "PathResolutionError",
    "PersistError",
    "PersistRequest",
    "PersistState",
    "PersistenceController",
    "Registration",
    "SettingsError",
    "SettingsFormat",
    "SettingsHost",
    "SettingsIdentity",
    "SettingsPath",
    "SettingsStore",
    "WriteFailed",
    "resolve_settings_path",
]
