"""Utility helpers for the persisted settings package."""

from .paths import SettingsPath, resolve_identity_path, resolve_settings_path

__all__ = ["SettingsPath", "resolve_identity_path", "resolve_settings_path"]
