"""Serialization helpers for settings files."""

from .codecs import JsonCodec, SettingsCodec, TomlCodec, YamlCodec, codec_for

__all__ = ["JsonCodec", "SettingsCodec", "TomlCodec", "YamlCodec", "codec_for"]
