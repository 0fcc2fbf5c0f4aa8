"""Text codecs turning settings mappings into file contents and back."""

from __future__ import annotations

import json
import sys
from typing import Any, Mapping, Protocol

import tomli_w
import yaml

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from ..config import SettingsFormat
from ..errors import DecodeError, EncodeError


class SettingsCodec(Protocol):
    """Interface every settings serialization must satisfy."""

    extension: str

    def encode(self, data: Mapping[str, Any]) -> str:
        """Serialize a mapping of primitive values to text."""

    def decode(self, text: str) -> dict[str, Any]:
        """Parse text produced by :meth:`encode`."""


class TomlCodec:
    """TOML serialization. ``None`` values are omitted since TOML has no null."""

    extension = SettingsFormat.TOML.extension

    def encode(self, data: Mapping[str, Any]) -> str:
        try:
            return tomli_w.dumps(_drop_none(data))
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"Cannot encode settings as TOML: {exc}") from exc

    def decode(self, text: str) -> dict[str, Any]:
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise DecodeError(f"Invalid TOML: {exc}") from exc
        except RecursionError as exc:
            raise DecodeError("Invalid TOML: nesting is too deep") from exc


class YamlCodec:
    extension = SettingsFormat.YAML.extension

    def encode(self, data: Mapping[str, Any]) -> str:
        try:
            return yaml.safe_dump(dict(data), allow_unicode=False, sort_keys=False)
        except yaml.YAMLError as exc:
            raise EncodeError(f"Cannot encode settings as YAML: {exc}") from exc

    def decode(self, text: str) -> dict[str, Any]:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DecodeError(f"Invalid YAML: {exc}") from exc
        except RecursionError as exc:
            raise DecodeError("Invalid YAML: nesting is too deep") from exc
        if data is None:
            return {}
        return _require_mapping(data)


class JsonCodec:
    extension = SettingsFormat.JSON.extension

    def encode(self, data: Mapping[str, Any]) -> str:
        try:
            return json.dumps(dict(data), indent=2) + "\n"
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"Cannot encode settings as JSON: {exc}") from exc

    def decode(self, text: str) -> dict[str, Any]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"Invalid JSON: {exc}") from exc
        except RecursionError as exc:
            raise DecodeError("Invalid JSON: nesting is too deep") from exc
        return _require_mapping(data)


_CODECS: dict[SettingsFormat, type[SettingsCodec]] = {
    SettingsFormat.TOML: TomlCodec,
    SettingsFormat.YAML: YamlCodec,
    SettingsFormat.JSON: JsonCodec,
}


def codec_for(settings_format: SettingsFormat | str) -> SettingsCodec:
    """Return a codec instance for the given format."""
    try:
        fmt = SettingsFormat(settings_format)
    except ValueError as exc:
        available = ", ".join(item.value for item in SettingsFormat)
        raise ValueError(
            f"Unknown settings format '{settings_format}'. Available: {available}"
        ) from exc
    return _CODECS[fmt]()


def _require_mapping(data: object) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a mapping at the top level, got {type(data).__name__}.")
    return data


def _drop_none(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _drop_none(item) for key, item in value.items() if item is not None}
    if isinstance(value, (list, tuple)):
        return [_drop_none(item) for item in value]
    return value
