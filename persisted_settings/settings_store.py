"""Load and save one settings type to its configuration file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import (
    DecodeError,
    DirectoryCreateFailed,
    EncodeError,
    EncodeFailed,
    LoadError,
    WriteFailed,
)
from .io.codecs import SettingsCodec, TomlCodec
from .utils.paths import SettingsPath

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=BaseModel)


class SettingsStore(Generic[S]):
    """Owns load-or-default and persistence for a single settings model."""

    def __init__(self, settings_type: type[S], *, codec: SettingsCodec | None = None) -> None:
        self.settings_type = settings_type
        self.codec: SettingsCodec = codec or TomlCodec()

    @property
    def name(self) -> str:
        return self.settings_type.__name__

    def default(self) -> S:
        return self.settings_type()

    def load_or_default(self, path: SettingsPath) -> S:
        """Return the stored value, or the default when it is missing or unusable."""
        try:
            exists = path.file.exists()
        except OSError as exc:
            logger.warning("Cannot check stored %s at %s: %s", self.name, path.file, exc)
            return self.default()
        if not exists:
            logger.debug("No stored %s at %s; using defaults.", self.name, path.file)
            return self.default()
        try:
            value = self._load(path.file)
        except LoadError as exc:
            logger.warning("Ignoring stored %s: %s", self.name, exc)
            return self.default()
        logger.debug("Loaded %s from %s", self.name, path.file)
        return value

    def persist(self, path: SettingsPath, value: S) -> None:
        """Write ``value`` to ``path.file``, replacing the previous file atomically."""
        if not isinstance(value, self.settings_type):
            raise TypeError(
                f"Expected an instance of {self.name}, got {type(value).__name__}."
            )

        try:
            path.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreateFailed(path.directory, self.settings_type, str(exc)) from exc

        try:
            text = self.codec.encode(value.model_dump(mode="json"))
        except (EncodeError, ValueError, TypeError) as exc:
            raise EncodeFailed(path.file, self.settings_type, str(exc)) from exc
        self._check_reload(path, value, text)

        try:
            _replace_file(path.file, text)
        except OSError as exc:
            raise WriteFailed(path.file, self.settings_type, str(exc)) from exc
        logger.debug("Persisted %s to %s", self.name, path.file)

    def _check_reload(self, path: SettingsPath, value: S, text: str) -> None:
        # Codecs may drop values they cannot represent (TOML has no null).
        try:
            restored = self.settings_type.model_validate(self.codec.decode(text))
        except (DecodeError, ValidationError) as exc:
            raise EncodeFailed(path.file, self.settings_type, f"unreadable output: {exc}") from exc
        if restored != value:
            raise EncodeFailed(
                path.file,
                self.settings_type,
                f"{self.codec.extension} cannot represent the value exactly",
            )

    def _load(self, file: Path) -> S:
        try:
            text = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadError(f"cannot read {file}: {exc}") from exc
        try:
            data = self.codec.decode(text)
        except DecodeError as exc:
            raise LoadError(f"cannot decode {file}: {exc}") from exc
        try:
            return self.settings_type.model_validate(data)
        except ValidationError as exc:
            raise LoadError(f"invalid content in {file}: {exc}") from exc


def _replace_file(target: Path, text: str) -> None:
    handle = NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=str(target.parent),
        prefix=f".{target.name}.",
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(handle.name)
    try:
        with handle:
            handle.write(text)
        os.replace(temp_path, target)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
