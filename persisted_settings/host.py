"""A minimal host that owns shared settings state and drives the controller."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

from .config import DEFAULT_DOMAIN, SettingsFormat
from .controller import PersistenceController, Registration
from .errors import PersistError
from .io.codecs import SettingsCodec
from .utils.paths import SettingsPath

S = TypeVar("S", bound=BaseModel)


class SettingsHost:
    """Shared state container for registered settings values.

    Application code reads and replaces values freely; nothing is written
    until :meth:`persist` or :meth:`persist_all` is called and the next
    :meth:`update` runs.
    """

    def __init__(self, controller: PersistenceController | None = None) -> None:
        self.controller = controller or PersistenceController()
        self._values: dict[type[BaseModel], BaseModel] = {}
        self._registrations: dict[type[BaseModel], Registration[Any]] = {}

    def add_settings(
        self,
        settings_type: type[S],
        company: str,
        project: str,
        *,
        domain: str = DEFAULT_DOMAIN,
        format: SettingsFormat | str = SettingsFormat.TOML,
        codec: SettingsCodec | None = None,
    ) -> S:
        """Register ``settings_type`` and publish its initial value."""
        initial, registration = self.controller.register(
            settings_type, domain, company, project, format=format, codec=codec
        )
        self._values[settings_type] = initial
        self._registrations[settings_type] = registration
        return initial

    def get(self, settings_type: type[S]) -> S:
        try:
            return self._values[settings_type]  # type: ignore[return-value]
        except KeyError as exc:
            raise KeyError(f"{settings_type.__name__} is not registered.") from exc

    def replace(self, settings_type: type[S], value: S) -> None:
        if settings_type not in self._values:
            raise KeyError(f"{settings_type.__name__} is not registered.")
        if not isinstance(value, settings_type):
            raise TypeError(
                f"Expected an instance of {settings_type.__name__}, got {type(value).__name__}."
            )
        self._values[settings_type] = value

    def path_for(self, settings_type: type[BaseModel]) -> SettingsPath:
        return self._registration(settings_type).path

    def persist(self, settings_type: type[BaseModel]) -> None:
        self.controller.signal_persist(self._registration(settings_type))

    def persist_all(self) -> None:
        self.controller.signal_persist_all()

    def update(self) -> dict[type[BaseModel], PersistError]:
        """Run one scheduling tick over every registered settings type."""
        return self.controller.tick_all(dict(self._values))

    def _registration(self, settings_type: type[BaseModel]) -> Registration[Any]:
        try:
            return self._registrations[settings_type]
        except KeyError as exc:
            raise KeyError(f"{settings_type.__name__} is not registered.") from exc
