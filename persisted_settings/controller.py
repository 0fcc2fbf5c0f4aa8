"""Signal-driven persistence for registered settings types."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from threading import Lock
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from .config import SettingsFormat, SettingsIdentity
from .errors import PersistError
from .io.codecs import SettingsCodec, codec_for
from .settings_store import SettingsStore
from .utils.paths import SettingsPath, resolve_identity_path

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=BaseModel)


class PersistRequest(str, Enum):
    """Kinds of persist signals a host can emit."""

    THIS = "this"
    ALL = "all"


class PersistState(str, Enum):
    IDLE = "idle"
    DIRTY = "dirty"


@dataclass(eq=False)
class Registration(Generic[S]):
    """Handle tying one settings type to its file and its signal queues."""

    settings_type: type[S]
    identity: SettingsIdentity
    path: SettingsPath
    store: SettingsStore[S]
    _type_queue: deque[PersistRequest] = field(default_factory=deque, repr=False)
    _all_queue: deque[PersistRequest] = field(default_factory=deque, repr=False)
    _lock: Lock = field(default_factory=Lock, repr=False)

    @property
    def name(self) -> str:
        return self.settings_type.__name__

    @property
    def pending(self) -> bool:
        with self._lock:
            return bool(self._type_queue or self._all_queue)

    @property
    def state(self) -> PersistState:
        return PersistState.DIRTY if self.pending else PersistState.IDLE

    def _enqueue(self, request: PersistRequest) -> None:
        with self._lock:
            if request is PersistRequest.ALL:
                self._all_queue.append(request)
            else:
                self._type_queue.append(request)

    def _drain(self) -> int:
        with self._lock:
            drained = len(self._type_queue) + len(self._all_queue)
            self._type_queue.clear()
            self._all_queue.clear()
        return drained


class PersistenceController:
    """Registers settings types and writes them when a persist signal was seen.

    The host calls :meth:`tick` (or :meth:`tick_all`) once per scheduling cycle
    and may call :meth:`signal_persist` / :meth:`signal_persist_all` any number
    of times in between. A registration with at least one queued signal is
    written exactly once on its next tick; one without signals does no I/O.
    """

    def __init__(self) -> None:
        self._registrations: dict[type[BaseModel], Registration[Any]] = {}
        self._lock = Lock()

    def register(
        self,
        settings_type: type[S],
        domain: str,
        company: str,
        project: str,
        *,
        format: SettingsFormat | str = SettingsFormat.TOML,
        codec: SettingsCodec | None = None,
    ) -> tuple[S, Registration[S]]:
        """Resolve the file for ``settings_type`` and load its initial value.

        Raises :class:`~persisted_settings.errors.PathResolutionError` when the
        configuration directory cannot be determined.
        """
        identity = SettingsIdentity(
            domain=domain, company=company, project=project, format=format
        )
        return self.register_identity(settings_type, identity, codec=codec)

    def register_identity(
        self,
        settings_type: type[S],
        identity: SettingsIdentity,
        *,
        codec: SettingsCodec | None = None,
    ) -> tuple[S, Registration[S]]:
        with self._lock:
            if settings_type in self._registrations:
                raise ValueError(f"{settings_type.__name__} is already registered.")

            path = resolve_identity_path(identity)
            store = SettingsStore(settings_type, codec=codec or codec_for(identity.format))
            initial = store.load_or_default(path)
            registration = Registration(
                settings_type=settings_type,
                identity=identity,
                path=path,
                store=store,
            )
            self._registrations[settings_type] = registration

        logger.debug("Registered %s at %s", registration.name, path.file)
        return initial, registration

    def registrations(self) -> Iterator[Registration[Any]]:
        with self._lock:
            items = list(self._registrations.values())
        return iter(items)

    def registration_for(self, settings_type: type[S]) -> Registration[S]:
        with self._lock:
            registration = self._registrations.get(settings_type)
        if registration is None:
            raise KeyError(f"{settings_type.__name__} is not registered.")
        return registration

    def signal_persist(self, registration: Registration[Any]) -> None:
        """Request that one settings type is written on its next tick."""
        registration._enqueue(PersistRequest.THIS)

    def signal_persist_all(self) -> None:
        """Request that every registered settings type is written on its next tick."""
        for registration in self.registrations():
            registration._enqueue(PersistRequest.ALL)

    def tick(self, registration: Registration[S], current_value: S) -> PersistError | None:
        """Drain queued signals and persist ``current_value`` if any were present.

        Persist failures are logged and returned; the signals count as handled
        either way, so a failed write is only retried on the next signal.
        """
        if not registration._drain():
            return None

        snapshot = current_value.model_copy(deep=True)
        try:
            registration.store.persist(registration.path, snapshot)
        except PersistError as exc:
            logger.error("Failed to persist %s: %s", registration.name, exc)
            return exc
        return None

    def tick_all(
        self,
        current_values: Mapping[type[BaseModel], BaseModel],
        *,
        max_workers: int | None = None,
    ) -> dict[type[BaseModel], PersistError]:
        """Run :meth:`tick` for every registration with a value in ``current_values``.

        Distinct settings types are independent, so they are ticked on a thread
        pool. Returns the failures keyed by settings type.

        An exception other than :class:`PersistError` (a wrong value type, for
        instance) is raised only after every other registration has finished its
        tick; their persist failures are logged by :meth:`tick` before that.
        """
        due = [
            registration
            for registration in self.registrations()
            if registration.settings_type in current_values
        ]
        if not due:
            return {}

        failures: dict[type[BaseModel], PersistError] = {}
        with ThreadPoolExecutor(max_workers=max_workers or len(due)) as executor:
            futures = {
                executor.submit(
                    self.tick, registration, current_values[registration.settings_type]
                ): registration
                for registration in due
            }
            unexpected: list[BaseException] = []
            for future, registration in futures.items():
                exc = future.exception()
                if exc is not None:
                    logger.error("Tick for %s raised %r", registration.name, exc)
                    unexpected.append(exc)
                    continue
                error = future.result()
                if error is not None:
                    failures[registration.settings_type] = error
        if unexpected:
            raise unexpected[0]
        return failures
