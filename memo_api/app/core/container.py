"""
Dependency container.

A registry mapping a name to a factory and a lifetime.  Factories
receive the container itself, so a factory may resolve its own
dependencies.  Resolution is lazy: nothing is built until it is first
requested, and singletons are memoised after that.

``setup_container`` wires the memo application: database, memo
collection, repository and the three services.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from memo_api.app.repositories.memo_repository import MemoRepository
from memo_api.app.services.read_service import MemoReadService
from memo_api.app.services.validation_service import MemoValidationService
from memo_api.app.services.write_service import MemoWriteService
from .config import Settings
from .db import init_db

logger = logging.getLogger(__name__)

Factory = Callable[["DIContainer"], Any]


@dataclass
class Registration:
    factory: Factory
    singleton: bool = False


class DIContainer:
    def __init__(self) -> None:
        self._registrations: Dict[str, Registration] = {}
        self._singletons: Dict[str, Any] = {}

    def register(self, name: str, factory: Factory, singleton: bool = False) -> None:
        self._registrations[name] = Registration(factory=factory, singleton=singleton)
        self._singletons.pop(name, None)

    def resolve(self, name: str) -> Any:
        """Build (or fetch the cached) instance registered under ``name``.

        Raises ``KeyError`` for unknown names.
        """
        registration = self._registrations.get(name)
        if registration is None:
            raise KeyError(f"Dependency '{name}' is not registered")

        if not registration.singleton:
            return registration.factory(self)

        if name not in self._singletons:
            self._singletons[name] = registration.factory(self)
        return self._singletons[name]

    def has(self, name: str) -> bool:
        return name in self._registrations

    def is_resolved(self, name: str) -> bool:
        return name in self._singletons

    @property
    def names(self) -> List[str]:
        return list(self._registrations)

    def validate_dependencies(self) -> bool:
        logger.info("Registered dependencies: %s", ", ".join(self.names))
        return bool(self._registrations)

    def clear(self) -> None:
        self._registrations.clear()
        self._singletons.clear()


def setup_container(settings: Settings) -> DIContainer:
    """Register every component of the memo application."""
    container = DIContainer()
    container.register("settings", lambda c: settings, singleton=True)
    container.register(
        "database",
        lambda c: init_db(c.resolve("settings").database_url),
        singleton=True,
    )
    container.register(
        "memo_collection",
        lambda c: c.resolve("database").get_collection("memos"),
        singleton=True,
    )
    container.register(
        "memo_repository",
        lambda c: MemoRepository(c.resolve("memo_collection"), c.resolve("database")),
        singleton=True,
    )
    container.register("memo_validation_service", lambda c: MemoValidationService(), singleton=True)
    container.register(
        "memo_read_service",
        lambda c: MemoReadService(c.resolve("memo_repository")),
        singleton=True,
    )
    container.register(
        "memo_write_service",
        lambda c: MemoWriteService(c.resolve("memo_repository")),
        singleton=True,
    )
    return container
