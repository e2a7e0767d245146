import logging
from logging import Logger
from typing import Any, Optional

from dependency_injector import containers, providers

from .components.metadata import ComponentEntry, DependencyBinding
from .config.settings import SystemSettings
from .errors import UsageError

logger = logging.getLogger(__name__)


class SystemContainer(containers.DeclarativeContainer):
    __self__ = providers.Self()
    api = providers.Object(None)

    settings = providers.Object(None)
    logger = providers.Object(None)

    components = providers.Singleton(dict)


class ContainerInterface:
    """Bookkeeping of the component entries held by a ``SystemContainer``."""

    def __init__(self, container: SystemContainer) -> None:
        self._container = container
        self._entries: dict[str, ComponentEntry] = {}

    def raw_container(self) -> SystemContainer:
        return self._container

    @property
    def entries(self) -> dict[str, ComponentEntry]:
        return self._entries

    def entry(self, name: str) -> ComponentEntry:
        try:
            return self._entries[name]
        except KeyError:
            logger.error("Unknown component: %s", name)
            raise UsageError(f"Unknown component: '{name}'") from None

    def provided_component(self, name: str) -> Any:
        """Get the current instance registered under a name."""
        provider = self._container.components().get(name)
        if provider is None:
            logger.error("Unknown component: %s", name)
            raise UsageError(f"Unknown component: '{name}'")
        return provider()

    def provided_settings(self) -> SystemSettings:
        return self._container.settings()

    def provided_logger(self) -> Logger:
        return self._container.logger()

    def register_component(
            self,
            name: str,
            instance: Any,
            bindings: tuple[DependencyBinding, ...]
    ) -> ComponentEntry:
        """
        Add a component, or point an existing entry at a new instance.

        An existing entry keeps its insertion index and status.
        """
        provider = providers.Object(instance)
        self._container.components()[name] = provider

        entry = self._entries.get(name)
        if entry is None:
            entry = ComponentEntry(
                name=name,
                index=len(self._entries),
                provider=provider,
                bindings=bindings,
            )
            self._entries[name] = entry
            logger.debug("Registered component: %s", name)
        else:
            entry.provider = provider
            entry.bindings = bindings
            logger.debug("Replaced component: %s (%s)", name, entry.status.value)
        return entry

    def set_api(self, api: Any) -> None:
        self._container.api.override(
            providers.Object(api)
        )

    def set_logger(self, new_logger: Logger) -> None:
        logger.debug("Setting container logger: %s", new_logger.name if new_logger else None)
        self._container.logger.override(
            providers.Object(new_logger)
        )

    def set_settings(self, settings: SystemSettings) -> None:
        logger.debug("Setting container settings: %s", type(settings).__name__)
        self._container.settings.override(
            providers.Object(settings)
        )


def create_container(
        settings: Optional[SystemSettings] = None
) -> ContainerInterface:
    settings = settings or SystemSettings()
    interface = ContainerInterface(SystemContainer())
    interface.set_settings(settings)
    interface.set_logger(logging.getLogger("cyclus.system").getChild(settings.name))
    return interface
