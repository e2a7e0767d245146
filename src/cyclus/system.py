"""
The system map: a named collection of components started in dependency order.

    system = SystemMap({
        "database": Database(),
        "scheduler": Scheduler(),
        "example": using(ExampleComponent(), ["database", "scheduler"]),
    })

    await system.start()    # database, scheduler, example
    await system.stop()     # example, scheduler, database

Dependencies are injected right before a component starts, so a component
replaced with ``replace`` is picked up by its dependents on their next start.
A dependent that is already started keeps the instance it was given until it
is restarted, either explicitly or through ``should_restart``.
"""
import logging
from typing import Any, Iterator, Mapping, Optional, Union

from .components.events import EventSink
from .components.lifecycle import run_start, run_stop
from .components.metadata import ComponentEntry, ComponentStatus, DependencyBinding, Declared
from .config.settings import SystemSettings
from .container import ContainerInterface, create_container
from .errors import UsageError
from .graph import DependencyGraph, build_graph, topological_order
from .replacement import ReplaceOptions, plan_restart

logger = logging.getLogger(__name__)


class SystemMap:
    """
    Registry of named components and their lifecycle status.

    Construction validates the dependency graph and computes the start order;
    it raises ``GraphError`` before anything is started. The system is meant
    to be driven by a single caller: concurrent ``start``/``stop``/``replace``
    calls are not coordinated.
    """

    def __init__(
            self,
            components: Mapping[str, Any],
            settings: Optional[SystemSettings] = None
    ) -> None:
        self._api = create_container(settings)
        self._api.set_api(self)
        self._events = EventSink(enabled=self.settings.emit_events)

        graph = build_graph(components)
        order = topological_order(graph)

        for name in graph.names:
            self._api.register_component(name, graph.components[name], graph.bindings[name])

        self._graph = graph
        self._order = tuple(order)
        self._logger.debug("Created system with order: %s", self._order)

    @property
    def _logger(self) -> logging.Logger:
        return self._api.provided_logger()

    @property
    def settings(self) -> SystemSettings:
        return self._api.provided_settings()

    @property
    def container(self) -> ContainerInterface:
        return self._api

    @property
    def events(self) -> EventSink:
        return self._events

    @property
    def order(self) -> tuple[str, ...]:
        """The current start order."""
        return self._order

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    def __getitem__(self, name: str) -> Any:
        return self._api.provided_component(name)

    def __contains__(self, name: object) -> bool:
        return name in self._api.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._api.entries)

    def __len__(self) -> int:
        return len(self._api.entries)

    def __repr__(self) -> str:
        return "SystemMap({})".format(", ".join(
            f"{name}: {entry.status.value}" for name, entry in self._api.entries.items()
        ))

    def entry(self, name: str) -> ComponentEntry:
        return self._api.entry(name)

    def status(self, name: str) -> ComponentStatus:
        return self._api.entry(name).status

    def statuses(self) -> dict[str, ComponentStatus]:
        return {name: entry.status for name, entry in self._api.entries.items()}

    def bindings(self, name: str) -> tuple[DependencyBinding, ...]:
        return self._api.entry(name).bindings

    async def start(self) -> None:
        """Start every stopped component, dependencies first."""
        self._logger.info("Starting system")
        started = await run_start(
            self._api.entries, self._order, self._api.provided_component, self._events
        )
        self._logger.info("System started (%d components started)", len(started))

    async def stop(self) -> None:
        """Stop every started component, dependents first."""
        self._logger.info("Stopping system")
        stopped = await run_stop(self._api.entries, self._order, self._events)
        self._logger.info("System stopped (%d components stopped)", len(stopped))

    async def replace(
            self,
            components: Mapping[str, Any],
            options: Union[ReplaceOptions, Mapping[str, Any], None] = None,
            *,
            should_restart: Union[bool, list[str], tuple[str, ...], None] = None
    ) -> None:
        """
        Add or replace components.

        Existing names keep their position and status; new names are added
        stopped. The merged graph is validated before anything changes.

        Without ``should_restart`` nothing is stopped or started: started
        dependents keep their current dependency until restarted. With
        ``should_restart=True`` the replaced components and everything that
        depends on them is restarted; with a list of names, the replaced
        components and exactly those names are (an empty list restarts only the
        replaced components). Added components start only when all of their
        dependencies are running.

        Affected components are stopped through their old instances before the
        new ones are committed. If a ``stop`` fails, the replacement is still
        committed and the error is raised; nothing is rolled back.

        :param components: Names mapped to bare components or ``using`` declarations.
        :param options: ``ReplaceOptions`` or a mapping with ``should_restart``.
        :param should_restart: Shortcut for ``options``.
        :raises GraphError: If the merged graph is invalid.
        :raises UsageError: If the options are malformed.
        :raises LifecycleError: If a restarted component fails.
        """
        if isinstance(should_restart, tuple):
            should_restart = list(should_restart)
        options = ReplaceOptions.parse(options, should_restart=should_restart)

        merged: dict[str, Any] = {
            name: Declared(entry.instance, entry.bindings)
            for name, entry in self._api.entries.items()
        }
        merged.update(components)

        graph = build_graph(merged)
        order = tuple(topological_order(graph))

        replaced = list(components)
        added = [name for name in replaced if name not in self._api.entries]
        started = [name for name, entry in self._api.entries.items() if entry.is_started]

        plan = plan_restart(graph, order, replaced, options, started, added)

        self._logger.info("Replacing components: %s", replaced)
        # The merge is committed even if a stop hook fails.
        try:
            if plan.stop:
                await run_stop(self._api.entries, plan.stop, self._events)
        finally:
            for name in replaced:
                self._api.register_component(name, graph.components[name], graph.bindings[name])

            self._graph = graph
            self._order = order

        if plan.start:
            await run_start(
                self._api.entries, plan.start, self._api.provided_component, self._events
            )
        self._logger.info("Replaced %d components (restarted: %s)", len(replaced), list(plan.start))

    async def __aenter__(self) -> "SystemMap":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()
