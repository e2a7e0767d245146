"""
Dependency graph construction and ordering.

A system's graph is derived from its entries: every binding of every
component contributes an edge from the dependent to its dependency. The graph
is traversed with Kahn's algorithm; ready names are taken by insertion index,
which makes the order deterministic for a given input mapping.
"""
import heapq
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .components.metadata import DependencyBinding
from .components.registry import unwrap
from .errors import GraphError

__all__ = ["DependencyGraph", "build_graph", "topological_order", "dependents_closure"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyGraph:
    """
    Validated dependency graph of a system.

    Attributes:
        names: Component names in insertion order.
        bindings: Bindings declared by each component.
        components: The bare component instances, keyed by name.
    """
    names: tuple[str, ...]
    bindings: Mapping[str, tuple[DependencyBinding, ...]]
    components: Mapping[str, Any] = field(default_factory=dict)

    @property
    def edges(self) -> frozenset[tuple[str, str]]:
        """The ``(dependent, dependency)`` pairs of the graph."""
        return frozenset(
            (name, binding.source)
            for name, bindings in self.bindings.items()
            for binding in bindings
        )

    def dependencies_of(self, name: str) -> tuple[str, ...]:
        """Distinct direct dependencies of ``name``, in declaration order."""
        return tuple(dict.fromkeys(binding.source for binding in self.bindings[name]))

    def dependents_of(self, name: str) -> tuple[str, ...]:
        """Direct dependents of ``name``, in insertion order."""
        return tuple(
            other for other in self.names
            if name in self.dependencies_of(other)
        )


def build_graph(entries: Mapping[str, Any]) -> DependencyGraph:
    """
    Build the dependency graph for a named collection of components.

    :param entries: Names mapped to bare components or ``Declared`` wrappers.
        Mapping order is the insertion order.
    :return: The validated graph.
    :raises GraphError: If a binding references an unknown component.
    """
    bindings: dict[str, tuple[DependencyBinding, ...]] = {}
    components: dict[str, Any] = {}

    for name, value in entries.items():
        component, declared = unwrap(value)
        components[name] = component
        bindings[name] = declared

    names = tuple(bindings)

    for name in names:
        for binding in bindings[name]:
            if binding.source not in bindings:
                logger.error("Unresolved dependency '%s' of component '%s'", binding.source, name)
                raise GraphError.missing_reference(name, binding.source)

    logger.debug("Built dependency graph with %d components", len(names))
    return DependencyGraph(names=names, bindings=bindings, components=components)


def topological_order(graph: DependencyGraph) -> list[str]:
    """
    Order every component so that dependencies precede their dependents.

    Among components whose dependencies are all placed, the one declared
    first is placed next.

    :param graph: The graph to order.
    :return: All names, each exactly once.
    :raises GraphError: If the graph contains a cycle.
    """
    index = {name: position for position, name in enumerate(graph.names)}
    pending = {name: set(graph.dependencies_of(name)) for name in graph.names}
    dependents: dict[str, list[str]] = {name: [] for name in graph.names}
    for name, dependencies in pending.items():
        for dependency in dependencies:
            dependents[dependency].append(name)

    ready = [index[name] for name, dependencies in pending.items() if not dependencies]
    heapq.heapify(ready)

    order: list[str] = []
    while ready:
        name = graph.names[heapq.heappop(ready)]
        order.append(name)
        for dependent in dependents[name]:
            pending[dependent].discard(name)
            if not pending[dependent]:
                heapq.heappush(ready, index[dependent])

    if len(order) != len(graph.names):
        unresolved = [name for name in graph.names if pending[name]]
        cycle = _find_cycle(unresolved, pending)
        logger.error("Dependency cycle detected: %s", " -> ".join(cycle))
        raise GraphError.cyclic(cycle)

    logger.debug("Computed start order: %s", order)
    return order


def _find_cycle(unresolved: list[str], pending: Mapping[str, set[str]]) -> list[str]:
    # Every unresolved name still waits on another unresolved name, so
    # walking those edges from any of them must eventually revisit a node.
    path: list[str] = []
    seen: dict[str, int] = {}
    current = unresolved[0]
    while current not in seen:
        seen[current] = len(path)
        path.append(current)
        current = min(pending[current], key=unresolved.index)
    return path[seen[current]:]


def dependents_closure(graph: DependencyGraph, names: Iterable[str]) -> set[str]:
    """
    Collect ``names`` together with every component that transitively depends on them.

    :param graph: The graph to walk.
    :param names: The starting names.
    :return: The closure, including the starting names.
    """
    reverse: dict[str, set[str]] = {name: set() for name in graph.names}
    for dependent, dependency in graph.edges:
        reverse[dependency].add(dependent)

    closure = set()
    stack = list(names)
    while stack:
        name = stack.pop()
        if name in closure:
            continue
        closure.add(name)
        stack.extend(reverse.get(name, ()))
    return closure
