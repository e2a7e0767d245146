"""
Replacement planning.

When components of a running system are replaced, ``plan_restart`` decides
which components must be stopped and started again so that they observe the
new instances.
"""
import logging
from typing import Any, Iterable, Mapping, Optional, Union

import pydantic

from .errors import UsageError
from .graph import DependencyGraph, dependents_closure

__all__ = ["ReplaceOptions", "RestartPlan", "plan_restart"]

logger = logging.getLogger(__name__)


class ReplaceOptions(pydantic.BaseModel):
    """
    Options accepted by ``SystemMap.replace``.

    ``should_restart`` is ``None``/``False`` for a silent swap, ``True`` to
    restart every transitive dependent of the replaced components, or a list
    of names to restart in addition to the replaced components. An empty list
    restarts only the replaced components.
    """
    model_config = pydantic.ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    should_restart: Optional[Union[pydantic.StrictBool, list[pydantic.StrictStr]]] = pydantic.Field(
        default=None,
        alias="shouldRestart",
    )

    @classmethod
    def parse(cls, options: Union["ReplaceOptions", Mapping[str, Any], None] = None, **overrides: Any) -> "ReplaceOptions":
        """
        Build options from an instance, a mapping and/or keyword overrides.

        :raises UsageError: If the options are malformed.
        """
        if isinstance(options, ReplaceOptions):
            values = options.model_dump(exclude_unset=True)
        elif options is None:
            values = {}
        elif isinstance(options, Mapping):
            values = dict(options)
        else:
            raise UsageError(f"Replace options must be a mapping or ReplaceOptions, got {type(options).__name__}")

        values.update({key: value for key, value in overrides.items() if value is not None})

        try:
            return cls.model_validate(values)
        except pydantic.ValidationError as e:
            logger.error("Invalid replace options %r: %s", values, e)
            raise UsageError(f"Invalid replace options: {e}") from e

    @property
    def restarts(self) -> bool:
        return self.should_restart is not None and self.should_restart is not False


class RestartPlan(pydantic.BaseModel):
    """Names to stop and start, both in global start order."""
    model_config = pydantic.ConfigDict(frozen=True)

    stop: tuple[str, ...] = ()
    start: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.stop and not self.start


def plan_restart(
        graph: DependencyGraph,
        order: Iterable[str],
        replaced: Iterable[str],
        options: ReplaceOptions,
        started: Iterable[str],
        added: Iterable[str] = ()
) -> RestartPlan:
    """
    Compute which components a replacement stops and starts again.

    :param graph: The merged graph, after the replacement.
    :param order: The merged global start order.
    :param replaced: Names given to ``replace`` (updated or added).
    :param options: The replace options.
    :param started: Names that were started before the replacement.
    :param added: Names that did not exist before the replacement. They are
        started only when every one of their dependencies will be running.
    :return: The plan. ``stop`` lists names to stop (to be walked in reverse),
        ``start`` lists names to start.
    :raises UsageError: If an explicit restart name is not part of the system.
    """
    replaced = list(replaced)
    should_restart = options.should_restart

    if not options.restarts:
        return RestartPlan()

    if should_restart is True:
        affected = dependents_closure(graph, replaced)
    else:
        unknown = [name for name in should_restart if name not in graph.names]
        if unknown:
            logger.error("Cannot restart unknown components: %s", unknown)
            raise UsageError(f"Cannot restart unknown components: {', '.join(unknown)}")
        affected = set(replaced) | set(should_restart)

    started = set(started)
    added = set(added)

    # An added name only starts once all of its dependencies will be running.
    running = set(started)
    start = []
    for name in order:
        if name not in affected:
            continue
        if name in started:
            start.append(name)
        elif name in added:
            waiting = [dep for dep in graph.dependencies_of(name) if dep not in running]
            if waiting:
                logger.debug("Leaving %s stopped, waiting on %s", name, waiting)
                continue
            start.append(name)
            running.add(name)

    plan = RestartPlan(
        stop=tuple(name for name in order if name in affected and name in started),
        start=tuple(start),
    )
    logger.debug("Restart plan: stop %s, start %s", plan.stop, plan.start)
    return plan
