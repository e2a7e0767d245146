import inspect
import logging
from typing import Any, Callable, Iterable, Mapping, Optional

from .events import EventSink, LifecycleEvent
from .metadata import ComponentEntry, ComponentStatus
from .protocols import lifecycle_hook, is_lifecycle
from ..di.injection import inject_dependencies, accepts_bundle
from ..errors import LifecycleError

logger = logging.getLogger(__name__)

Lookup = Callable[[str], Any]


async def _call_hook(entry: ComponentEntry, phase: str, *args: Any) -> None:
    hook = lifecycle_hook(entry.instance, phase)
    if hook is None:
        logger.debug("Component has no %s method: %s", phase, entry.name)
        return
    try:
        result = hook(*args)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        logger.error("Component %s failed to %s: %s", entry.name, phase, e)
        raise LifecycleError(entry.name, phase) from e


async def start_component(
        entry: ComponentEntry,
        lookup: Lookup,
        events: Optional[EventSink] = None
) -> bool:
    """
    Inject the dependencies of a single component and start it.

    :param entry: The entry to start.
    :param lookup: Returns the current instance registered under a name.
    :param events: Sink notified before and after the start.
    :return: False if the entry was already started, True otherwise.
    :raises LifecycleError: If the component's ``start`` fails.
    """
    if entry.status is ComponentStatus.STARTED:
        logger.debug("Component already started: %s", entry.name)
        return False

    if events is not None and is_lifecycle(entry.instance):
        await events.emit(entry.name, entry.instance, LifecycleEvent.BEFORE_START)

    bundle = inject_dependencies(entry, lookup)
    hook = lifecycle_hook(entry.instance, "start")

    logger.debug("Starting component: %s", entry.name)
    if hook is not None and accepts_bundle(hook):
        await _call_hook(entry, "start", bundle)
    else:
        await _call_hook(entry, "start")

    entry.status = ComponentStatus.STARTED
    logger.debug("Component started: %s", entry.name)

    if events is not None and is_lifecycle(entry.instance):
        await events.emit(entry.name, entry.instance, LifecycleEvent.AFTER_START)
    return True


async def stop_component(
        entry: ComponentEntry,
        events: Optional[EventSink] = None
) -> bool:
    """
    Stop a single component.

    :param entry: The entry to stop.
    :param events: Sink notified before and after the stop.
    :return: False if the entry was already stopped, True otherwise.
    :raises LifecycleError: If the component's ``stop`` fails.
    """
    if entry.status is ComponentStatus.STOPPED:
        logger.debug("Component not started: %s", entry.name)
        return False

    if events is not None and is_lifecycle(entry.instance):
        await events.emit(entry.name, entry.instance, LifecycleEvent.BEFORE_STOP)

    logger.debug("Stopping component: %s", entry.name)
    await _call_hook(entry, "stop")

    entry.status = ComponentStatus.STOPPED
    logger.debug("Component stopped: %s", entry.name)

    if events is not None and is_lifecycle(entry.instance):
        await events.emit(entry.name, entry.instance, LifecycleEvent.AFTER_STOP)
    return True


async def run_start(
        entries: Mapping[str, ComponentEntry],
        order: Iterable[str],
        lookup: Optional[Lookup] = None,
        events: Optional[EventSink] = None
) -> list[str]:
    """
    Start the given components one after the other, front to back.

    Each ``start`` (sync or async) completes before the next one begins.
    Components already started are skipped. A failure aborts the run;
    components started so far stay started.

    :param entries: Entries by name.
    :param order: Names to start, dependencies first.
    :param lookup: Returns the current instance registered under a name.
        Defaults to reading ``entries``.
    :param events: Sink notified of each transition.
    :return: The names actually started, in order.
    :raises LifecycleError: If a component's ``start`` fails.
    """
    if lookup is None:
        def lookup(name: str) -> Any:
            return entries[name].instance

    started = []
    for name in order:
        if await start_component(entries[name], lookup, events):
            started.append(name)
    return started


async def run_stop(
        entries: Mapping[str, ComponentEntry],
        order: Iterable[str],
        events: Optional[EventSink] = None
) -> list[str]:
    """
    Stop the given components one after the other, back to front.

    ``order`` is the start order; it is walked in reverse so dependents stop
    before their dependencies. Components already stopped are skipped.

    :param entries: Entries by name.
    :param order: Names to stop, in start order.
    :param events: Sink notified of each transition.
    :return: The names actually stopped, in order.
    :raises LifecycleError: If a component's ``stop`` fails.
    """
    stopped = []
    for name in reversed(list(order)):
        if await stop_component(entries[name], events):
            stopped.append(name)
    return stopped
