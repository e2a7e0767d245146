"""
Component event sink for lifecycle observation.

Every system owns one ``EventSink``. Handlers registered on it are notified
before and after each component is started or stopped, which is how effects
are observed without shared module-level state.
"""
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Awaitable, Union

logger = logging.getLogger(__name__)

# Type aliases
EventHandler = Callable[[str, Any], Union[None, Awaitable[None]]]
CheckFn = Callable[[str, Any], bool]


class LifecycleEvent(Enum):
    """Events emitted during component lifecycle."""
    BEFORE_START = "before_start"
    AFTER_START = "after_start"
    BEFORE_STOP = "before_stop"
    AFTER_STOP = "after_stop"


@dataclass
class _RegisteredHandler:
    """Internal representation of a registered handler."""
    handler: EventHandler
    check: Optional[CheckFn] = None


class EventSink:
    """Dispatches lifecycle events of one system to registered handlers."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._handlers: dict[LifecycleEvent, list[_RegisteredHandler]] = {}

    def on(
            self,
            event: LifecycleEvent,
            handler: Optional[EventHandler] = None,
            check: Optional[CheckFn] = None
    ) -> Union[EventHandler, Callable[[EventHandler], EventHandler]]:
        """
        Register an event handler for component lifecycle events.

        Can be used as a direct call or as a decorator:

            # Decorator - all components
            @system.events.on(LifecycleEvent.AFTER_START)
            async def started(name, component):
                print(f"Started: {name}")

            # Decorator - with check function
            @system.events.on(LifecycleEvent.AFTER_STOP, check=lambda name, _: name == "database")
            def database_stopped(name, component):
                ...

            # Direct call
            system.events.on(LifecycleEvent.BEFORE_STOP, flush_buffers)

        :param event: The event type to listen for.
        :param handler: The callback (sync or async) receiving the component name
                        and instance. If None, returns a decorator.
        :param check: Optional predicate on (name, instance); the handler is only
                      called when it returns True.
        :return: The handler, or a decorator if handler is None.
        """

        def _register(h: EventHandler) -> EventHandler:
            self._handlers.setdefault(event, []).append(_RegisteredHandler(handler=h, check=check))
            logger.debug("Registered handler for %s (with check: %s)", event.value, check is not None)
            return h

        if handler is None:
            return _register
        return _register(handler)

    async def emit(self, name: str, component: Any, event: LifecycleEvent) -> None:
        """
        Emit an event for a component, awaiting every handler whose check passes.

        :param name: The registered name of the component.
        :param component: The component instance.
        :param event: The event being emitted.
        """
        if not self.enabled or event not in self._handlers:
            return

        handlers_to_call = [
            registered.handler
            for registered in self._handlers[event]
            if registered.check is None or registered.check(name, component)
        ]

        if not handlers_to_call:
            return

        logger.debug("Emitting %s for component %s (%d handlers)",
                     event.value, name, len(handlers_to_call))

        for handler in handlers_to_call:
            try:
                result = handler(name, component)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.exception("Error in event handler for %s on %s: %s",
                                 event.value, name, e)
                raise

    def clear(self, event: Optional[LifecycleEvent] = None) -> None:
        """
        Clear event handlers.

        :param event: If provided, only clear handlers for this event.
                      If None, clear all handlers.
        """
        if event is None:
            self._handlers.clear()
            logger.debug("Cleared all event handlers")
        elif event in self._handlers:
            del self._handlers[event]
            logger.debug("Cleared handlers for %s", event.value)

    def handlers(self, event: LifecycleEvent) -> list[EventHandler]:
        return [registered.handler for registered in self._handlers.get(event, [])]
