from typing import Protocol, runtime_checkable, Any, Awaitable, Optional, Union, Callable

import pydantic

LifecycleHook = Callable[..., Union[None, Awaitable[Any], Any]]


@runtime_checkable
class Lifecycle(Protocol):
    """
    Protocol defining the lifecycle contract of a component.

    Both hooks are optional; a missing hook is a no-op.

    Optional lifecycle methods:
        start: Called once dependencies are injected. May be sync or async.
        stop: Called when the component is stopped. May be sync or async.
    """
    start: Optional[LifecycleHook]
    stop: Optional[LifecycleHook]


class StartStop:
    """
    Convenience base class for lifecycle components.

    Subclasses override ``start`` and/or ``stop``; both default to no-ops.
    """

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass


_PLAIN_DATA = (
    str, bytes, bytearray, int, float, complex, bool,
    dict, list, tuple, set, frozenset,
    pydantic.BaseModel,
)


def is_lifecycle(value: Any) -> bool:
    """
    Tell whether a value takes part in the lifecycle.

    Plain data values (builtin scalars and containers, pydantic models,
    ``None``) are only ever used as injectable configuration. Every other
    object is a lifecycle component, whether or not it defines
    ``start``/``stop``.
    """
    if value is None or isinstance(value, _PLAIN_DATA):
        return False
    return True


def lifecycle_hook(value: Any, phase: str) -> Optional[LifecycleHook]:
    if not is_lifecycle(value):
        return None
    hook = getattr(value, phase, None)
    return hook if callable(hook) else None
