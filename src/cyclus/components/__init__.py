from .metadata import (
    ComponentStatus,
    ComponentEntry,
    Declared,
    DependencyBinding,
    DependencyDeclaration,
    bindings_from_declaration,
)
from .protocols import (
    Lifecycle,
    StartStop,
    is_lifecycle,
)
from .registry import (
    using,
    unwrap,
    component_str,
)
from .events import (
    LifecycleEvent,
    EventSink,
)
from .lifecycle import (
    run_start,
    run_stop,
    start_component,
    stop_component,
)

__all__ = [
    "ComponentStatus",
    "ComponentEntry",
    "Declared",
    "DependencyBinding",
    "DependencyDeclaration",
    "bindings_from_declaration",
    "Lifecycle",
    "StartStop",
    "is_lifecycle",
    "using",
    "unwrap",
    "component_str",
    "LifecycleEvent",
    "EventSink",
    "run_start",
    "run_stop",
    "start_component",
    "stop_component",
]
