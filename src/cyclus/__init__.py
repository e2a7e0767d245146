"""
cyclus - dependency injection and lifecycle orchestration for in-process components.

This module provides a clean public surface for the library.
Consumers should import from here for stable API access.
"""

from .api import (
    SystemMap,
    ReplaceOptions,
    Lifecycle,
    StartStop,
    is_lifecycle,
    using,
    Declared,
    DependencyBinding,
    DependencyBundle,
    ComponentEntry,
    ComponentStatus,
    DependencyGraph,
    build_graph,
    topological_order,
    run_start,
    run_stop,
    LifecycleEvent,
    EventSink,
    get_component,
    get_system,
    get_settings,
    wire,
    unwire,
    inject,
    SystemSettings,
    load_file,
    setup_logging,
    CyclusError,
    GraphError,
    LifecycleError,
    UsageError,
)

__version__ = "1.0.0"

__all__ = [
    "SystemMap",
    "ReplaceOptions",
    "Lifecycle",
    "StartStop",
    "is_lifecycle",
    "using",
    "Declared",
    "DependencyBinding",
    "DependencyBundle",
    "ComponentEntry",
    "ComponentStatus",
    "DependencyGraph",
    "build_graph",
    "topological_order",
    "run_start",
    "run_stop",
    "LifecycleEvent",
    "EventSink",
    "get_component",
    "get_system",
    "get_settings",
    "wire",
    "unwire",
    "inject",
    "SystemSettings",
    "load_file",
    "setup_logging",
    "CyclusError",
    "GraphError",
    "LifecycleError",
    "UsageError",
]
