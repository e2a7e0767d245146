"""
Public API of cyclus.

This module exports all public interfaces for consumers to use.
Import only from this module (or the package root) for stable API access.
"""

from dependency_injector.wiring import inject

from .components.events import LifecycleEvent, EventSink
from .components.lifecycle import run_start, run_stop
from .components.metadata import (
    ComponentEntry,
    ComponentStatus,
    Declared,
    DependencyBinding,
)
from .components.protocols import Lifecycle, StartStop, is_lifecycle
from .components.registry import using
from .config.loaders import load_file
from .config.settings import SystemSettings
from .config.setup import setup_logging
from .di.injection import DependencyBundle
from .di.providers import get_component, get_system, get_settings
from .di.wiring import wire, unwire
from .errors import CyclusError, GraphError, LifecycleError, UsageError
from .graph import DependencyGraph, build_graph, topological_order
from .replacement import ReplaceOptions
from .system import SystemMap

__all__ = [
    # System
    "SystemMap",
    "ReplaceOptions",
    # Components
    "Lifecycle",
    "StartStop",
    "is_lifecycle",
    "using",
    "Declared",
    "DependencyBinding",
    "DependencyBundle",
    "ComponentEntry",
    "ComponentStatus",
    # Graph
    "DependencyGraph",
    "build_graph",
    "topological_order",
    # Lifecycle
    "run_start",
    "run_stop",
    # Events
    "LifecycleEvent",
    "EventSink",
    # DI
    "get_component",
    "get_system",
    "get_settings",
    "wire",
    "unwire",
    "inject",
    # Config
    "SystemSettings",
    "load_file",
    "setup_logging",
    # Errors
    "CyclusError",
    "GraphError",
    "LifecycleError",
    "UsageError",
]
