from .injection import (
    DependencyBundle,
    resolve_dependencies,
    inject_dependencies,
)
from .providers import (
    get_component,
    get_system,
    get_settings,
)
from .wiring import wire, unwire

__all__ = [
    "DependencyBundle",
    "resolve_dependencies",
    "inject_dependencies",
    "get_component",
    "get_system",
    "get_settings",
    "wire",
    "unwire",
]
