from typing import Iterable, Optional

__all__ = ["CyclusError", "GraphError", "LifecycleError", "UsageError"]


class CyclusError(Exception):
    """Base class for every error raised by cyclus."""


class GraphError(CyclusError):
    """
    Raised when the dependency graph of a system cannot be built.

    Either a binding references a component that does not exist
    (``missing`` and ``dependent`` are set), or the bindings form a cycle
    (``cycle`` holds the names involved).
    """

    def __init__(
            self,
            message: str,
            *,
            missing: Optional[str] = None,
            dependent: Optional[str] = None,
            cycle: Optional[Iterable[str]] = None
    ):
        super().__init__(message)
        self.missing = missing
        self.dependent = dependent
        self.cycle = tuple(cycle) if cycle is not None else ()

    @classmethod
    def missing_reference(cls, dependent: str, missing: str) -> "GraphError":
        return cls(
            f"Component '{dependent}' depends on '{missing}', "
            "which is not part of the system",
            missing=missing,
            dependent=dependent
        )

    @classmethod
    def cyclic(cls, names: Iterable[str]) -> "GraphError":
        names = tuple(names)
        return cls(
            f"Dependency cycle detected between: {', '.join(names)}",
            cycle=names
        )


class LifecycleError(CyclusError):
    """
    Raised when a component's ``start`` or ``stop`` hook fails.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, component: str, phase: str):
        super().__init__(f"Component '{component}' failed to {phase}")
        self.component = component
        self.phase = phase


class UsageError(CyclusError, ValueError):
    """Raised when an operation is called with malformed arguments."""
