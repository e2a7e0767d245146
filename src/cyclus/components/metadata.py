from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Iterable, Union

from dependency_injector import providers

from ..errors import UsageError


class ComponentStatus(Enum):
    STOPPED = "stopped"
    STARTED = "started"


@dataclass(frozen=True)
class DependencyBinding:
    """Inject the component registered as ``source`` into attribute ``field``."""
    field: str
    source: str

    def __str__(self) -> str:
        if self.field == self.source:
            return self.field
        return f"{self.field} <- {self.source}"


DependencyDeclaration = Union[Iterable[str], Mapping[str, str]]


@dataclass(frozen=True)
class Declared:
    """A component wrapped together with its dependency bindings."""
    component: Any
    bindings: tuple[DependencyBinding, ...] = ()


def bindings_from_declaration(declaration: DependencyDeclaration) -> tuple[DependencyBinding, ...]:
    """
    Normalise a dependency declaration into an ordered tuple of bindings.

    :param declaration: Either a sequence of names (each is both the field and
        the source) or a mapping of field name to source name.
    :return: The bindings, in declaration order.
    :raises UsageError: If the declaration is malformed or repeats a field.
    """
    if isinstance(declaration, str):
        raise UsageError(
            f"Dependency declaration must be a sequence or mapping of names, got string {declaration!r}"
        )

    if isinstance(declaration, Mapping):
        pairs = list(declaration.items())
    else:
        pairs = [(name, name) for name in declaration]

    bindings = []
    seen = set()
    for field_name, source in pairs:
        if not isinstance(field_name, str) or not isinstance(source, str):
            raise UsageError(
                f"Dependency names must be strings, got {field_name!r} -> {source!r}"
            )
        if field_name in seen:
            raise UsageError(f"Dependency field '{field_name}' declared more than once")
        seen.add(field_name)
        bindings.append(DependencyBinding(field=field_name, source=source))

    return tuple(bindings)


@dataclass
class ComponentEntry:
    """
    Registry bookkeeping for one named component.

    The instance itself lives in a ``dependency_injector`` object provider,
    so the same entry can be re-pointed at a replacement instance.
    """
    name: str
    index: int
    provider: providers.Object
    bindings: tuple[DependencyBinding, ...] = field(default_factory=tuple)
    status: ComponentStatus = ComponentStatus.STOPPED

    @property
    def instance(self) -> Any:
        return self.provider()

    @property
    def is_started(self) -> bool:
        return self.status is ComponentStatus.STARTED

    @property
    def sources(self) -> tuple[str, ...]:
        return tuple(binding.source for binding in self.bindings)
