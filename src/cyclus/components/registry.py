import logging
from typing import Any, Optional, overload, Callable, TypeVar, Union

from .metadata import (
    Declared,
    DependencyBinding,
    DependencyDeclaration,
    bindings_from_declaration,
)
from .protocols import is_lifecycle

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=Any)


@overload
def using(component: C, dependencies: DependencyDeclaration) -> Declared: ...


@overload
def using(*, dependencies: DependencyDeclaration) -> Callable[[C], Declared]: ...


def using(
        component: Optional[C] = None,
        dependencies: Optional[DependencyDeclaration] = None,
        **kwargs: str
) -> Union[Declared, Callable[[C], Declared]]:
    """
    Declare which components must be injected into ``component`` before it starts.

    Can be used as a direct call or as a reusable wrapper:

        using(ExampleComponent(), ["database", "scheduler"])
        using(ExampleComponent(), {"database": "db"})
        using(ExampleComponent(), database="db")

        needs_db = using(dependencies=["database"])
        SystemMap({"database": Database(), "repo": needs_db(Repository())})

    Wrapping an already declared component merges the bindings, later ones
    winning on the same field.

    :param component: The component instance.
    :param dependencies: Sequence of names, or mapping of field name to source name.
    :param kwargs: Additional field name to source name bindings.
    :return: A ``Declared`` wrapper, or a decorator if component is None.
    """
    declaration = dict(
        (binding.field, binding.source)
        for binding in bindings_from_declaration(dependencies or ())
    )
    for field_name, source in kwargs.items():
        declaration[field_name] = source
    bindings = bindings_from_declaration(declaration)

    def decorator(obj: C) -> Declared:
        if isinstance(obj, Declared):
            logger.debug("Extending existing declaration of %s", component_str(obj.component))
            return Declared(obj.component, bindings_from_declaration({
                **{b.field: b.source for b in obj.bindings},
                **declaration
            }))
        return Declared(obj, bindings)

    return decorator if component is None else decorator(component)


def unwrap(value: Any) -> tuple[Any, tuple[DependencyBinding, ...]]:
    """
    Split a registry value into its instance and bindings.

    :param value: A bare component or a ``Declared`` wrapper.
    :return: The instance and its (possibly empty) bindings.
    """
    if isinstance(value, Declared):
        return value.component, value.bindings
    return value, ()


def component_str(component: Any) -> str:
    """
    Get a short string representation of a component.

    :param component: The component instance.
    :return: The class name for lifecycle components, the type name for data values.
    """
    if is_lifecycle(component):
        return getattr(component, "__qualname__", type(component).__qualname__)
    return f"<{type(component).__name__}>"
