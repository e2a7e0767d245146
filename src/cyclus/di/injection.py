import inspect
import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterator

from ..components.metadata import ComponentEntry
from ..components.protocols import is_lifecycle, LifecycleHook
from ..errors import LifecycleError

logger = logging.getLogger(__name__)

Lookup = Callable[[str], Any]


class DependencyBundle(Mapping):
    """
    Read-only view of the dependencies resolved for one component.

    Supports both ``bundle["database"]`` and ``bundle.database``.
    """

    def __init__(self, values: dict[str, Any]) -> None:
        self._values = dict(values)

    def __getitem__(self, field_name: str) -> Any:
        return self._values[field_name]

    def __getattr__(self, field_name: str) -> Any:
        if field_name.startswith("_"):
            raise AttributeError(field_name)
        try:
            return self._values[field_name]
        except KeyError:
            raise AttributeError(field_name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"DependencyBundle({', '.join(self._values)})"


def resolve_dependencies(entry: ComponentEntry, lookup: Lookup) -> DependencyBundle:
    """
    Resolve the current instances of every dependency of an entry.

    :param entry: The entry whose bindings are resolved.
    :param lookup: Returns the current instance registered under a name.
    :return: The resolved bundle, keyed by field name.
    """
    return DependencyBundle({
        binding.field: lookup(binding.source)
        for binding in entry.bindings
    })


def inject_dependencies(entry: ComponentEntry, lookup: Lookup) -> DependencyBundle:
    """
    Resolve an entry's dependencies and assign them onto its instance.

    Plain data values cannot receive fields; they are skipped as targets.

    :param entry: The entry about to be started.
    :param lookup: Returns the current instance registered under a name.
    :return: The resolved bundle.
    :raises LifecycleError: If a field cannot be assigned on the instance.
    """
    bundle = resolve_dependencies(entry, lookup)
    instance = entry.instance

    if not bundle:
        return bundle

    if not is_lifecycle(instance):
        logger.debug("Skipping injection into data component: %s", entry.name)
        return bundle

    for field_name, value in bundle.items():
        try:
            setattr(instance, field_name, value)
        except (AttributeError, TypeError) as e:
            logger.error("Cannot inject '%s' into %s: %s", field_name, entry.name, e)
            raise LifecycleError(entry.name, "start") from e
        logger.debug("Injected '%s' into %s.%s", type(value).__qualname__, entry.name, field_name)

    return bundle


def accepts_bundle(hook: LifecycleHook) -> bool:
    """Whether a lifecycle hook takes the dependency bundle as an argument."""
    try:
        signature = inspect.signature(hook)
    except (TypeError, ValueError):
        return False

    for parameter in signature.parameters.values():
        if parameter.kind in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
            return parameter.default is parameter.empty
    return False
