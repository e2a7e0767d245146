import importlib
import logging
import sys
from types import ModuleType
from typing import Iterable, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from ..system import SystemMap

logger = logging.getLogger(__name__)


def _as_modules(modules: Iterable[Union[str, ModuleType]]) -> set[ModuleType]:
    module_objects = set()
    for module in modules:
        if isinstance(module, ModuleType):
            module_objects.add(module)
            continue
        module_obj = sys.modules.get(module)
        if module_obj is None:
            module_obj = importlib.import_module(module)
        module_objects.add(module_obj)
    return module_objects


def wire(
        system: "SystemMap",
        modules: Optional[Iterable[Union[str, ModuleType]]] = None,
        packages: Optional[Iterable[Union[str, ModuleType]]] = None
) -> None:
    """
    Wire modules so ``@inject`` functions in them resolve markers against ``system``.

    :param system: The system providing the components.
    :param modules: Modules (or module names) to wire.
    :param packages: Packages (or package names) to wire recursively.
    """
    module_objects = _as_modules(modules or ())
    package_objects = _as_modules(packages or ())

    logger.debug("Wiring %d modules and %d packages: %s",
                 len(module_objects), len(package_objects),
                 [m.__name__ for m in (*module_objects, *package_objects)])
    system.container.raw_container().wire(
        modules=module_objects,
        packages=package_objects
    )


def unwire(system: "SystemMap") -> None:
    """Undo a previous ``wire`` call for ``system``."""
    logger.debug("Unwiring system container")
    system.container.raw_container().unwire()
