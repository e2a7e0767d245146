from typing import Any

from dependency_injector.wiring import Provide, provided

from ..config.settings import SystemSettings


def get_component(name: str) -> Any:
    """
    Marker for the instance currently registered under ``name``.

    Resolved each time the ``@inject``-decorated function is called, so a
    replaced component is picked up without re-wiring:

        @inject
        async def handler(database=get_component("database")):
            ...
    """
    return Provide["api", provided()[name]]


def get_system() -> Any:
    return Provide["api", provided()]


def get_settings() -> SystemSettings:
    return Provide["settings", provided()]
