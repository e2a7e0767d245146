import sys

import pytest
from dependency_injector.wiring import Provide

from cyclus import SystemMap, SystemSettings, inject, unwire, wire
from cyclus.di import providers as providers_module
from cyclus.di.providers import get_component, get_settings, get_system


class Database:
    def __init__(self, label):
        self.label = label


@inject
def read_database(database=get_component("database")):
    return database


@inject
def read_system(system=get_system()):
    return system


@inject
def read_settings(settings=get_settings()):
    return settings


class TestMarkers:
    """Tests for the Provide markers."""

    def test_functions_exist(self):
        """Test the marker factories are exposed."""
        for name in ("get_component", "get_system", "get_settings"):
            assert callable(getattr(providers_module, name))

    def test_returns_provide_markers(self):
        """Test every factory returns a Provide marker."""
        assert isinstance(get_component("database"), Provide)
        assert isinstance(get_system(), Provide)
        assert isinstance(get_settings(), Provide)


class TestWiring:
    """Tests for wiring a module against a system."""

    @pytest.fixture
    def system(self):
        system = SystemMap(
            {"database": Database("first")},
            settings=SystemSettings(name="wired")
        )
        wire(system, modules=[sys.modules[__name__]])
        yield system
        unwire(system)

    def test_injects_component(self, system):
        """Test the current component instance is injected."""
        assert read_database() is system["database"]

    def test_injects_system_and_settings(self, system):
        """Test the system and its settings are injected."""
        assert read_system() is system
        assert read_settings().name == "wired"

    @pytest.mark.asyncio
    async def test_sees_replaced_component(self, system):
        """Test a replacement is visible without re-wiring."""
        replacement = Database("second")

        await system.replace({"database": replacement})

        assert read_database() is replacement

    def test_explicit_argument_wins(self, system):
        """Test passing the argument bypasses injection."""
        other = Database("other")

        assert read_database(database=other) is other

    def test_wire_by_module_name(self):
        """Test modules may be given by name."""
        system = SystemMap({"database": Database("named")})
        wire(system, modules=[__name__])
        try:
            assert read_database().label == "named"
        finally:
            unwire(system)
