import dataclasses

import pytest
from dependency_injector import providers

from cyclus.components.metadata import ComponentEntry, DependencyBinding
from cyclus.errors import LifecycleError
from cyclus.di.injection import (
    DependencyBundle,
    accepts_bundle,
    inject_dependencies,
    resolve_dependencies,
)


class Target:
    pass


def make_entry(instance, bindings) -> ComponentEntry:
    return ComponentEntry(
        name="target",
        index=0,
        provider=providers.Object(instance),
        bindings=tuple(DependencyBinding(field, source) for field, source in bindings),
    )


class TestDependencyBundle:
    """Tests for DependencyBundle."""

    def test_mapping_access(self):
        """Test item access, iteration and length."""
        bundle = DependencyBundle({"database": 1, "scheduler": 2})

        assert bundle["database"] == 1
        assert list(bundle) == ["database", "scheduler"]
        assert len(bundle) == 2
        assert dict(bundle) == {"database": 1, "scheduler": 2}

    def test_attribute_access(self):
        """Test fields are readable as attributes."""
        bundle = DependencyBundle({"database": 1})

        assert bundle.database == 1
        with pytest.raises(AttributeError):
            bundle.missing

    def test_copies_input(self):
        """Test later changes to the source dict are not visible."""
        values = {"database": 1}
        bundle = DependencyBundle(values)
        values["database"] = 2

        assert bundle["database"] == 1


class TestResolveAndInject:
    """Tests for resolve_dependencies and inject_dependencies."""

    def test_resolve_reads_current_values(self):
        """Test sources are looked up at call time."""
        current = {"db": "first"}
        entry = make_entry(Target(), [("database", "db")])

        assert resolve_dependencies(entry, current.__getitem__)["database"] == "first"
        current["db"] = "second"
        assert resolve_dependencies(entry, current.__getitem__)["database"] == "second"

    def test_inject_sets_attributes(self):
        """Test resolved values are assigned under the field names."""
        target = Target()
        entry = make_entry(target, [("database", "db"), ("scheduler", "scheduler")])
        sources = {"db": object(), "scheduler": object()}

        bundle = inject_dependencies(entry, sources.__getitem__)

        assert target.database is sources["db"]
        assert target.scheduler is sources["scheduler"]
        assert bundle["database"] is sources["db"]

    def test_data_target_skipped(self):
        """Test plain data values are not injection targets."""
        data = {"a": 1}
        entry = make_entry(data, [("database", "db")])

        bundle = inject_dependencies(entry, {"db": "x"}.__getitem__)

        assert data == {"a": 1}
        assert bundle["database"] == "x"

    def test_no_bindings(self):
        """Test entries without bindings resolve to an empty bundle."""
        entry = make_entry(Target(), [])

        assert len(inject_dependencies(entry, {}.__getitem__)) == 0


class TestAcceptsBundle:
    """Tests for accepts_bundle."""

    def test_no_parameters(self):
        """Test a hook without parameters does not receive the bundle."""
        class C:
            def start(self):
                pass

        assert not accepts_bundle(C().start)

    def test_required_parameter(self):
        """Test a hook with a required parameter receives the bundle."""
        class C:
            async def start(self, deps):
                pass

        assert accepts_bundle(C().start)

    def test_optional_parameter(self):
        """Test a hook whose parameter has a default does not receive the bundle."""
        class C:
            def start(self, deps=None):
                pass

        assert not accepts_bundle(C().start)

    def test_keyword_only_parameter(self):
        """Test keyword-only parameters do not receive the bundle."""
        class C:
            def start(self, *, deps):
                pass

        assert not accepts_bundle(C().start)


class TestInjectionErrors:
    """Tests for targets that cannot receive fields."""

    def test_slots_target(self):
        """Test a failed assignment is reported as a start failure."""
        class Slotted:
            __slots__ = ("other",)

            def start(self):
                pass

        entry = make_entry(Slotted(), [("database", "db")])

        with pytest.raises(LifecycleError) as exc_info:
            inject_dependencies(entry, {"db": object()}.__getitem__)

        assert exc_info.value.component == "target"
        assert exc_info.value.phase == "start"
        assert isinstance(exc_info.value.__cause__, AttributeError)

    def test_frozen_dataclass_target(self):
        """Test frozen dataclasses are reported the same way."""
        @dataclasses.dataclass(frozen=True)
        class Frozen:
            database: object = None

        entry = make_entry(Frozen(), [("database", "db")])

        with pytest.raises(LifecycleError):
            inject_dependencies(entry, {"db": object()}.__getitem__)
