"""Tests for define/derive behavior when a fragment fails to compile.

Atomic mode (the default) registers nothing on failure. Legacy mode keeps the
fragments attached before the failing one.
"""

import pytest

from classforge.core.errors import MemberCompileError, NoSuchClassError
from tests.fakes.compiler import FakeFragmentCompiler
from tests.fakes.context import create_fake_registry


def test_atomic_define_registers_nothing_on_failure() -> None:
    compiler = FakeFragmentCompiler(failing_sources={"def broken(self)"})
    registry = create_fake_registry(compiler=compiler)

    with pytest.raises(MemberCompileError):
        registry.define("Point", ["x = 1", "y = 2"], ["def broken(self)"])

    assert "Point" not in registry
    assert len(registry) == 0


def test_atomic_derive_leaves_base_untouched_on_failure() -> None:
    compiler = FakeFragmentCompiler(failing_sources={"bad"})
    registry = create_fake_registry(compiler=compiler)
    registry.define("Point", ["x = 1"])
    before = registry.get_definition("Point")

    with pytest.raises(MemberCompileError):
        registry.derive("Point3D", "Point", ["z = 5", "bad"])

    assert registry.get_definition("Point") == before
    assert "Point3D" not in registry


def test_legacy_define_keeps_earlier_fragments() -> None:
    compiler = FakeFragmentCompiler(failing_sources={"bad"})
    registry = create_fake_registry(compiler=compiler, atomic_definitions=False)

    with pytest.raises(MemberCompileError):
        registry.define("Point", ["x = 1", "bad", "z = 3"], ["def get_x(self)"])

    assert registry.list_fields("Point") == ["x"]
    assert registry.list_methods("Point") == []


def test_legacy_derive_consumes_base_even_on_failure() -> None:
    compiler = FakeFragmentCompiler(failing_sources={"bad"})
    registry = create_fake_registry(compiler=compiler, atomic_definitions=False)
    registry.define("Point", ["x = 1"])

    with pytest.raises(MemberCompileError):
        registry.derive("Point3D", "Point", ["z = 5"], ["bad"])

    with pytest.raises(NoSuchClassError):
        registry.get_definition("Point")
    assert registry.list_fields("Point3D") == ["x", "z"]


def test_legacy_copy_derive_keeps_base_on_failure() -> None:
    compiler = FakeFragmentCompiler(failing_sources={"bad"})
    registry = create_fake_registry(compiler=compiler, atomic_definitions=False)
    registry.define("Point", ["x = 1"])

    with pytest.raises(MemberCompileError):
        registry.copy_derive("Point3D", "Point", ["bad"])

    assert registry.list_fields("Point") == ["x"]
    assert registry.list_fields("Point3D") == ["x"]
