"""Tests for FakeMaterializer and FakeFragmentCompiler (Layer 1: Fake Infrastructure Tests).

These tests verify the fake implementations themselves work correctly.
They ensure the test infrastructure is reliable for higher-layer tests.
"""

import pytest

from classforge.core.definition_types import ClassDefinition
from classforge.core.errors import AlreadyMaterializedError
from tests.fakes.compiler import FakeFragmentCompiler
from tests.fakes.materializer import FakeMaterializer


def test_fake_materializer_records_materialize_calls() -> None:
    fake = FakeMaterializer()
    definition = ClassDefinition(name="Point")

    handle = fake.materialize(definition)

    assert handle.class_name == "Point"
    assert fake.materialize_calls == [definition]
    assert fake.is_frozen_externally("Point") is True


def test_fake_materializer_rejects_second_materialize() -> None:
    fake = FakeMaterializer()
    fake.materialize(ClassDefinition(name="Point"))

    with pytest.raises(AlreadyMaterializedError):
        fake.materialize(ClassDefinition(name="Point"))

    assert fake.materialized_names == ["Point"]


def test_fake_materializer_externally_frozen_configurable() -> None:
    fake = FakeMaterializer(externally_frozen={"Legacy"})

    assert fake.is_frozen_externally("Legacy") is True
    assert fake.is_frozen_externally("Point") is False


def test_fake_materializer_instantiate_requires_materialized_name() -> None:
    fake = FakeMaterializer()

    with pytest.raises(KeyError):
        fake.instantiate("Point")

    fake.materialize(ClassDefinition(name="Point"))
    fake.instantiate("Point")

    assert fake.instantiate_calls == ["Point"]


def test_fake_compiler_derives_member_names() -> None:
    fake = FakeFragmentCompiler()

    field = fake.compile_field("Point", "x: int = 1")
    method = fake.compile_method("Point", "def get_sum(self)")

    assert field.name == "x"
    assert method.name == "get_sum"
    assert fake.field_calls == [("Point", "x: int = 1")]
    assert fake.method_calls == [("Point", "def get_sum(self)")]


def test_fake_compiler_fails_configured_sources() -> None:
    fake = FakeFragmentCompiler(failing_sources={"bad"})

    with pytest.raises(SyntaxError):
        fake.compile_field("Point", "bad")
    with pytest.raises(SyntaxError):
        fake.compile_method("Point", "bad")

    assert fake.field_calls == [("Point", "bad")]
