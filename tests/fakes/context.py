"""Factory functions for creating test registries and contexts."""

from classforge.core.config import InMemoryConfigOps, RegistryConfig
from classforge.core.context import ClassforgeContext
from classforge.core.registry import ClassRegistry
from tests.fakes.compiler import FakeFragmentCompiler
from tests.fakes.materializer import FakeMaterializer


def create_fake_registry(
    compiler: FakeFragmentCompiler | None = None,
    materializer: FakeMaterializer | None = None,
    atomic_definitions: bool = True,
) -> ClassRegistry:
    """Create a registry wired to fakes.

    Args:
        compiler: Optional FakeFragmentCompiler. If None, creates an empty one.
        materializer: Optional FakeMaterializer. If None, creates an empty one.
        atomic_definitions: Passed through to ClassRegistry.
    """
    return ClassRegistry(
        compiler if compiler is not None else FakeFragmentCompiler(),
        materializer if materializer is not None else FakeMaterializer(),
        atomic_definitions=atomic_definitions,
    )


def create_test_context(
    registry: ClassRegistry | None = None,
    config: RegistryConfig | None = None,
    config_ops: InMemoryConfigOps | None = None,
) -> ClassforgeContext:
    """Create test context with in-memory config.

    The registry defaults to the real compiler and materializer so CLI tests
    exercise actual fragments.
    """
    return ClassforgeContext.for_test(registry=registry, config_ops=config_ops, config=config)
