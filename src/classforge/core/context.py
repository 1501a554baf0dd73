"""Application context with dependency injection."""

import logging
from dataclasses import dataclass

from classforge.core.compiler.real import PythonFragmentCompiler
from classforge.core.config import ConfigOps, FilesystemConfigOps, InMemoryConfigOps, RegistryConfig
from classforge.core.materializer.real import TypeMaterializer
from classforge.core.registry import ClassRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassforgeContext:
    """Immutable context holding all dependencies for classforge operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime. The registry it
    holds is itself mutable: it is the process's one catalog.
    """

    registry: ClassRegistry
    config_ops: ConfigOps
    config: RegistryConfig

    @staticmethod
    def for_test(
        registry: ClassRegistry | None = None,
        config_ops: ConfigOps | None = None,
        config: RegistryConfig | None = None,
    ) -> "ClassforgeContext":
        """Create a context with in-memory config and a fresh real registry.

        Args:
            registry: Registry to use. If None, builds one from config.
            config_ops: Config ops. If None, uses InMemoryConfigOps holding config.
            config: Config. If None, uses defaults.
        """
        if config is None:
            config = RegistryConfig()
        if config_ops is None:
            config_ops = InMemoryConfigOps(config)
        if registry is None:
            registry = build_registry(config)
        return ClassforgeContext(registry=registry, config_ops=config_ops, config=config)


def build_registry(config: RegistryConfig) -> ClassRegistry:
    """Build a registry with the real compiler and materializer."""
    registry = ClassRegistry(
        PythonFragmentCompiler(),
        TypeMaterializer(),
        atomic_definitions=config.atomic_definitions,
    )
    for module_name in config.default_imports:
        registry.declare_import(module_name)
    return registry


def create_context(config_ops: ConfigOps | None = None) -> ClassforgeContext:
    """Create production context with real implementations.

    Called at CLI entry point. Loads config once and builds the registry.

    Raises:
        ValueError: If the config file is malformed
    """
    if config_ops is None:
        config_ops = FilesystemConfigOps()
    config = config_ops.load()
    logger.debug("Loaded config from %s: %s", config_ops.path(), config)
    return ClassforgeContext(
        registry=build_registry(config),
        config_ops=config_ops,
        config=config,
    )
