"""Registry configuration data structures and loading.

Provides immutable configuration loaded from ~/.classforge/config.toml.
Loaded once at the CLI entry point and stored in ClassforgeContext.
"""

import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

import tomli_w


@dataclass(frozen=True)
class RegistryConfig:
    """Immutable registry configuration.

    All fields are read-only after construction.
    """

    atomic_definitions: bool = True
    default_imports: tuple[str, ...] = field(default_factory=tuple)
    debug: bool = False


def _parse_config(data: dict, source: Path) -> RegistryConfig:
    atomic = data.get("atomic_definitions", True)
    if not isinstance(atomic, bool):
        raise ValueError(f"'atomic_definitions' must be true or false in {source}")

    imports = data.get("default_imports", [])
    if not isinstance(imports, list) or not all(isinstance(item, str) for item in imports):
        raise ValueError(f"'default_imports' must be a list of module names in {source}")

    debug = data.get("debug", False)
    if not isinstance(debug, bool):
        raise ValueError(f"'debug' must be true or false in {source}")

    return RegistryConfig(
        atomic_definitions=atomic,
        default_imports=tuple(imports),
        debug=debug,
    )


class ConfigOps(ABC):
    """Abstract interface for registry config operations.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if config exists."""
        ...

    @abstractmethod
    def load(self) -> RegistryConfig:
        """Load config, falling back to defaults when none exists.

        Raises:
            ValueError: If config is malformed
        """
        ...

    @abstractmethod
    def save(self, config: RegistryConfig) -> None:
        """Save config."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for messages and debugging)."""
        ...


class FilesystemConfigOps(ConfigOps):
    """Production implementation that reads/writes ~/.classforge/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> RegistryConfig:
        """Load config from disk.

        Returns:
            RegistryConfig with loaded values, or defaults if the file is missing

        Raises:
            ValueError: If the file is not valid TOML or has malformed values
        """
        config_path = self.path()
        if not config_path.exists():
            return RegistryConfig()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

        return _parse_config(data, config_path)

    def save(self, config: RegistryConfig) -> None:
        config_path = self.path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "atomic_definitions": config.atomic_definitions,
            "default_imports": list(config.default_imports),
            "debug": config.debug,
        }
        with open(config_path, "wb") as f:
            tomli_w.dump(data, f)

    def path(self) -> Path:
        if self._config_path is not None:
            return self._config_path
        return Path.home() / ".classforge" / "config.toml"


class InMemoryConfigOps(ConfigOps):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: RegistryConfig | None = None) -> None:
        """Initialize in-memory config ops.

        Args:
            config: Initial config state (None = config doesn't exist)
        """
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> RegistryConfig:
        if self._config is None:
            return RegistryConfig()
        return self._config

    def save(self, config: RegistryConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/fake/classforge/config.toml")
