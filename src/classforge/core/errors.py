"""Error taxonomy for class registry operations.

Every registry failure derives from ClassRegistryError so callers and the CLI
error boundary can catch the whole family at once. Errors are raised
synchronously by the call that triggered them and are never retried.
"""


class ClassRegistryError(Exception):
    """Base class for all registry errors."""


class InvalidNameError(ClassRegistryError, ValueError):
    """Class name is empty, whitespace-only, or otherwise unusable."""


class DuplicateClassError(InvalidNameError):
    """Class name is already registered."""


class NoSuchClassError(ClassRegistryError, LookupError):
    """Class name does not resolve to a registered definition."""

    def __init__(self, name: str) -> None:
        super().__init__(f"There is no such class: '{name}'")
        self.name = name


class FrozenClassError(ClassRegistryError):
    """Mutation attempted on a materialized definition."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Class '{name}' is already materialized and can no longer be changed. "
            "Derive a new class from it instead."
        )
        self.name = name


class MemberNotFoundError(ClassRegistryError, LookupError):
    """Field or method targeted for removal does not exist."""


class MemberCompileError(ClassRegistryError):
    """Member fragment was rejected by the fragment compiler.

    The compiler's SyntaxError is always attached as __cause__.
    """

    def __init__(self, owner: str, source: str, reason: str) -> None:
        super().__init__(f"Cannot compile member of '{owner}': {reason}\n{source}")
        self.owner = owner
        self.source = source


class AlreadyMaterializedError(ClassRegistryError):
    """A live type already exists for this class name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Class '{name}' has already been materialized")
        self.name = name


class MaterializationError(ClassRegistryError):
    """Live type could not be built or instantiated."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Cannot materialize '{name}': {reason}")
        self.name = name


class ImportResolutionError(ClassRegistryError):
    """Import or lookup source could not be added to the resolution context."""

    def __init__(self, token: object, reason: str) -> None:
        super().__init__(f"Cannot resolve '{token}': {reason}")
        self.token = token


class BlueprintError(ValueError):
    """Blueprint file is missing, unreadable, or malformed."""
