"""Materializer interface.

Turns a class definition snapshot into a live, instantiable type. The
registry's state machine depends only on this interface so it can be tested
with a fake that records calls.
"""

from abc import ABC, abstractmethod

from classforge.core.definition_types import ClassDefinition
from classforge.core.handles import InstanceHandle


class Materializer(ABC):
    """Abstract interface for building live types from definitions."""

    @abstractmethod
    def materialize(self, definition: ClassDefinition) -> InstanceHandle:
        """Build the live type for a definition and construct an instance.

        Args:
            definition: Snapshot of the definition to materialize

        Returns:
            Handle to a freshly constructed instance

        Raises:
            AlreadyMaterializedError: If a live type already exists for the name
        """
        ...

    @abstractmethod
    def instantiate(self, name: str) -> InstanceHandle:
        """Construct another instance of an already materialized type.

        Raises:
            KeyError: If no live type exists for the name
        """
        ...

    @abstractmethod
    def is_frozen_externally(self, name: str) -> bool:
        """Check whether a live type already exists for the name.

        This is a LBYL check: the registry calls it before materializing a
        DRAFT definition to detect types pushed live by another path.
        """
        ...
