"""Handles to instances of materialized classes."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class InstanceHandle:
    """Freshly constructed instance of a materialized class.

    Example:
        >>> handle = registry.materialize("Point")
        >>> handle.invoke("get_sum")
        3
    """

    class_name: str
    type: type
    instance: Any

    def invoke(self, method_name: str, *args: Any, **kwargs: Any) -> Any:
        """Call a method on the instance by name.

        Raises:
            AttributeError: If the class has no such method
        """
        method = getattr(self.instance, method_name)
        return method(*args, **kwargs)

    def get(self, field_name: str) -> Any:
        """Read a field value from the instance."""
        return getattr(self.instance, field_name)
