"""Materializer that builds Python types with type().

Each materialized name gets exactly one live type for the lifetime of the
materializer. Asking for the same name twice raises AlreadyMaterializedError;
further instances come from instantiate().
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from classforge.core.definition_types import ClassDefinition, FieldMember, MethodMember
from classforge.core.errors import AlreadyMaterializedError, MaterializationError
from classforge.core.handles import InstanceHandle
from classforge.core.materializer.abc import Materializer

logger = logging.getLogger(__name__)

GENERATED_MODULE = "classforge.generated"


def _build_init(fields: tuple[FieldMember, ...]) -> Callable[[Any], None]:
    def __init__(self: Any) -> None:
        values: dict[str, Any] = {}
        for member in fields:
            value = None if member.initializer is None else member.initializer(values)
            values[member.name] = value
            setattr(self, member.name, value)

    return __init__


def _build_dispatcher(name: str, overloads: tuple[MethodMember, ...]) -> Callable[..., Any]:
    """Pick the first overload, in declaration order, whose signature binds the call."""
    candidates = [(inspect.signature(member.function), member.function) for member in overloads]

    def dispatch(self: Any, *args: Any, **kwargs: Any) -> Any:
        for signature, function in candidates:
            try:
                signature.bind(self, *args, **kwargs)
            except TypeError:
                continue
            return function(self, *args, **kwargs)
        raise TypeError(f"No overload of {name}() accepts the given arguments")

    dispatch.__name__ = name
    return dispatch


def _construct(name: str, cls: type) -> Any:
    try:
        return cls()
    except Exception as e:
        raise MaterializationError(name, f"{type(e).__name__}: {e}") from e


class TypeMaterializer(Materializer):
    """Builds live classes from definitions using the type() constructor.

    Example:
        materializer = TypeMaterializer()
        handle = materializer.materialize(definition)
        handle.invoke("get_sum")
    """

    def __init__(self) -> None:
        self._types: dict[str, type] = {}

    def is_frozen_externally(self, name: str) -> bool:
        return name in self._types

    def materialize(self, definition: ClassDefinition) -> InstanceHandle:
        if definition.name in self._types:
            raise AlreadyMaterializedError(definition.name)

        namespace: dict[str, Any] = {
            "__module__": GENERATED_MODULE,
            "__init__": _build_init(definition.fields),
            "__classforge_definition__": definition,
        }
        for method_name, overloads in definition.methods.items():
            if len(overloads) == 1:
                namespace[method_name] = overloads[0].function
            else:
                namespace[method_name] = _build_dispatcher(method_name, overloads)

        cls = type(definition.name, (object,), namespace)
        instance = _construct(definition.name, cls)
        self._types[definition.name] = cls
        logger.debug(
            "Materialized %s (%d fields, %d methods)",
            definition.name,
            len(definition.fields),
            len(definition.methods),
        )
        return InstanceHandle(class_name=definition.name, type=cls, instance=instance)

    def instantiate(self, name: str) -> InstanceHandle:
        cls = self._types[name]
        return InstanceHandle(class_name=name, type=cls, instance=_construct(name, cls))
