"""Class definition data types.

Definitions are immutable records. The registry never edits a record in place:
every mutation builds a replacement with dataclasses.replace and swaps it into
the catalog under the registry lock.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any


class DefinitionState(Enum):
    """Lifecycle state of a class definition."""

    DRAFT = "DRAFT"
    FROZEN = "FROZEN"


@dataclass(frozen=True)
class FieldMember:
    """Compiled field fragment.

    initializer receives the values of the fields initialized before it and
    returns this field's value. It is None for a bare annotation, in which
    case the field starts out as None.
    """

    name: str
    source: str
    annotation: str | None
    initializer: Callable[[dict[str, Any]], Any] | None


@dataclass(frozen=True)
class MethodMember:
    """Compiled method fragment."""

    name: str
    source: str
    function: Callable[..., Any]


@dataclass(frozen=True)
class ClassDefinition:
    """Named bundle of field and method fragments.

    Duplicate field names are kept in order; the materializer applies them in
    sequence so the last one wins. Methods sharing a name are overloads.
    methods is always stored as a read-only mapping.
    """

    name: str
    fields: tuple[FieldMember, ...] = ()
    methods: Mapping[str, tuple[MethodMember, ...]] = field(default_factory=dict)
    state: DefinitionState = DefinitionState.DRAFT
    parent: str | None = None  # Provenance only, never a live link

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "methods", MappingProxyType(dict(self.methods)))

    @property
    def is_frozen(self) -> bool:
        return self.state is DefinitionState.FROZEN

    def field_names(self) -> list[str]:
        return [member.name for member in self.fields]

    def method_names(self) -> list[str]:
        """Return one entry per method fragment, so overloads repeat."""
        return [name for name, overloads in self.methods.items() for _ in overloads]

    def with_members(
        self,
        fields: list[FieldMember],
        methods: list[MethodMember],
    ) -> "ClassDefinition":
        """Return a copy with the given members appended."""
        merged = dict(self.methods)
        for method in methods:
            merged[method.name] = merged.get(method.name, ()) + (method,)
        return replace(self, fields=self.fields + tuple(fields), methods=merged)

    def without_field(self, field_name: str) -> "ClassDefinition":
        kept = tuple(member for member in self.fields if member.name != field_name)
        return replace(self, fields=kept)

    def without_methods(self, method_name: str) -> "ClassDefinition":
        kept = {name: group for name, group in self.methods.items() if name != method_name}
        return replace(self, methods=kept)

    def frozen(self) -> "ClassDefinition":
        return replace(self, state=DefinitionState.FROZEN)

    def derived(self, new_name: str) -> "ClassDefinition":
        """Return an unfrozen member snapshot under a new name."""
        return ClassDefinition(
            name=new_name,
            fields=self.fields,
            methods=self.methods,
            state=DefinitionState.DRAFT,
            parent=self.name,
        )
