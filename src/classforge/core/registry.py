"""Class definition registry.

The registry is a flat catalog of ClassDefinition records keyed by name. Each
definition starts as a DRAFT, accepts member edits, and becomes FROZEN exactly
once when it is materialized into a live type. A frozen definition can still
seed a new definition through derive().

derive() consumes the base definition's identity: the base key disappears and
the merged member set lives on under the new name. copy_derive() is the
non-consuming variant.

All operations hold a single re-entrant lock for their whole duration, so the
DRAFT -> FROZEN check-and-set, derive's rename and member edits never
interleave.
"""

import logging
import threading
from collections.abc import Iterable

from classforge.core.compiler.abc import FragmentCompiler
from classforge.core.definition_types import ClassDefinition, FieldMember, MethodMember
from classforge.core.errors import (
    AlreadyMaterializedError,
    DuplicateClassError,
    FrozenClassError,
    ImportResolutionError,
    InvalidNameError,
    MemberCompileError,
    MemberNotFoundError,
    NoSuchClassError,
)
from classforge.core.handles import InstanceHandle
from classforge.core.materializer.abc import Materializer

logger = logging.getLogger(__name__)


def _normalize_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise InvalidNameError("Class name can't be empty")
    return name.strip()


def _lookup_key(name: str) -> str:
    # Definitions are keyed by their trimmed name
    return name.strip()


class ClassRegistry:
    """Catalog of class definitions and owner of their lifecycle.

    Args:
        compiler: Turns field and method fragments into members
        materializer: Turns frozen definitions into live types
        atomic_definitions: When True (default), a define/derive call whose
            fragments fail to compile registers nothing. When False, the draft
            is registered first and fragments are attached one by one, so a
            failure leaves the earlier fragments attached.

    Example:
        registry = ClassRegistry(PythonFragmentCompiler(), TypeMaterializer())
        registry.define("Point", ["x = 1", "y = 2"], ["def get_sum(self):\\n    return self.x + self.y"])
        handle = registry.materialize("Point")
        assert handle.invoke("get_sum") == 3
    """

    def __init__(
        self,
        compiler: FragmentCompiler,
        materializer: Materializer,
        *,
        atomic_definitions: bool = True,
    ) -> None:
        self._compiler = compiler
        self._materializer = materializer
        self._atomic_definitions = atomic_definitions
        self._definitions: dict[str, ClassDefinition] = {}
        self._lock = threading.RLock()

    @property
    def atomic_definitions(self) -> bool:
        return self._atomic_definitions

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        with self._lock:
            return _lookup_key(name) in self._definitions

    def __len__(self) -> int:
        with self._lock:
            return len(self._definitions)

    def class_names(self) -> list[str]:
        """Return registered class names in registration order."""
        with self._lock:
            return list(self._definitions)

    def get_definition(self, name: str) -> ClassDefinition:
        """Return the current snapshot of a definition.

        Raises:
            NoSuchClassError: If the name is not registered
        """
        with self._lock:
            return self._require_locked(_lookup_key(name))

    # Creation

    def define(
        self,
        name: str,
        fields: Iterable[str] | None = None,
        methods: Iterable[str] | None = None,
    ) -> None:
        """Register a new DRAFT definition with an initial member set.

        Raises:
            InvalidNameError: If name is empty or whitespace-only
            DuplicateClassError: If name is already registered
            MemberCompileError: If any fragment fails to compile
        """
        class_name = _normalize_name(name)
        with self._lock:
            self._require_absent_locked(class_name)
            self._install_locked(ClassDefinition(name=class_name), fields, methods)
        logger.debug("Defined %s", class_name)

    def derive(
        self,
        new_name: str,
        base_name: str,
        fields: Iterable[str] | None = None,
        methods: Iterable[str] | None = None,
    ) -> None:
        """Rename a definition to new_name as a DRAFT and append members.

        The base definition's members are carried over (unfrozen if needed)
        and base_name stops resolving. The caller sees the rename as a single
        step.

        Raises:
            InvalidNameError: If new_name is empty or equal to base_name
            NoSuchClassError: If base_name is not registered
            DuplicateClassError: If new_name is already registered
            MemberCompileError: If any fragment fails to compile
        """
        self._derive(new_name, base_name, fields, methods, consume=True)

    def copy_derive(
        self,
        new_name: str,
        base_name: str,
        fields: Iterable[str] | None = None,
        methods: Iterable[str] | None = None,
    ) -> None:
        """Like derive(), but base_name stays registered and untouched."""
        self._derive(new_name, base_name, fields, methods, consume=False)

    def _derive(
        self,
        new_name: str,
        base_name: str,
        fields: Iterable[str] | None,
        methods: Iterable[str] | None,
        *,
        consume: bool,
    ) -> None:
        class_name = _normalize_name(new_name)
        base_name = _lookup_key(base_name)
        if class_name == base_name:
            raise InvalidNameError(f"Wrong new class name: '{new_name}' (same as base)")

        with self._lock:
            base = self._require_locked(base_name)
            self._require_absent_locked(class_name)

            if consume and not self._atomic_definitions:
                del self._definitions[base_name]
            self._install_locked(base.derived(class_name), fields, methods)
            if consume and base_name in self._definitions:
                del self._definitions[base_name]

        logger.debug(
            "Derived %s from %s (%s)",
            class_name,
            base_name,
            "consumed" if consume else "copied",
        )

    def _install_locked(
        self,
        draft: ClassDefinition,
        fields: Iterable[str] | None,
        methods: Iterable[str] | None,
    ) -> None:
        field_sources = list(fields) if fields is not None else []
        method_sources = list(methods) if methods is not None else []

        if self._atomic_definitions:
            compiled_fields = [self._compile_field(draft.name, source) for source in field_sources]
            compiled_methods = [self._compile_method(draft.name, source) for source in method_sources]
            self._definitions[draft.name] = draft.with_members(compiled_fields, compiled_methods)
            return

        # Legacy mode: each fragment lands as soon as it compiles
        self._definitions[draft.name] = draft
        for source in field_sources:
            self._append_locked(draft.name, [self._compile_field(draft.name, source)], [])
        for source in method_sources:
            self._append_locked(draft.name, [], [self._compile_method(draft.name, source)])

    # Mutation

    def add_field(self, name: str, fragment: str) -> None:
        """Compile and append a field; duplicate names shadow earlier ones.

        Raises:
            NoSuchClassError: If the class is not registered
            FrozenClassError: If the class is already materialized
            MemberCompileError: If the fragment fails to compile
        """
        name = _lookup_key(name)
        with self._lock:
            self._require_draft_locked(name)
            self._append_locked(name, [self._compile_field(name, fragment)], [])

    def add_method(self, name: str, fragment: str) -> None:
        """Compile and append a method; duplicate names become overloads.

        Raises:
            NoSuchClassError: If the class is not registered
            FrozenClassError: If the class is already materialized
            MemberCompileError: If the fragment fails to compile
        """
        name = _lookup_key(name)
        with self._lock:
            self._require_draft_locked(name)
            self._append_locked(name, [], [self._compile_method(name, fragment)])

    def remove_field(self, name: str, field_name: str) -> None:
        """Remove every field entry named field_name.

        Raises:
            NoSuchClassError: If the class is not registered
            FrozenClassError: If the class is already materialized
            MemberNotFoundError: If the class has no such field
        """
        name = _lookup_key(name)
        with self._lock:
            definition = self._require_draft_locked(name)
            if field_name not in definition.field_names():
                raise MemberNotFoundError(f"Class '{name}' has no field '{field_name}'")
            self._definitions[name] = definition.without_field(field_name)
        logger.debug("Removed field %s.%s", name, field_name)

    def remove_methods(self, name: str, method_name: str) -> None:
        """Remove every overload named method_name.

        Raises:
            NoSuchClassError: If the class is not registered
            FrozenClassError: If the class is already materialized
            MemberNotFoundError: If the class has no method with that name
        """
        name = _lookup_key(name)
        with self._lock:
            definition = self._require_draft_locked(name)
            removed = len(definition.methods.get(method_name, ()))
            if removed == 0:
                raise MemberNotFoundError(f"Class '{name}' has no methods named '{method_name}'")
            self._definitions[name] = definition.without_methods(method_name)
        logger.debug("Removed %d overload(s) of %s.%s", removed, name, method_name)

    # Freezing

    def materialize(self, name: str) -> InstanceHandle:
        """Freeze a definition and return a fresh instance of its live type.

        Materializing an already FROZEN definition is idempotent: it returns
        a new instance of the existing type and never rebuilds it.

        Raises:
            NoSuchClassError: If the class is not registered
            AlreadyMaterializedError: If a live type already exists for this
                name although the definition is still a DRAFT
            MaterializationError: If the live type cannot be instantiated
        """
        name = _lookup_key(name)
        with self._lock:
            definition = self._require_locked(name)
            if definition.is_frozen:
                logger.debug("%s already frozen, instantiating existing type", name)
                return self._materializer.instantiate(name)

            if self._materializer.is_frozen_externally(name):
                raise AlreadyMaterializedError(name)

            frozen = definition.frozen()
            handle = self._materializer.materialize(frozen)
            self._definitions[name] = frozen

        logger.debug("Materialized %s", name)
        return handle

    # Introspection

    def list_fields(self, name: str) -> list[str]:
        """Return field names in declaration order.

        Raises:
            NoSuchClassError: If the class is not registered
        """
        return self.get_definition(name).field_names()

    def list_methods(self, name: str) -> list[str]:
        """Return method names in declaration order, one entry per overload.

        Raises:
            NoSuchClassError: If the class is not registered
        """
        return self.get_definition(name).method_names()

    # Resolution context

    def register_external_lookup_source(self, token: object) -> None:
        """Make an external module or object resolvable inside fragments.

        Raises:
            ImportResolutionError: If the token can't be imported, has no name,
                or its name is already bound to a different object
        """
        with self._lock:
            try:
                self._compiler.register_lookup_source(token)
            except (ImportError, ValueError, TypeError) as e:
                raise ImportResolutionError(token, f"{type(e).__name__}: {e}") from e

    def declare_import(self, namespace: str) -> None:
        """Make the public names of a module resolvable inside fragments.

        Raises:
            ImportResolutionError: If the module can't be imported
        """
        with self._lock:
            try:
                self._compiler.declare_import(namespace)
            except (ImportError, ValueError, TypeError) as e:
                raise ImportResolutionError(namespace, f"{type(e).__name__}: {e}") from e

    # Internals

    def _require_locked(self, name: str) -> ClassDefinition:
        definition = self._definitions.get(name)
        if definition is None:
            raise NoSuchClassError(name)
        return definition

    def _require_absent_locked(self, name: str) -> None:
        if name in self._definitions:
            raise DuplicateClassError(f"Class '{name}' is already registered")

    def _require_draft_locked(self, name: str) -> ClassDefinition:
        definition = self._require_locked(name)
        if definition.is_frozen:
            raise FrozenClassError(name)
        return definition

    def _append_locked(
        self,
        name: str,
        fields: list[FieldMember],
        methods: list[MethodMember],
    ) -> None:
        self._definitions[name] = self._definitions[name].with_members(fields, methods)

    def _compile_field(self, owner: str, source: str) -> FieldMember:
        try:
            return self._compiler.compile_field(owner, source)
        except SyntaxError as e:
            raise MemberCompileError(owner, source, e.msg or str(e)) from e

    def _compile_method(self, owner: str, source: str) -> MethodMember:
        try:
            return self._compiler.compile_method(owner, source)
        except SyntaxError as e:
            raise MemberCompileError(owner, source, e.msg or str(e)) from e
