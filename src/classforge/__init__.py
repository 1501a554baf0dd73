"""Runtime class definition registry."""

from classforge.core.compiler import FragmentCompiler, PythonFragmentCompiler
from classforge.core.definition_types import (
    ClassDefinition,
    DefinitionState,
    FieldMember,
    MethodMember,
)
from classforge.core.errors import (
    AlreadyMaterializedError,
    BlueprintError,
    ClassRegistryError,
    DuplicateClassError,
    FrozenClassError,
    ImportResolutionError,
    InvalidNameError,
    MaterializationError,
    MemberCompileError,
    MemberNotFoundError,
    NoSuchClassError,
)
from classforge.core.handles import InstanceHandle
from classforge.core.materializer import Materializer, TypeMaterializer
from classforge.core.registry import ClassRegistry

__all__ = [
    "AlreadyMaterializedError",
    "BlueprintError",
    "ClassDefinition",
    "ClassRegistry",
    "ClassRegistryError",
    "DefinitionState",
    "DuplicateClassError",
    "FieldMember",
    "FragmentCompiler",
    "FrozenClassError",
    "ImportResolutionError",
    "InstanceHandle",
    "InvalidNameError",
    "MaterializationError",
    "Materializer",
    "MemberCompileError",
    "MemberNotFoundError",
    "MethodMember",
    "NoSuchClassError",
    "PythonFragmentCompiler",
    "TypeMaterializer",
]
