"""Fragment compiler interface.

Turns caller-supplied source fragments into structural members. The registry
depends only on this interface; tests use an in-memory fake.
"""

from abc import ABC, abstractmethod

from classforge.core.definition_types import FieldMember, MethodMember


class FragmentCompiler(ABC):
    """Abstract interface for member fragment compilation.

    Implementations also own the resolution context: the names that compiled
    fragments can refer to besides their own members.
    """

    @abstractmethod
    def compile_field(self, owner: str, source: str) -> FieldMember:
        """Compile one field fragment.

        Args:
            owner: Name of the class definition receiving the field
            source: Field source text

        Returns:
            Compiled FieldMember

        Raises:
            SyntaxError: If the fragment is not a valid field declaration
        """
        ...

    @abstractmethod
    def compile_method(self, owner: str, source: str) -> MethodMember:
        """Compile one method fragment.

        Args:
            owner: Name of the class definition receiving the method
            source: Method source text

        Returns:
            Compiled MethodMember

        Raises:
            SyntaxError: If the fragment is not a valid method declaration, is
                named __init__, or its decorators or defaults fail to evaluate
        """
        ...

    @abstractmethod
    def register_lookup_source(self, token: object) -> None:
        """Make an external object resolvable by name inside fragments.

        Args:
            token: Dotted module name, or any object with a __name__
        """
        ...

    @abstractmethod
    def declare_import(self, namespace: str) -> None:
        """Make the public names of a module resolvable unqualified.

        Declaring the implicit namespace, or one already declared, is a no-op.
        """
        ...
