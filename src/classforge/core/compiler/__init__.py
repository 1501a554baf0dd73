"""Member fragment compilation."""

from classforge.core.compiler.abc import FragmentCompiler
from classforge.core.compiler.real import PythonFragmentCompiler

__all__ = ["FragmentCompiler", "PythonFragmentCompiler"]
