"""Python fragment compiler.

Fields are single assignments to a plain name (``x = 1``, ``x: int = 1`` or
``x: int``). Methods are a single ``def`` statement taking ``self``. Both are
parsed with the stdlib ``ast`` module and compiled against a shared resolution
namespace, so names imported after a method was compiled are still visible
when it runs.
"""

import ast
import builtins
import importlib
import logging
from collections.abc import Callable
from types import CodeType
from typing import Any

from classforge.core.compiler.abc import FragmentCompiler
from classforge.core.definition_types import FieldMember, MethodMember

logger = logging.getLogger(__name__)

IMPLICIT_NAMESPACE = "builtins"


def _filename(owner: str) -> str:
    return f"<classforge:{owner}>"


def _parse_single_statement(owner: str, source: str) -> ast.stmt:
    try:
        tree = ast.parse(source, filename=_filename(owner), mode="exec")
    except ValueError as e:
        # Source containing NUL bytes is rejected with ValueError rather than SyntaxError
        raise SyntaxError(str(e), (_filename(owner), 1, 0, source)) from e
    if len(tree.body) != 1:
        raise SyntaxError(
            f"expected exactly one statement, found {len(tree.body)}",
            (_filename(owner), 1, 0, source),
        )
    return tree.body[0]


def _make_initializer(code: CodeType, namespace: dict[str, Any]) -> Callable[[dict[str, Any]], Any]:
    def initializer(previous: dict[str, Any]) -> Any:
        return eval(code, namespace, dict(previous))

    return initializer


class PythonFragmentCompiler(FragmentCompiler):
    """Compiles Python source fragments with the stdlib ast module.

    Example:
        compiler = PythonFragmentCompiler()
        compiler.declare_import("math")
        member = compiler.compile_method("Circle", "def area(self):\\n    return pi * self.r ** 2")
    """

    def __init__(self) -> None:
        self._namespace: dict[str, Any] = {"__builtins__": builtins}
        self._imports: list[str] = []
        self._lookup_sources: dict[str, object] = {}

    @property
    def imports(self) -> list[str]:
        """Modules declared with declare_import, in declaration order."""
        return list(self._imports)

    @property
    def lookup_sources(self) -> dict[str, object]:
        """Objects registered with register_lookup_source, keyed by bound name."""
        return dict(self._lookup_sources)

    def compile_field(self, owner: str, source: str) -> FieldMember:
        node = _parse_single_statement(owner, source)

        if isinstance(node, ast.Assign):
            if len(node.targets) != 1 or not isinstance(node.targets[0], ast.Name):
                raise SyntaxError(
                    "field must assign to exactly one plain name",
                    (_filename(owner), node.lineno, node.col_offset, source),
                )
            name = node.targets[0].id
            annotation = None
            value = node.value
        elif isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
            name = node.target.id
            annotation = ast.unparse(node.annotation)
            value = node.value
        else:
            raise SyntaxError(
                "field must be a single assignment such as 'x = 1' or 'x: int = 1'",
                (_filename(owner), node.lineno, node.col_offset, source),
            )

        initializer = None
        if value is not None:
            code = compile(ast.Expression(body=value), _filename(owner), "eval")
            initializer = _make_initializer(code, self._namespace)

        logger.debug("Compiled field %s.%s", owner, name)
        return FieldMember(name=name, source=source, annotation=annotation, initializer=initializer)

    def compile_method(self, owner: str, source: str) -> MethodMember:
        node = _parse_single_statement(owner, source)

        if not isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            raise SyntaxError(
                "method must be a single 'def' statement",
                (_filename(owner), node.lineno, node.col_offset, source),
            )
        if not (node.args.posonlyargs or node.args.args or node.args.vararg):
            raise SyntaxError(
                f"method '{node.name}' must accept the instance as its first parameter",
                (_filename(owner), node.lineno, node.col_offset, source),
            )
        if node.name == "__init__":
            raise SyntaxError(
                "method can't be named '__init__'; fields are initialized automatically",
                (_filename(owner), node.lineno, node.col_offset, source),
            )

        code = compile(ast.Module(body=[node], type_ignores=[]), _filename(owner), "exec")
        scope: dict[str, Any] = {}
        try:
            # Decorators and default values are evaluated here, not at call time
            exec(code, self._namespace, scope)
        except Exception as e:
            raise SyntaxError(
                f"cannot evaluate method '{node.name}': {type(e).__name__}: {e}",
                (_filename(owner), node.lineno, node.col_offset, source),
            ) from e
        function = scope[node.name]
        function.__qualname__ = f"{owner}.{node.name}"

        logger.debug("Compiled method %s.%s", owner, node.name)
        return MethodMember(name=node.name, source=source, function=function)

    def register_lookup_source(self, token: object) -> None:
        if isinstance(token, str):
            module_name = token.strip()
            if not module_name:
                raise ValueError("Lookup source name can't be empty")
            target: object = importlib.import_module(module_name)
            bound_name = module_name.rpartition(".")[2]
        else:
            bound_name = getattr(token, "__name__", None)
            if not isinstance(bound_name, str):
                raise TypeError(f"Lookup source must be a module name or have a __name__: {token!r}")
            target = token

        existing = self._lookup_sources.get(bound_name)
        if existing is target:
            return
        if existing is not None:
            raise ValueError(f"Lookup source '{bound_name}' is already registered to {existing!r}")

        self._lookup_sources[bound_name] = target
        self._namespace[bound_name] = target
        logger.debug("Registered lookup source %s", bound_name)

    def declare_import(self, namespace: str) -> None:
        module_name = namespace.strip()
        if module_name.lower() == IMPLICIT_NAMESPACE:
            return
        if module_name in self._imports:
            return

        module = importlib.import_module(module_name)
        exported = getattr(module, "__all__", None)
        if exported is None:
            exported = [name for name in vars(module) if not name.startswith("_")]

        for name in exported:
            self._namespace[name] = getattr(module, name)

        self._imports.append(module_name)
        logger.debug("Declared import %s (%d names)", module_name, len(exported))
