"""Call command implementation - materializes a class and invokes a method."""

import ast
from pathlib import Path
from typing import Any

import click

from classforge.cli.ensure import Ensure, registry_error_boundary
from classforge.cli.json_schemas import CallCommandResponse
from classforge.cli.output import emit_json, machine_output
from classforge.core.blueprint import apply_blueprint, load_blueprint
from classforge.core.context import ClassforgeContext


def _parse_argument(raw: str) -> Any:
    """Evaluate a Python literal, keeping the raw string when it isn't one."""
    try:
        return ast.literal_eval(raw)
    except (ValueError, SyntaxError):
        return raw


@click.command("call")
@click.argument("blueprint_path", type=click.Path(path_type=Path))
@click.argument("class_name")
@click.argument("method")
@click.argument("args", nargs=-1)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output JSON format",
)
@click.pass_obj
@registry_error_boundary
def call_cmd(
    ctx: ClassforgeContext,
    blueprint_path: Path,
    class_name: str,
    method: str,
    args: tuple[str, ...],
    output_json: bool,
) -> None:
    """Apply BLUEPRINT_PATH, materialize CLASS_NAME and call METHOD with ARGS.

    ARGS are parsed as Python literals (e.g. 3, 'text', [1, 2]); anything
    else is passed as a plain string.
    """
    apply_blueprint(ctx.registry, load_blueprint(blueprint_path))

    Ensure.invariant(
        method in ctx.registry.list_methods(class_name),
        f"Class '{class_name}' has no method '{method}'",
    )

    handle = ctx.registry.materialize(class_name)
    result = handle.invoke(method, *[_parse_argument(raw) for raw in args])

    if output_json:
        response = CallCommandResponse(class_name=class_name, method=method, result=repr(result))
        emit_json(response.model_dump(mode="json"))
        return

    machine_output(repr(result))
