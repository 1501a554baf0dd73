"""Build command implementation - applies a blueprint and lists its classes."""

from pathlib import Path

import click

from classforge.cli.ensure import registry_error_boundary
from classforge.cli.json_schemas import BuildCommandResponse, ClassSummary
from classforge.cli.output import emit_json, user_output
from classforge.core.blueprint import apply_blueprint, load_blueprint
from classforge.core.context import ClassforgeContext
from classforge.core.definition_types import ClassDefinition


def _format_definition(definition: ClassDefinition) -> list[str]:
    header = f"{click.style(definition.name, bold=True)} [{definition.state.value}]"
    if definition.parent is not None:
        header += f" (derived from {definition.parent})"
    return [
        header,
        f"  fields: {', '.join(definition.field_names()) or '-'}",
        f"  methods: {', '.join(definition.method_names()) or '-'}",
    ]


@click.command("build")
@click.argument("blueprint_path", type=click.Path(path_type=Path))
@click.option(
    "--materialize",
    "materialize_all",
    is_flag=True,
    help="Materialize every class after applying the blueprint",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output JSON format",
)
@click.pass_obj
@registry_error_boundary
def build_cmd(
    ctx: ClassforgeContext,
    blueprint_path: Path,
    materialize_all: bool,
    output_json: bool,
) -> None:
    """Apply BLUEPRINT_PATH and show the resulting class definitions."""
    blueprint = load_blueprint(blueprint_path)
    apply_blueprint(ctx.registry, blueprint)

    if materialize_all:
        for name in ctx.registry.class_names():
            ctx.registry.materialize(name)

    definitions = [ctx.registry.get_definition(name) for name in ctx.registry.class_names()]

    if output_json:
        response = BuildCommandResponse(
            classes=[
                ClassSummary(
                    name=definition.name,
                    state=definition.state.value,
                    parent=definition.parent,
                    fields=definition.field_names(),
                    methods=definition.method_names(),
                )
                for definition in definitions
            ]
        )
        emit_json(response.model_dump(mode="json"))
        return

    if not definitions:
        user_output("No classes defined")
        return

    for definition in definitions:
        for line in _format_definition(definition):
            user_output(line)
