import logging
import os

import click

from classforge.cli.commands.build import build_cmd
from classforge.cli.commands.call import call_cmd
from classforge.cli.commands.config import config_group
from classforge.cli.ensure import Ensure
from classforge.core.context import create_context
from classforge.core.errors import ClassRegistryError

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


def _configure_logging(debug: bool) -> None:
    # Enable debug logging if CLASSFORGE_DEBUG is set or the config asks for it
    if debug or os.getenv("CLASSFORGE_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="classforge")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Define, derive and materialize classes from source fragments."""
    _configure_logging(debug=False)
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context()
        except (ValueError, ClassRegistryError) as e:
            Ensure.invariant(False, str(e))
    _configure_logging(ctx.obj.config.debug)


cli.add_command(build_cmd)
cli.add_command(call_cmd)
cli.add_command(config_group)


def main() -> None:
    """CLI entry point used by the `classforge` console script."""
    cli()
