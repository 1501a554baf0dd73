import click

from classforge.cli.ensure import Ensure
from classforge.cli.output import user_output
from classforge.core.config import RegistryConfig
from classforge.core.context import ClassforgeContext


@click.group("config")
def config_group() -> None:
    """Manage classforge configuration."""


@config_group.command("show")
@click.pass_obj
def show_cmd(ctx: ClassforgeContext) -> None:
    """Print the active configuration."""
    cfg = ctx.config
    source = ctx.config_ops.path() if ctx.config_ops.exists() else "defaults"
    user_output(click.style(f"Configuration ({source}):", bold=True))
    user_output(f"  atomic_definitions={str(cfg.atomic_definitions).lower()}")
    user_output(f"  default_imports={','.join(cfg.default_imports)}")
    user_output(f"  debug={str(cfg.debug).lower()}")


@config_group.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_obj
def init_cmd(ctx: ClassforgeContext, force: bool) -> None:
    """Write a config file with default values."""
    Ensure.invariant(
        force or not ctx.config_ops.exists(),
        f"Config already exists at {ctx.config_ops.path()} (use --force to overwrite)",
    )
    ctx.config_ops.save(RegistryConfig())
    user_output(f"Wrote default config to {ctx.config_ops.path()}")
