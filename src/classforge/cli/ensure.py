"""CLI error handling utilities with styled output.

All errors use a red "Error:" prefix for visual consistency and exit with
code 1. The CLI is the only error boundary: library code raises, commands
turn registry and blueprint errors into styled messages here.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from classforge.cli.output import user_output
from classforge.core.errors import BlueprintError, ClassRegistryError


def _fail(error_message: str) -> None:
    user_output(click.style("Error: ", fg="red") + error_message)
    raise SystemExit(1)


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            _fail(error_message)


def registry_error_boundary(func: Callable) -> Callable:
    """Decorator turning registry and blueprint errors into styled CLI errors.

    Any other exception bubbles up unchanged.

    Example:
        @click.command()
        @registry_error_boundary
        def my_command() -> None:
            ...
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (ClassRegistryError, BlueprintError) as e:
            _fail(f"{type(e).__name__}: {e}")

    return wrapper
