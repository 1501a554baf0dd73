"""Output utilities for CLI commands with clear intent.

Human-facing messages go to stderr, machine-readable data to stdout.
"""

import json
from typing import Any

import click


def user_output(message: str) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True)


def machine_output(message: str) -> None:
    """Write machine-readable data to stdout."""
    click.echo(message)


def emit_json(data: dict[str, Any]) -> None:
    """Output JSON data to stdout for machine consumption.

    For Pydantic models, call model.model_dump(mode="json") before passing
    to this function.
    """
    machine_output(json.dumps(data, indent=2))
