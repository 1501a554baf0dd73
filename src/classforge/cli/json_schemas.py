"""Pydantic models for JSON output schemas.

These models validate the structure of --json output before it is emitted.
"""

from pydantic import BaseModel, ConfigDict, Field


class ClassSummary(BaseModel):
    """JSON schema for one class in `classforge build --json`.

    Attributes:
        name: Class name
        state: Lifecycle state ("DRAFT" or "FROZEN")
        parent: Name the class was derived from, if any
        fields: Field names in declaration order
        methods: Method names in declaration order, one per overload
    """

    model_config = ConfigDict(strict=True)

    name: str
    state: str = Field(..., pattern="^(DRAFT|FROZEN)$")
    parent: str | None
    fields: list[str]
    methods: list[str]


class BuildCommandResponse(BaseModel):
    """JSON response schema for the `classforge build` command."""

    model_config = ConfigDict(strict=True)

    classes: list[ClassSummary]


class CallCommandResponse(BaseModel):
    """JSON response schema for the `classforge call` command.

    Attributes:
        class_name: Materialized class
        method: Invoked method
        result: repr() of the returned value
    """

    model_config = ConfigDict(strict=True)

    class_name: str
    method: str
    result: str
