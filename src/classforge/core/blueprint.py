"""Blueprint files: batches of class definitions described in TOML.

A blueprint lists imports and class tables that are applied to a registry in
file order:

    imports = ["math"]

    [[classes]]
    name = "Point"
    fields = ["x = 1", "y = 2"]
    methods = ["def get_sum(self):\\n    return self.x + self.y"]

    [[classes]]
    name = "Point3D"
    base = "Point"          # derive (consumes Point)
    fields = ["z = 5"]
    materialize = true

Setting ``copy = true`` next to ``base`` uses the non-consuming derive.
"""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from classforge.core.errors import BlueprintError
from classforge.core.handles import InstanceHandle
from classforge.core.registry import ClassRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassBlueprint:
    """One class table from a blueprint file."""

    name: str
    base: str | None
    copy: bool
    fields: tuple[str, ...]
    methods: tuple[str, ...]
    materialize: bool


@dataclass(frozen=True)
class Blueprint:
    """Parsed blueprint file."""

    imports: tuple[str, ...]
    classes: tuple[ClassBlueprint, ...]


def _string_list(data: dict[str, Any], key: str, where: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise BlueprintError(f"'{key}' must be a list of strings in {where}")
    return tuple(value)


def _parse_class(data: Any, index: int, source: str) -> ClassBlueprint:
    where = f"classes[{index}] of {source}"
    if not isinstance(data, dict):
        raise BlueprintError(f"{where} must be a table")

    name = data.get("name")
    if not isinstance(name, str):
        raise BlueprintError(f"Missing 'name' in {where}")

    base = data.get("base")
    if base is not None and not isinstance(base, str):
        raise BlueprintError(f"'base' must be a string in {where}")

    copy = data.get("copy", False)
    materialize = data.get("materialize", False)
    if not isinstance(copy, bool) or not isinstance(materialize, bool):
        raise BlueprintError(f"'copy' and 'materialize' must be true or false in {where}")
    if copy and base is None:
        raise BlueprintError(f"'copy' requires 'base' in {where}")

    return ClassBlueprint(
        name=name,
        base=base,
        copy=copy,
        fields=_string_list(data, "fields", where),
        methods=_string_list(data, "methods", where),
        materialize=materialize,
    )


def parse_blueprint(text: str, source: str = "<string>") -> Blueprint:
    """Parse blueprint TOML text.

    Raises:
        BlueprintError: If the text is not valid TOML or has malformed tables
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise BlueprintError(f"Invalid TOML in {source}: {e}") from e

    classes = data.get("classes", [])
    if not isinstance(classes, list):
        raise BlueprintError(f"'classes' must be an array of tables in {source}")

    return Blueprint(
        imports=_string_list(data, "imports", source),
        classes=tuple(_parse_class(item, index, source) for index, item in enumerate(classes)),
    )


def load_blueprint(path: Path) -> Blueprint:
    """Load and parse a blueprint file.

    Raises:
        BlueprintError: If the file is missing or malformed
    """
    if not path.exists():
        raise BlueprintError(f"Blueprint not found: {path}")
    return parse_blueprint(path.read_text(encoding="utf-8"), source=str(path))


def apply_blueprint(registry: ClassRegistry, blueprint: Blueprint) -> dict[str, InstanceHandle]:
    """Apply every import and class table to the registry in order.

    Registry errors propagate unchanged; tables applied before the failing one
    stay registered.

    Returns:
        Instance handles for the tables marked ``materialize = true``
    """
    for module_name in blueprint.imports:
        registry.declare_import(module_name)

    handles: dict[str, InstanceHandle] = {}
    for item in blueprint.classes:
        if item.base is None:
            registry.define(item.name, item.fields, item.methods)
        elif item.copy:
            registry.copy_derive(item.name, item.base, item.fields, item.methods)
        else:
            registry.derive(item.name, item.base, item.fields, item.methods)

        if item.materialize:
            handles[item.name.strip()] = registry.materialize(item.name.strip())

    logger.debug("Applied blueprint with %d classes", len(blueprint.classes))
    return handles
