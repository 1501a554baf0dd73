"""Shared fixtures for classforge CLI command tests."""

from pathlib import Path

import pytest

SHAPES_BLUEPRINT = '''
imports = ["math"]

[[classes]]
name = "Point"
fields = ["x = 1", "y = 2"]
methods = [
    """def get_sum(self):
    return self.x + self.y""",
    """def scale(self, factor):
    return (self.x * factor, self.y * factor)""",
]

[[classes]]
name = "Point3D"
base = "Point"
fields = ["z = 5"]
methods = ["""def get_full_sum(self):
    return self.x + self.y + self.z"""]

[[classes]]
name = "Circle"
fields = ["r = 1.0"]
methods = ["""def area(self):
    return pi * self.r ** 2"""]
'''


@pytest.fixture
def shapes_blueprint(tmp_path: Path) -> Path:
    """Write the shapes blueprint to a temporary file."""
    path = tmp_path / "shapes.toml"
    path.write_text(SHAPES_BLUEPRINT, encoding="utf-8")
    return path
