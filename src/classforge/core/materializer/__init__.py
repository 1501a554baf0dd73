"""Materialization of frozen definitions into live types."""

from classforge.core.materializer.abc import Materializer
from classforge.core.materializer.real import TypeMaterializer

__all__ = ["Materializer", "TypeMaterializer"]
