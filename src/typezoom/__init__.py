"""typezoom: serialize TypeScript entities and the types they depend on."""

from __future__ import annotations

from typezoom.classifier import ArrayDetection, classify
from typezoom.collector import collect_dependencies
from typezoom.decorators import serialize_literal_decorator
from typezoom.errors import (
    ConfigError,
    TypeResolutionError,
    TypezoomError,
    UnknownTypeError,
    UnresolvedTypeError,
)
from typezoom.filters import is_decorated_by
from typezoom.pipeline import SerializerOptions, collect, collect_program
from typezoom.vue import collect_vue_files

__all__ = [
    "ArrayDetection",
    "ConfigError",
    "SerializerOptions",
    "TypeResolutionError",
    "TypezoomError",
    "UnknownTypeError",
    "UnresolvedTypeError",
    "classify",
    "collect",
    "collect_dependencies",
    "collect_program",
    "collect_vue_files",
    "is_decorated_by",
    "serialize_literal_decorator",
]
