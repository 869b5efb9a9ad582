"""CRD schema to Java model generator package."""

from __future__ import annotations

from .cli import main
from .config import AffixPolicy, Config
from .generator import generate_types, run_generation
from .model_types import GeneratedType, GenerationResult, GenerationRun
from .naming import GenerationError, InvalidIdentifier
from .nodes import (
    ArrayNode,
    EnumNode,
    MapNode,
    ObjectNode,
    PrimitiveNode,
    ResourceWrapper,
    SchemaNode,
    UnsupportedSchemaShape,
)

__all__ = [
    "AffixPolicy",
    "ArrayNode",
    "Config",
    "EnumNode",
    "GeneratedType",
    "GenerationError",
    "GenerationResult",
    "GenerationRun",
    "InvalidIdentifier",
    "MapNode",
    "ObjectNode",
    "PrimitiveNode",
    "ResourceWrapper",
    "SchemaNode",
    "UnsupportedSchemaShape",
    "generate_types",
    "main",
    "run_generation",
]
