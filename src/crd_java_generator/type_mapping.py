"""Mapping from schema ``type``/``format`` pairs to Java type names."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional, TypeAlias

PrimitiveTypeTable: TypeAlias = Mapping[tuple[str, Optional[str]], str]

JAVA_STRING = "java.lang.String"
JAVA_OBJECT = "java.lang.Object"
INT_OR_STRING = "io.fabric8.kubernetes.api.model.IntOrString"
ANY_TYPE = "com.fasterxml.jackson.databind.JsonNode"

JAVA_PRIMITIVE_TYPES: PrimitiveTypeTable = MappingProxyType(
    {
        ("string", None): JAVA_STRING,
        ("integer", None): "java.lang.Long",
        ("integer", "int32"): "java.lang.Integer",
        ("integer", "int64"): "java.lang.Long",
        ("number", None): "java.lang.Double",
        ("number", "float"): "java.lang.Float",
        ("number", "double"): "java.lang.Double",
        ("boolean", None): "java.lang.Boolean",
    }
)


def list_of(element_reference: str) -> str:
    return f"java.util.List<{element_reference}>"


def map_of(value_reference: str) -> str:
    return f"java.util.Map<{JAVA_STRING}, {value_reference}>"


def lookup_primitive(
    schema_type: str,
    schema_format: Optional[str],
    table: PrimitiveTypeTable = JAVA_PRIMITIVE_TYPES,
) -> Optional[str]:
    """Return the Java type for a primitive schema, falling back to the format-less entry."""
    if schema_format is not None:
        mapped = table.get((schema_type, schema_format))
        if mapped is not None:
            return mapped
    return table.get((schema_type, None))
