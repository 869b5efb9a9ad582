"""Java source rendering for generated declarations."""

from __future__ import annotations

from collections.abc import Iterable
import json
from typing import Optional, Union

from .model_types import ClassDeclaration, EnumDeclaration, JavaField, ResourceDeclaration

_INDENT = "    "
ENUM_VALUE_FIELD = "value"

_JACKSON = "com.fasterxml.jackson.annotation"
_JSON_INCLUDE = f"@{_JACKSON}.JsonInclude({_JACKSON}.JsonInclude.Include.NON_NULL)"
_JSON_DESERIALIZE = (
    "@com.fasterxml.jackson.databind.annotation.JsonDeserialize("
    "using = com.fasterxml.jackson.databind.JsonDeserializer.None.class)"
)
_JSON_SETTER_SKIP_NULLS = f"@{_JACKSON}.JsonSetter(nulls = {_JACKSON}.Nulls.SKIP)"
_NOT_NULL = "@javax.validation.constraints.NotNull"
_KUBERNETES_RESOURCE = "io.fabric8.kubernetes.api.model.KubernetesResource"
_NAMESPACED = "io.fabric8.kubernetes.api.model.Namespaced"
_CUSTOM_RESOURCE = "io.fabric8.kubernetes.client.CustomResource"
_MODEL_ANNOTATION = "io.fabric8.kubernetes.model.annotation"


def render_compilation_unit(declaration: Union[ClassDeclaration, ResourceDeclaration]) -> str:
    """Render a top-level declaration as a complete Java source file.

    Args:
        declaration (Union[ClassDeclaration, ResourceDeclaration]): Declaration to render.

    Returns:
        str: Java source with a package line when the declaration has a namespace.
    """
    lines: list[str] = []
    if declaration.namespace:
        lines.extend([f"package {declaration.namespace};", ""])
    if isinstance(declaration, ResourceDeclaration):
        lines.extend(_resource_lines(declaration))
    else:
        lines.extend(_class_lines(declaration))
    return "\n".join(lines) + "\n"


def render_enum(declaration: EnumDeclaration) -> str:
    """Render an enum as a member fragment to embed in its owning class."""
    return "\n".join(_enum_lines(declaration)) + "\n"


def java_string(value: str) -> str:
    """Return a double-quoted Java string literal."""
    return json.dumps(value)


def _class_lines(declaration: ClassDeclaration) -> list[str]:
    lines = _javadoc(declaration.description)
    property_order = ", ".join(
        java_string(field.json_name)
        for field in declaration.fields
        if not field.catch_all and field.json_name is not None
    )
    lines.extend(
        [
            _JSON_INCLUDE,
            f"@{_JACKSON}.JsonPropertyOrder({{{property_order}}})",
            _JSON_DESERIALIZE,
            f"public class {declaration.name} implements {_KUBERNETES_RESOURCE} {{",
        ]
    )

    members: list[list[str]] = []
    for field in declaration.fields:
        members.append(_field_lines(field))
        members.extend(_accessor_blocks(field))
    for enum in declaration.enums:
        members.append(_enum_lines(enum))

    for member in members:
        lines.append("")
        lines.extend(_indent(member))
    lines.append("}")
    return lines


def _field_lines(field: JavaField) -> list[str]:
    if field.catch_all:
        return [
            f"@{_JACKSON}.JsonIgnore",
            f"private {field.type_reference} {field.name} = new java.util.HashMap<>();",
        ]

    lines: list[str] = []
    if field.json_name is not None:
        lines.append(f"@{_JACKSON}.JsonProperty({java_string(field.json_name)})")
    if field.description:
        lines.append(f"@{_JACKSON}.JsonPropertyDescription({java_string(field.description)})")
    if field.required:
        lines.append(_NOT_NULL)
    lines.append(_JSON_SETTER_SKIP_NULLS)
    lines.append(f"private {field.type_reference} {field.name};")
    return lines


def _accessor_blocks(field: JavaField) -> list[list[str]]:
    accessor = field.name[:1].upper() + field.name[1:]
    if field.catch_all:
        return [
            [
                f"@{_JACKSON}.JsonAnyGetter",
                f"public {field.type_reference} get{accessor}() {{",
                f"{_INDENT}return this.{field.name};",
                "}",
            ],
            [
                f"@{_JACKSON}.JsonAnySetter",
                "public void setAdditionalProperty(java.lang.String key, java.lang.Object value) {",
                f"{_INDENT}this.{field.name}.put(key, value);",
                "}",
            ],
        ]
    return [
        [
            f"public {field.type_reference} get{accessor}() {{",
            f"{_INDENT}return {field.name};",
            "}",
        ],
        [
            f"public void set{accessor}({field.type_reference} {field.name}) {{",
            f"{_INDENT}this.{field.name} = {field.name};",
            "}",
        ],
    ]


def _enum_lines(declaration: EnumDeclaration) -> list[str]:
    lines = _javadoc(declaration.description)
    lines.extend([f"public enum {declaration.name} {{", ""])
    last_index = len(declaration.constants) - 1
    for index, constant in enumerate(declaration.constants):
        terminator = ";" if index == last_index else ","
        literal = java_string(constant.value)
        lines.append(f"{_INDENT}@{_JACKSON}.JsonProperty({literal})")
        lines.append(f"{_INDENT}{constant.identifier}({literal}){terminator}")
    if not declaration.constants:
        lines.append(f"{_INDENT};")
    lines.extend(
        [
            "",
            f"{_INDENT}private final java.lang.String {ENUM_VALUE_FIELD};",
            "",
            f"{_INDENT}{declaration.name}(java.lang.String {ENUM_VALUE_FIELD}) {{",
            f"{_INDENT}{_INDENT}this.{ENUM_VALUE_FIELD} = {ENUM_VALUE_FIELD};",
            f"{_INDENT}}}",
            "",
            f"{_INDENT}@{_JACKSON}.JsonValue",
            f"{_INDENT}public java.lang.String getValue() {{",
            f"{_INDENT}{_INDENT}return {ENUM_VALUE_FIELD};",
            f"{_INDENT}}}",
            "}",
        ]
    )
    return lines


def _resource_lines(declaration: ResourceDeclaration) -> list[str]:
    implements = f" implements {_NAMESPACED}" if declaration.namespaced else ""
    base = f"{_CUSTOM_RESOURCE}<{declaration.spec_type}, {declaration.status_type}>"
    return [
        f"@{_MODEL_ANNOTATION}.Version({java_string(declaration.version)})",
        f"@{_MODEL_ANNOTATION}.Group({java_string(declaration.group)})",
        f"public class {declaration.name} extends {base}{implements} {{",
        "}",
    ]


def _javadoc(text: Optional[str]) -> list[str]:
    if not text:
        return []
    body = text.strip().replace("*/", "*&#47;")
    return ["/**", *(f" * {line}".rstrip() for line in body.splitlines()), " */"]


def _indent(lines: Iterable[str]) -> list[str]:
    return [f"{_INDENT}{line}" if line else "" for line in lines]
