"""Schema node variants and their resolution into generated Java types.

Every node exposes ``type_reference`` (the Java type a field declares when it
holds this node) and ``resolve()``, which returns that reference together with
the ``GenerationResult`` of the node's subtree. Children are resolved first and
their records precede the record a node contributes itself.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass
import logging
from typing import Any, Optional, TypeAlias, Union

from .codegen_java import ENUM_VALUE_FIELD, render_compilation_unit, render_enum
from .config import Config
from .crd_types import SchemaProps
from .model_types import (
    ClassDeclaration,
    EnumConstant,
    EnumDeclaration,
    GeneratedType,
    GenerationResult,
    JavaField,
    ResourceDeclaration,
    ResourceFlags,
)
from .naming import (
    GenerationError,
    apply_affixes,
    enum_constant,
    ensure_identifier,
    field_name,
    package_segment,
    qualify,
    type_name,
)
from .type_mapping import (
    ANY_TYPE,
    INT_OR_STRING,
    JAVA_OBJECT,
    JAVA_PRIMITIVE_TYPES,
    PrimitiveTypeTable,
    list_of,
    lookup_primitive,
    map_of,
)

logger = logging.getLogger(__name__)

CATCH_ALL_FIELD = "additionalProperties"

SchemaNode: TypeAlias = Union["PrimitiveNode", "EnumNode", "ArrayNode", "MapNode", "ObjectNode", "ResourceWrapper"]


class UnsupportedSchemaShape(GenerationError):
    """Raised when a property schema matches no known node variant."""

    def __init__(self, path: tuple[str, ...], reason: str) -> None:
        super().__init__(f"Unsupported schema at {'.'.join(path)}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class PrimitiveNode:
    """A Java type name supplied by the caller, e.g. ``java.lang.String``."""

    type_name: str

    @property
    def type_reference(self) -> str:
        return self.type_name

    def resolve(self) -> tuple[str, GenerationResult]:
        return self.type_reference, GenerationResult()


@dataclass(frozen=True)
class ArrayNode:
    """A list of ``element``."""

    element: SchemaNode

    @property
    def type_reference(self) -> str:
        return list_of(self.element.type_reference)

    def resolve(self) -> tuple[str, GenerationResult]:
        element_reference, result = self.element.resolve()
        return list_of(element_reference), result


@dataclass(frozen=True)
class MapNode:
    """A string-keyed map of ``value``."""

    value: SchemaNode

    @property
    def type_reference(self) -> str:
        return map_of(self.value.type_reference)

    def resolve(self) -> tuple[str, GenerationResult]:
        value_reference, result = self.value.resolve()
        return map_of(value_reference), result


@dataclass(frozen=True)
class EnumNode:
    """A closed set of string literals, emitted as an enum nested in its owner."""

    name: str
    values: Sequence[str]
    config: Config
    namespace: Optional[str] = None
    prefix: str = ""
    suffix: str = ""
    description: Optional[str] = None
    top_level: bool = True

    @property
    def type_reference(self) -> str:
        return apply_affixes(
            type_name(self.name),
            prefix=self.prefix,
            suffix=self.suffix,
            config=self.config,
            top_level=self.top_level,
        )

    def resolve(self) -> tuple[str, GenerationResult]:
        name = self.type_reference
        if not self.values:
            logger.warning("Enum %s declares no values; generating an empty enum", name)
        # the rendered enum already declares a field named value
        used_identifiers = {ENUM_VALUE_FIELD}
        constants: list[EnumConstant] = []
        for value in self.values:
            identifier = _unique_field_name(
                enum_constant(value, uppercase=self.config.enum_uppercase),
                used_identifiers,
            )
            used_identifiers.add(identifier)
            constants.append(EnumConstant(identifier=identifier, value=value))
        declaration = EnumDeclaration(
            name=name,
            namespace=self.namespace,
            constants=tuple(constants),
            description=self.description,
        )
        record = GeneratedType(
            name=name,
            namespace=self.namespace,
            declaration=declaration,
            source=render_enum(declaration),
        )
        return name, GenerationResult().with_nested(record)


@dataclass(frozen=True)
class ObjectNode:
    """A structured object, emitted as one top-level Java class.

    Nested objects are placed in a package derived from this object's name, so
    same-named classes reached through different property paths never collide.
    """

    name: str
    config: Config
    namespace: Optional[str] = None
    properties: Optional[Mapping[str, SchemaProps]] = None
    required: Optional[Collection[str]] = None
    preserve_unknown_fields: bool = False
    prefix: str = ""
    suffix: str = ""
    description: Optional[str] = None
    top_level: bool = True
    primitive_types: Optional[PrimitiveTypeTable] = None
    path: tuple[str, ...] = ()

    @property
    def bare_name(self) -> str:
        return type_name(self.name)

    @property
    def class_name(self) -> str:
        return apply_affixes(
            self.bare_name,
            prefix=self.prefix,
            suffix=self.suffix,
            config=self.config,
            top_level=self.top_level,
        )

    @property
    def type_reference(self) -> str:
        return qualify(self.namespace, self.class_name)

    @property
    def child_namespace(self) -> str:
        return qualify(self.namespace, package_segment(self.bare_name))

    def resolve(self) -> tuple[str, GenerationResult]:
        """Resolve every property, then append this object's class.

        Returns:
            tuple[str, GenerationResult]: Qualified class name and the records of
            this subtree, descendants first.
        """
        logger.debug("Resolving object %s", self.type_reference)
        required = set(self.required or ())
        used_names: set[str] = {CATCH_ALL_FIELD} if self.preserve_unknown_fields else set()
        type_names = _SiblingTypeNames.for_owner(self.class_name)
        result = GenerationResult()
        fields: list[JavaField] = []
        enums: list[EnumDeclaration] = []

        for key, schema in (self.properties or {}).items():
            child = self.classify(key, schema, type_names)
            child_reference, child_result = child.resolve()
            result = result.merge(child_result)
            if isinstance(_innermost(child), EnumNode):
                enums.extend(
                    record.declaration
                    for record in child_result.nested
                    if isinstance(record.declaration, EnumDeclaration)
                )

            name = _unique_field_name(field_name(key), used_names)
            used_names.add(name)
            fields.append(
                JavaField(
                    name=name,
                    json_name=key,
                    type_reference=child_reference,
                    required=key in required,
                    description=schema.description,
                )
            )

        if self.preserve_unknown_fields:
            fields.append(
                JavaField(
                    name=CATCH_ALL_FIELD,
                    json_name=None,
                    type_reference=map_of(JAVA_OBJECT),
                    required=False,
                    catch_all=True,
                )
            )

        declaration = ClassDeclaration(
            name=self.class_name,
            namespace=self.namespace,
            fields=tuple(fields),
            enums=tuple(enums),
            description=self.description,
        )
        record = GeneratedType(
            name=declaration.name,
            namespace=declaration.namespace,
            declaration=declaration,
            source=render_compilation_unit(declaration),
        )
        return self.type_reference, result.with_top_level(record)

    def classify(
        self,
        key: str,
        schema: SchemaProps,
        type_names: Optional[_SiblingTypeNames] = None,
    ) -> SchemaNode:
        """Build the node that generates the type of property ``key``.

        Args:
            key (str): Property name.
            schema (SchemaProps): Property schema.
            type_names (Optional[_SiblingTypeNames]): Type names already taken by
                siblings; new object and enum names are made unique against it.

        Returns:
            SchemaNode: Unresolved node for the property.
        """
        if type_names is None:
            type_names = _SiblingTypeNames.for_owner(self.class_name)
        return self._classify(key, schema, (*self._own_path, key), type_names)

    @property
    def _own_path(self) -> tuple[str, ...]:
        return self.path or (self.name,)

    def _classify(
        self,
        key: str,
        schema: SchemaProps,
        path: tuple[str, ...],
        type_names: _SiblingTypeNames,
    ) -> SchemaNode:
        if schema.int_or_string:
            return PrimitiveNode(INT_OR_STRING)

        schema_type = schema.type
        if schema_type == "array":
            if schema.items is None:
                raise UnsupportedSchemaShape(path, "array schema without items")
            return ArrayNode(self._classify(key, schema.items, (*path, "items"), type_names))

        if schema_type == "object" or (schema_type is None and schema.properties is not None):
            if not schema.properties:
                additional = schema.additional_properties
                if isinstance(additional, SchemaProps):
                    value_path = (*path, "additionalProperties")
                    return MapNode(self._classify(key, additional, value_path, type_names))
                if additional is True:
                    return MapNode(PrimitiveNode(JAVA_OBJECT))
            name = self._unique_type_name(key, type_names.classes)
            return self._child_object(name, schema, path)

        if schema_type == "string" and schema.enum is not None:
            return EnumNode(
                name=self._unique_type_name(key, type_names.enums),
                values=_string_literals(schema.enum, path),
                config=self.config,
                namespace=self.namespace,
                prefix=self.prefix,
                suffix=self.suffix,
                description=schema.description,
                top_level=False,
            )

        if schema_type is None:
            if schema.preserve_unknown_fields:
                return PrimitiveNode(ANY_TYPE)
            raise UnsupportedSchemaShape(path, "schema declares no type")

        mapped = lookup_primitive(
            schema_type,
            schema.format,
            self.primitive_types or JAVA_PRIMITIVE_TYPES,
        )
        if mapped is None:
            raise UnsupportedSchemaShape(path, f"unknown type {schema_type!r}")
        return PrimitiveNode(mapped)

    def _unique_type_name(self, key: str, used_names: set[str]) -> str:
        # siblings share prefix, suffix and nesting, so compare decorated names
        base_name = type_name(key)
        name = base_name
        suffix = 2
        while self._nested_type_name(name) in used_names:
            name = f"{base_name}{suffix}"
            suffix += 1
        used_names.add(self._nested_type_name(name))
        return name

    def _nested_type_name(self, bare_name: str) -> str:
        return apply_affixes(
            bare_name,
            prefix=self.prefix,
            suffix=self.suffix,
            config=self.config,
            top_level=False,
        )

    def _child_object(self, name: str, schema: SchemaProps, path: tuple[str, ...]) -> ObjectNode:
        return ObjectNode(
            name=name,
            config=self.config,
            namespace=self.child_namespace,
            properties=schema.properties or {},
            required=schema.required or (),
            preserve_unknown_fields=bool(schema.preserve_unknown_fields),
            prefix=self.prefix,
            suffix=self.suffix,
            description=schema.description,
            top_level=False,
            primitive_types=self.primitive_types,
            path=path,
        )


@dataclass(frozen=True)
class ResourceWrapper:
    """The custom resource class for one kind, built from resolved spec and status types.

    The four flags are carried into the declaration unchanged; they do not
    alter the rendered class.
    """

    namespace: Optional[str]
    kind: str
    group: str
    version: str
    spec_type: str
    status_type: str
    with_spec: bool
    with_status: bool
    storage: bool
    served: bool
    namespaced: bool = False

    @property
    def type_reference(self) -> str:
        return qualify(self.namespace, ensure_identifier(self.kind, source=self.kind))

    def resolve(self) -> tuple[str, GenerationResult]:
        declaration = ResourceDeclaration(
            name=ensure_identifier(self.kind, source=self.kind),
            namespace=self.namespace,
            group=self.group,
            version=self.version,
            spec_type=self.spec_type,
            status_type=self.status_type,
            flags=ResourceFlags(
                with_spec=self.with_spec,
                with_status=self.with_status,
                storage=self.storage,
                served=self.served,
            ),
            namespaced=self.namespaced,
        )
        record = GeneratedType(
            name=declaration.name,
            namespace=declaration.namespace,
            declaration=declaration,
            source=render_compilation_unit(declaration),
        )
        return self.type_reference, GenerationResult().with_top_level(record)


@dataclass
class _SiblingTypeNames:
    """Type names taken among the properties of one object.

    Child classes live in the object's child package and enums inside the
    object's class, so each kind is tracked separately. Enums may not reuse
    the name of the class enclosing them.
    """

    classes: set[str]
    enums: set[str]

    @classmethod
    def for_owner(cls, owner_class_name: str) -> _SiblingTypeNames:
        return cls(classes=set(), enums={owner_class_name})


def _innermost(node: SchemaNode) -> SchemaNode:
    while isinstance(node, (ArrayNode, MapNode)):
        node = node.element if isinstance(node, ArrayNode) else node.value
    return node


def _string_literals(values: list[Any], path: tuple[str, ...]) -> tuple[str, ...]:
    literals: list[str] = []
    for value in values:
        # null only marks a nullable enum
        if value is None:
            continue
        if not isinstance(value, str):
            raise UnsupportedSchemaShape(path, f"non-string enum value {value!r}")
        literals.append(value)
    return tuple(literals)


def _unique_field_name(candidate: str, used_names: set[str]) -> str:
    if candidate not in used_names:
        return candidate
    suffix = 2
    while f"{candidate}_{suffix}" in used_names:
        suffix += 1
    return f"{candidate}_{suffix}"
