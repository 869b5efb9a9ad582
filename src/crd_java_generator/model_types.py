"""Internal datatypes for generated Java declarations and generation output."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TypeAlias, Union


@dataclass(frozen=True)
class JavaField:
    """Represents a single field of a generated Java class."""

    name: str
    json_name: Optional[str]
    type_reference: str
    required: bool
    description: Optional[str] = None
    catch_all: bool = False


@dataclass(frozen=True)
class EnumConstant:
    """One constant of a generated enum and the literal it serializes to."""

    identifier: str
    value: str


@dataclass(frozen=True)
class EnumDeclaration:
    """Represents a generated Java enum, always nested in its owning class."""

    name: str
    namespace: Optional[str]
    constants: tuple[EnumConstant, ...]
    description: Optional[str] = None


@dataclass(frozen=True)
class ClassDeclaration:
    """Represents a generated Java class with its embedded enums."""

    name: str
    namespace: Optional[str]
    fields: tuple[JavaField, ...]
    enums: tuple[EnumDeclaration, ...] = ()
    description: Optional[str] = None

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def get_field(self, name: str) -> Optional[JavaField]:
        for field in self.fields:
            if field.name == name:
                return field
        return None


@dataclass(frozen=True)
class ResourceFlags:
    """Feature toggles carried by a resource wrapper, passed through unchanged."""

    with_spec: bool
    with_status: bool
    storage: bool
    served: bool


@dataclass(frozen=True)
class ResourceDeclaration:
    """Represents the custom resource class tying spec and status together."""

    name: str
    namespace: Optional[str]
    group: str
    version: str
    spec_type: str
    status_type: str
    flags: ResourceFlags
    namespaced: bool = False


Declaration: TypeAlias = Union[ClassDeclaration, EnumDeclaration, ResourceDeclaration]


@dataclass(frozen=True)
class GeneratedType:
    """A resolved type definition and its rendered Java source."""

    name: str
    namespace: Optional[str]
    declaration: Declaration
    source: str

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


@dataclass(frozen=True)
class GenerationResult:
    """Ordered log of generated types, split into top-level and nested buckets."""

    top_level: tuple[GeneratedType, ...] = ()
    nested: tuple[GeneratedType, ...] = ()

    def merge(self, other: GenerationResult) -> GenerationResult:
        """Append ``other``'s entries after this result's entries."""
        return GenerationResult(
            top_level=self.top_level + other.top_level,
            nested=self.nested + other.nested,
        )

    def with_top_level(self, record: GeneratedType) -> GenerationResult:
        return GenerationResult(top_level=(*self.top_level, record), nested=self.nested)

    def with_nested(self, record: GeneratedType) -> GenerationResult:
        return GenerationResult(top_level=self.top_level, nested=(*self.nested, record))


@dataclass(frozen=True)
class GenerationRun:
    """Files written by one generator run and the warnings it produced."""

    output_dir: Path
    written_files: tuple[Path, ...]
    warnings: tuple[str, ...]
