"""Pydantic models for the parts of a CustomResourceDefinition the generator reads."""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SchemaProps(BaseModel):
    """Structural schema node, a subset of Kubernetes ``JSONSchemaProps``.

    Keywords the generator does not model are accepted and ignored.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    type: Optional[str] = None
    format: Optional[str] = None
    description: Optional[str] = None
    properties: Optional[dict[str, SchemaProps]] = None
    required: Optional[list[str]] = None
    items: Optional[SchemaProps] = None
    additional_properties: Optional[Union[bool, SchemaProps]] = Field(
        default=None, alias="additionalProperties"
    )
    enum: Optional[list[Any]] = None
    nullable: Optional[bool] = None
    preserve_unknown_fields: Optional[bool] = Field(
        default=None, alias="x-kubernetes-preserve-unknown-fields"
    )
    int_or_string: Optional[bool] = Field(default=None, alias="x-kubernetes-int-or-string")


class CRDNames(BaseModel):
    """Names block of a CRD; only the kind drives generation."""

    kind: str
    plural: Optional[str] = None
    singular: Optional[str] = None


class CRDValidation(BaseModel):
    """Schema holder of one CRD version."""

    model_config = ConfigDict(populate_by_name=True)

    open_api_v3_schema: Optional[SchemaProps] = Field(default=None, alias="openAPIV3Schema")


class CRDVersion(BaseModel):
    """One served version of a CRD."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    served: bool = True
    storage: bool = False
    validation: Optional[CRDValidation] = Field(default=None, alias="schema")


class CRDSpec(BaseModel):
    """The ``spec`` block of a CRD."""

    group: str
    names: CRDNames
    scope: str = "Namespaced"
    versions: list[CRDVersion] = Field(default_factory=list)


class CustomResourceDefinition(BaseModel):
    """A ``apiextensions.k8s.io`` CustomResourceDefinition document."""

    model_config = ConfigDict(populate_by_name=True)

    api_version: str = Field(alias="apiVersion")
    kind: Literal["CustomResourceDefinition"]
    spec: CRDSpec
