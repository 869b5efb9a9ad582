"""High-level generator orchestration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import Config
from .crd_types import CRDVersion, CustomResourceDefinition, SchemaProps
from .loader import CRDLoadError, load_crd_documents
from .model_types import GenerationResult, GenerationRun
from .naming import package_for_group, qualify
from .nodes import ObjectNode, ResourceWrapper, SchemaNode
from .writer import WriteError, create_output_layout, write_generated_types

logger = logging.getLogger(__name__)

_VOID = "java.lang.Void"
_NAMESPACED_SCOPE = "Namespaced"


def generate_types(root: SchemaNode) -> GenerationResult:
    """Resolve one root node into its complete generation result."""
    _, result = root.resolve()
    return result


def run_generation(
    *,
    input_path: Path,
    output_dir: Path,
    config: Optional[Config] = None,
) -> GenerationRun:
    """Generate Java sources for every CRD version found in a YAML file.

    Args:
        input_path (Path): Path to the CRD YAML file.
        output_dir (Path): Root of the Java source tree to create.
        config (Optional[Config]): Generation policy; defaults to ``Config()``.

    Returns:
        GenerationRun: Written files and generation warnings.
    """
    config = config or Config()
    documents = load_crd_documents(input_path)
    create_output_layout(output_dir)

    result = GenerationResult()
    warnings: list[str] = []
    for crd in documents:
        crd_result, crd_warnings = generate_crd(crd, config)
        result = result.merge(crd_result)
        warnings.extend(crd_warnings)

    written = write_generated_types(output_dir=output_dir, result=result)
    logger.info("Wrote %d Java sources to %s", len(written), output_dir)
    return GenerationRun(
        output_dir=output_dir,
        written_files=tuple(written),
        warnings=tuple(warnings),
    )


def generate_crd(
    crd: CustomResourceDefinition,
    config: Config,
) -> tuple[GenerationResult, list[str]]:
    """Generate the spec, status and resource classes of every version of a CRD."""
    kind = crd.spec.names.kind
    base_package = package_for_group(crd.spec.group)
    logger.info("Generating %s.%s (%d versions)", kind, crd.spec.group, len(crd.spec.versions))

    result = GenerationResult()
    warnings: list[str] = []
    for version in crd.spec.versions:
        version_result, version_warnings = _generate_version(
            crd=crd,
            version=version,
            namespace=qualify(base_package or None, version.name),
            config=config,
        )
        result = result.merge(version_result)
        warnings.extend(version_warnings)
    return result, warnings


def _generate_version(
    *,
    crd: CustomResourceDefinition,
    version: CRDVersion,
    namespace: str,
    config: Config,
) -> tuple[GenerationResult, list[str]]:
    kind = crd.spec.names.kind
    warnings: list[str] = []
    schema = version.validation.open_api_v3_schema if version.validation else None
    if schema is None:
        warning = f"{kind} version {version.name} has no openAPIV3Schema; spec and status are Void"
        logger.warning("%s", warning)
        warnings.append(warning)

    properties = (schema.properties if schema else None) or {}
    result = GenerationResult()
    type_names: dict[str, str] = {}
    for section in ("spec", "status"):
        section_schema = properties.get(section)
        if section_schema is None:
            type_names[section] = _VOID
            continue
        node = _section_node(section, section_schema, kind=kind, namespace=namespace, config=config)
        type_names[section], section_result = node.resolve()
        result = result.merge(section_result)

    wrapper = ResourceWrapper(
        namespace=namespace,
        kind=kind,
        group=crd.spec.group,
        version=version.name,
        spec_type=type_names["spec"],
        status_type=type_names["status"],
        with_spec="spec" in properties,
        with_status="status" in properties,
        storage=version.storage,
        served=version.served,
        namespaced=crd.spec.scope == _NAMESPACED_SCOPE,
    )
    return result.merge(generate_types(wrapper)), warnings


def _section_node(
    section: str,
    schema: SchemaProps,
    *,
    kind: str,
    namespace: str,
    config: Config,
) -> ObjectNode:
    return ObjectNode(
        name=section,
        config=config,
        namespace=namespace,
        properties=schema.properties or {},
        required=schema.required or (),
        preserve_unknown_fields=bool(schema.preserve_unknown_fields),
        prefix=kind,
        suffix=config.suffix,
        description=schema.description,
        path=(kind, section),
    )


__all__ = [
    "CRDLoadError",
    "WriteError",
    "generate_crd",
    "generate_types",
    "run_generation",
]
