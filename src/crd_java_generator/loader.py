"""CustomResourceDefinition document loading and basic validation."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from .crd_types import CustomResourceDefinition
from .json_types import JSONValue


class CRDLoadError(RuntimeError):
    """Raised when a source CRD document cannot be loaded."""


def load_crd_documents(path: Path) -> list[CustomResourceDefinition]:
    """Load and validate every CRD document of a (multi-document) YAML file.

    Args:
        path (Path): YAML file holding one or more CRDs separated by ``---``.

    Returns:
        list[CustomResourceDefinition]: Validated CRDs in file order.
    """
    try:
        with path.open("r", encoding="utf-8") as handle:
            payloads = list(yaml.safe_load_all(handle))
    except OSError as exc:
        raise CRDLoadError(f"Failed to read CRD file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise CRDLoadError(f"Failed to parse YAML in {path}: {exc}") from exc

    documents: list[CustomResourceDefinition] = []
    for index, payload in enumerate(payloads):
        payload_value: JSONValue = payload
        if payload_value is None:
            continue
        if not isinstance(payload_value, dict):
            raise CRDLoadError(
                f"Document {index} of {path} must deserialize to a mapping, "
                f"got {type(payload_value)!r}"
            )
        try:
            documents.append(CustomResourceDefinition.model_validate(payload_value))
        except ValidationError as exc:
            raise CRDLoadError(
                f"CRD validation failed for document {index} of {path}: {exc}"
            ) from exc

    if not documents:
        raise CRDLoadError(f"No CustomResourceDefinition found in {path}")
    return documents
