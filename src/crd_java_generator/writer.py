"""Filesystem writer for generated Java sources."""

from __future__ import annotations

import logging
from pathlib import Path

from .model_types import GeneratedType, GenerationResult

logger = logging.getLogger(__name__)


class WriteError(RuntimeError):
    """Raised when output files cannot be written."""


def create_output_layout(output_dir: Path) -> Path:
    """Create the output directory, refusing to reuse an existing one.

    Args:
        output_dir (Path): Root output directory to create.

    Returns:
        Path: The created directory.
    """
    if output_dir.exists():
        raise WriteError(f"Output directory already exists: {output_dir}")
    try:
        output_dir.mkdir(parents=True, exist_ok=False)
    except OSError as exc:
        raise WriteError(f"Failed to create output directory {output_dir}: {exc}") from exc
    return output_dir


def source_path(output_dir: Path, record: GeneratedType) -> Path:
    """Return ``<output>/<package dirs>/<Name>.java`` for a top-level record."""
    package_dirs = record.namespace.split(".") if record.namespace else []
    return output_dir.joinpath(*package_dirs, f"{record.name}.java")


def write_generated_types(*, output_dir: Path, result: GenerationResult) -> list[Path]:
    """Write each top-level record as its own compilation unit.

    Nested records are already embedded in their owning class and are skipped.

    Args:
        output_dir (Path): Root of the Java source tree.
        result (GenerationResult): Records to write.

    Returns:
        list[Path]: Written files, in record order.
    """
    written: list[Path] = []
    for record in result.top_level:
        path = source_path(output_dir, record)
        if path.exists():
            raise WriteError(
                f"Refusing to overwrite {path}; {record.qualified_name} was generated twice"
            )
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(f"Failed to create package directory {path.parent}: {exc}") from exc
        _write_file(path, record.source)
        logger.debug("Wrote %s", path)
        written.append(path)
    return written


def _write_file(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"Failed to write file {path}: {exc}") from exc
