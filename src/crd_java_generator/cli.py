"""Command line interface for CRD to Java generation."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

from .config import AffixPolicy, Config, ConfigError, load_config
from .generator import CRDLoadError, WriteError, run_generation
from .naming import GenerationError


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    parser = argparse.ArgumentParser(
        prog="crd-to-java-generator",
        description="Generate Java model classes from Kubernetes CustomResourceDefinition YAML",
    )
    parser.add_argument("--input", required=True, help="Path to a CRD YAML file")
    parser.add_argument("--output", required=True, help="Output directory for generated sources")
    parser.add_argument("--config", help="Optional YAML file with generation options")
    parser.add_argument(
        "--no-enum-uppercase",
        action="store_true",
        help="Keep enum literal casing for enum constant names",
    )
    policies = [policy.value for policy in AffixPolicy]
    parser.add_argument(
        "--prefix-policy",
        choices=policies,
        help="Where the kind prefix is added to generated class names",
    )
    parser.add_argument("--suffix", help="Suffix appended to generated class names")
    parser.add_argument(
        "--suffix-policy",
        choices=policies,
        help="Where the suffix is added to generated class names",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log generation progress")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run CLI and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _build_config(args)
        run = run_generation(
            input_path=Path(args.input),
            output_dir=Path(args.output),
            config=config,
        )
    except (ConfigError, CRDLoadError, WriteError, GenerationError) as exc:
        parser.error(str(exc))
        return 2

    for warning in run.warnings:
        print(f"Warning: {warning}")
    print(f"Generated {len(run.written_files)} Java sources in {run.output_dir}")
    return 0


def _build_config(args: argparse.Namespace) -> Config:
    config = load_config(Path(args.config)) if args.config else Config()
    overrides: dict[str, Any] = {}
    if args.no_enum_uppercase:
        overrides["enum_uppercase"] = False
    if args.prefix_policy:
        overrides["prefix_policy"] = AffixPolicy(args.prefix_policy)
    if args.suffix is not None:
        overrides["suffix"] = args.suffix
    if args.suffix_policy:
        overrides["suffix_policy"] = AffixPolicy(args.suffix_policy)
    return config.model_copy(update=overrides) if overrides else config


if __name__ == "__main__":
    raise SystemExit(main())
