"""Integration tests for generator behavior."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from crd_java_generator.cli import main
from crd_java_generator.config import AffixPolicy, Config
from crd_java_generator.generator import WriteError, run_generation
from crd_java_generator.loader import CRDLoadError
from crd_java_generator.naming import InvalidIdentifier
from crd_java_generator.nodes import UnsupportedSchemaShape
from .fixture_helpers import fixture_path, parametrize_fixtures

_SRC_DIR = Path(__file__).resolve().parents[1] / "src"

_INLINE_CRD = """
apiVersion: apiextensions.k8s.io/v1
kind: CustomResourceDefinition
spec:
  group: demo.io
  names:
    kind: Demo
  versions:
    - name: v1
      schema:
        openAPIV3Schema:
          type: object
          properties:
            spec:
              type: object
              properties:
                {key}:
                  {body}
"""


def _write_inline_crd(path: Path, *, key: str, body: str) -> None:
    path.write_text(_INLINE_CRD.format(key=key, body=body), encoding="utf-8")


def _relative_sources(run_files: tuple[Path, ...], output_dir: Path) -> list[str]:
    return sorted(path.relative_to(output_dir).as_posix() for path in run_files)


@parametrize_fixtures()
def test_generation_smoke(crd_path: Path, tmp_path: Path) -> None:
    """Generate sources for each fixture CRD."""
    output_dir = tmp_path / crd_path.stem

    run = run_generation(input_path=crd_path, output_dir=output_dir)

    assert run.written_files
    for path in run.written_files:
        assert path.is_file()
        assert path.suffix == ".java"
        assert path.read_text(encoding="utf-8").startswith("package ")


def test_crontab_layout(tmp_path: Path) -> None:
    """Write spec, status, nested and resource classes under the group package."""
    output_dir = tmp_path / "crontab"

    run = run_generation(input_path=fixture_path("crontab.yaml"), output_dir=output_dir)

    assert run.warnings == ()
    assert _relative_sources(run.written_files, output_dir) == [
        "com/example/stable/v1/CronTab.java",
        "com/example/stable/v1/CronTabSpec.java",
        "com/example/stable/v1/CronTabStatus.java",
        "com/example/stable/v1/spec/Schedule.java",
        "com/example/stable/v1/status/Active.java",
    ]
    resource = (output_dir / "com/example/stable/v1/CronTab.java").read_text(encoding="utf-8")
    assert (
        "extends io.fabric8.kubernetes.client.CustomResource<"
        "com.example.stable.v1.CronTabSpec, com.example.stable.v1.CronTabStatus>"
        " implements io.fabric8.kubernetes.api.model.Namespaced {"
    ) in resource
    assert '@io.fabric8.kubernetes.model.annotation.Group("stable.example.com")' in resource

    spec = (output_dir / "com/example/stable/v1/CronTabSpec.java").read_text(encoding="utf-8")
    assert "package com.example.stable.v1;" in spec
    assert "private java.lang.Integer replicas;" in spec
    assert "private ConcurrencyPolicy concurrencyPolicy;" in spec
    assert "public enum ConcurrencyPolicy {" in spec
    assert 'ALLOW("Allow"),' in spec
    assert "private com.example.stable.v1.spec.Schedule schedule;" in spec
    assert "/**\n * Desired schedule of the job.\n */" in spec

    status = (output_dir / "com/example/stable/v1/CronTabStatus.java").read_text(encoding="utf-8")
    assert "private java.util.List<com.example.stable.v1.status.Active> active;" in status


def test_multi_document_file_and_missing_schema(tmp_path: Path) -> None:
    """Generate every CRD of a multi-document file and warn on schemaless versions."""
    output_dir = tmp_path / "widgets"

    run = run_generation(input_path=fixture_path("widgets.yaml"), output_dir=output_dir)

    assert _relative_sources(run.written_files, output_dir) == [
        "io/acme/v1/Gadget.java",
        "io/acme/v1/GadgetSpec.java",
        "io/acme/v1/Widget.java",
        "io/acme/v1/WidgetSpec.java",
        "io/acme/v1/spec/Parts.java",
        "io/acme/v1alpha1/Widget.java",
    ]
    assert len(run.warnings) == 1
    assert "Widget version v1alpha1" in run.warnings[0]

    schemaless = (output_dir / "io/acme/v1alpha1/Widget.java").read_text(encoding="utf-8")
    assert "CustomResource<java.lang.Void, java.lang.Void> {" in schemaless

    widget = (output_dir / "io/acme/v1/Widget.java").read_text(encoding="utf-8")
    assert "CustomResource<io.acme.v1.WidgetSpec, java.lang.Void> {" in widget
    assert "Namespaced" not in widget

    spec = (output_dir / "io/acme/v1/WidgetSpec.java").read_text(encoding="utf-8")
    assert "private io.fabric8.kubernetes.api.model.IntOrString port;" in spec
    assert "private java.util.Map<java.lang.String, java.lang.String> labels;" in spec
    assert "private com.fasterxml.jackson.databind.JsonNode settings;" in spec
    assert "@com.fasterxml.jackson.annotation.JsonAnySetter" in spec

    parts = (output_dir / "io/acme/v1/spec/Parts.java").read_text(encoding="utf-8")
    assert "public enum Kind {" in parts
    assert 'BOLT("bolt"),' in parts
    assert 'NUT("nut");' in parts


def test_prefix_policy_never_drops_kind_prefix(tmp_path: Path) -> None:
    """Name spec and status after their section under the NEVER policy."""
    output_dir = tmp_path / "never"

    run = run_generation(
        input_path=fixture_path("crontab.yaml"),
        output_dir=output_dir,
        config=Config(prefix_policy=AffixPolicy.NEVER),
    )

    assert "com/example/stable/v1/Spec.java" in _relative_sources(run.written_files, output_dir)


def test_output_directory_must_not_exist(tmp_path: Path) -> None:
    """Refuse to generate into an existing directory."""
    output_dir = tmp_path / "existing"
    output_dir.mkdir()

    with pytest.raises(WriteError):
        run_generation(input_path=fixture_path("crontab.yaml"), output_dir=output_dir)


def test_unsupported_schema_is_reported_with_path(tmp_path: Path) -> None:
    """Surface the schema path of an unsupported property."""
    crd_path = tmp_path / "demo.yaml"
    _write_inline_crd(crd_path, key="tags", body="type: array")

    with pytest.raises(UnsupportedSchemaShape) as exc_info:
        run_generation(input_path=crd_path, output_dir=tmp_path / "out")

    assert exc_info.value.path == ("Demo", "spec", "tags")


def test_invalid_nested_name_is_reported(tmp_path: Path) -> None:
    """Raise InvalidIdentifier for a nested object key that cannot name a class."""
    crd_path = tmp_path / "demo.yaml"
    _write_inline_crd(crd_path, key='"9lives"', body="type: object")

    with pytest.raises(InvalidIdentifier):
        run_generation(input_path=crd_path, output_dir=tmp_path / "out")


def test_cli_help_screen() -> None:
    """Render the CLI help text."""
    python_path = [str(_SRC_DIR), os.environ.get("PYTHONPATH", "")]
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(part for part in python_path if part)}
    result = subprocess.run(
        [sys.executable, "-m", "crd_java_generator", "--help"],
        check=False,
        capture_output=True,
        text=True,
        env=env,
    )
    assert result.returncode == 0
    assert "usage:" in result.stdout.lower()


def test_cli_generates_sources(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Generate sources through the CLI entry point."""
    output_dir = tmp_path / "cli"

    exit_code = main(["--input", str(fixture_path("widgets.yaml")), "--output", str(output_dir)])

    assert exit_code == 0
    captured = capsys.readouterr()
    assert "Generated 6 Java sources" in captured.out
    assert "Warning: Widget version v1alpha1" in captured.out


def test_cli_overrides_config_file(tmp_path: Path) -> None:
    """Apply CLI flags on top of the configuration file."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("prefix_policy: always\nenum_uppercase: true\n", encoding="utf-8")
    output_dir = tmp_path / "cli"

    exit_code = main(
        [
            "--input",
            str(fixture_path("crontab.yaml")),
            "--output",
            str(output_dir),
            "--config",
            str(config_path),
            "--prefix-policy",
            "never",
            "--no-enum-uppercase",
        ]
    )

    assert exit_code == 0
    spec = (output_dir / "com/example/stable/v1/Spec.java").read_text(encoding="utf-8")
    assert 'Allow("Allow"),' in spec


def test_cli_reports_errors_through_parser(tmp_path: Path) -> None:
    """Exit with status 2 when the input cannot be loaded."""
    with pytest.raises(SystemExit) as exc_info:
        main(["--input", str(tmp_path / "missing.yaml"), "--output", str(tmp_path / "out")])

    assert exc_info.value.code == 2


def test_load_errors_propagate(tmp_path: Path) -> None:
    """Raise CRDLoadError for files without CRDs."""
    crd_path = tmp_path / "empty.yaml"
    crd_path.write_text("", encoding="utf-8")

    with pytest.raises(CRDLoadError):
        run_generation(input_path=crd_path, output_dir=tmp_path / "out")


def test_suffix_is_applied_to_section_classes(tmp_path: Path) -> None:
    """Append the configured suffix to the spec and status classes."""
    output_dir = tmp_path / "suffixed"

    run = run_generation(
        input_path=fixture_path("crontab.yaml"),
        output_dir=output_dir,
        config=Config(suffix="Model"),
    )

    assert _relative_sources(run.written_files, output_dir) == [
        "com/example/stable/v1/CronTab.java",
        "com/example/stable/v1/CronTabSpecModel.java",
        "com/example/stable/v1/CronTabStatusModel.java",
        "com/example/stable/v1/spec/Schedule.java",
        "com/example/stable/v1/status/Active.java",
    ]
    resource = (output_dir / "com/example/stable/v1/CronTab.java").read_text(encoding="utf-8")
    assert (
        "CustomResource<com.example.stable.v1.CronTabSpecModel, "
        "com.example.stable.v1.CronTabStatusModel>"
    ) in resource


def test_cli_suffix_with_always_policy(tmp_path: Path) -> None:
    """Suffix nested classes too when the CLI selects the ALWAYS policy."""
    output_dir = tmp_path / "cli"

    exit_code = main(
        [
            "--input",
            str(fixture_path("crontab.yaml")),
            "--output",
            str(output_dir),
            "--suffix",
            "Model",
            "--suffix-policy",
            "always",
        ]
    )

    assert exit_code == 0
    assert (output_dir / "com/example/stable/v1/CronTabSpecModel.java").is_file()
    assert (output_dir / "com/example/stable/v1/spec/ScheduleModel.java").is_file()
    spec = (output_dir / "com/example/stable/v1/CronTabSpecModel.java").read_text(encoding="utf-8")
    assert "private com.example.stable.v1.spec.ScheduleModel schedule;" in spec
    assert "public enum ConcurrencyPolicyModel {" in spec
