"""Generation policy shared by every node of a resolution."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .json_types import JSONValue


class ConfigError(RuntimeError):
    """Raised when a configuration file cannot be loaded."""


class AffixPolicy(StrEnum):
    """Where an explicit prefix or suffix is added to generated type names."""

    NEVER = "never"
    TOP_LEVEL = "top_level"
    ALWAYS = "always"


class Config(BaseModel):
    """Immutable naming and casing policy.

    Options other than the declared fields are accepted and kept verbatim so
    newer configuration files keep loading on older generators.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    enum_uppercase: bool = True
    prefix_policy: AffixPolicy = AffixPolicy.TOP_LEVEL
    suffix_policy: AffixPolicy = AffixPolicy.TOP_LEVEL
    suffix: str = ""

    @field_validator("prefix_policy", "suffix_policy", mode="before")
    @classmethod
    def _normalize_policy(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    def option(self, name: str, default: Any = None) -> Any:
        """Return a pass-through option by name."""
        extra = self.model_extra or {}
        return extra.get(name, default)


def load_config(path: Path) -> Config:
    """Load a generation policy from a YAML mapping.

    Args:
        path (Path): YAML file holding ``Config`` fields and extra options.

    Returns:
        Config: Validated, frozen configuration.
    """
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML in {path}: {exc}") from exc

    payload_value: JSONValue = payload
    if payload_value is None:
        return Config()
    if not isinstance(payload_value, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(payload_value)!r}")

    try:
        return Config.model_validate(payload_value)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {path}: {exc}") from exc
