"""Naming helpers for Java type, field, package and enum constant identifiers."""

from __future__ import annotations

import re
from typing import Optional

from .config import AffixPolicy, Config

_JAVA_KEYWORDS: frozenset[str] = frozenset(
    {
        "abstract",
        "assert",
        "boolean",
        "break",
        "byte",
        "case",
        "catch",
        "char",
        "class",
        "const",
        "continue",
        "default",
        "do",
        "double",
        "else",
        "enum",
        "extends",
        "false",
        "final",
        "finally",
        "float",
        "for",
        "goto",
        "if",
        "implements",
        "import",
        "instanceof",
        "int",
        "interface",
        "long",
        "native",
        "new",
        "null",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "short",
        "static",
        "strictfp",
        "super",
        "switch",
        "synchronized",
        "this",
        "throw",
        "throws",
        "transient",
        "true",
        "try",
        "void",
        "volatile",
        "while",
        "_",
    }
)

_WORD_SPLIT_RE = re.compile(r"[^0-9a-zA-Z]+")
_CONSTANT_SANITIZE_RE = re.compile(r"[^0-9a-zA-Z_$]+")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class GenerationError(RuntimeError):
    """Base class for structural problems found while generating types."""


class InvalidIdentifier(GenerationError):
    """Raised when a derived name is not a legal Java identifier."""

    def __init__(self, name: str, *, source: str) -> None:
        super().__init__(f"{name!r} (derived from {source!r}) is not a valid Java identifier")
        self.name = name
        self.source = source


def is_java_identifier(name: str) -> bool:
    """Return whether ``name`` can be used verbatim as a Java identifier."""
    return bool(_IDENTIFIER_RE.match(name)) and name not in _JAVA_KEYWORDS


def ensure_identifier(name: str, *, source: str) -> str:
    """Return ``name`` unchanged or raise ``InvalidIdentifier``."""
    if not is_java_identifier(name):
        raise InvalidIdentifier(name, source=source)
    return name


def _capitalize_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def _escape_keyword(name: str) -> str:
    return f"{name}_" if name in _JAVA_KEYWORDS else name


def type_name(raw: str) -> str:
    """Convert a property key to a PascalCase bare type name.

    Args:
        raw (str): Property key or declared name, e.g. ``my-prop``.

    Returns:
        str: Bare class name, e.g. ``MyProp``.
    """
    name = "".join(_capitalize_first(part) for part in _WORD_SPLIT_RE.split(raw) if part)
    return ensure_identifier(name, source=raw)


def field_name(raw: str) -> str:
    """Convert a property key to a Java field name.

    Legal identifiers are kept verbatim; anything else is camel-cased over its
    separators. Keywords get a trailing underscore and digit-leading names a
    leading one.
    """
    if is_java_identifier(raw):
        return raw
    parts = [part for part in _WORD_SPLIT_RE.split(raw) if part]
    if not parts:
        raise InvalidIdentifier("", source=raw)
    name = parts[0] + "".join(_capitalize_first(part) for part in parts[1:])
    if name[0].isdigit():
        name = f"_{name}"
    return ensure_identifier(_escape_keyword(name), source=raw)


def package_segment(bare_name: str) -> str:
    """Return the lower-cased package segment contributed by a type's bare name."""
    segment = _escape_keyword(bare_name.lower())
    return ensure_identifier(segment, source=bare_name)


def enum_constant(literal: str, *, uppercase: bool) -> str:
    """Derive an enum constant identifier from a literal value."""
    text = literal.upper() if uppercase else literal
    text = _CONSTANT_SANITIZE_RE.sub("_", text)
    if text and text[0].isdigit():
        text = f"_{text}"
    if not text:
        raise InvalidIdentifier(text, source=literal)
    return ensure_identifier(_escape_keyword(text), source=literal)


def apply_affixes(
    bare_name: str,
    *,
    prefix: str,
    suffix: str,
    config: Config,
    top_level: bool,
) -> str:
    """Decorate a bare type name with prefix/suffix according to the policies."""
    name = bare_name
    if prefix and _affix_applies(config.prefix_policy, top_level=top_level):
        name = f"{prefix}{name}"
    if suffix and _affix_applies(config.suffix_policy, top_level=top_level):
        name = f"{name}{suffix}"
    return ensure_identifier(name, source=bare_name)


def _affix_applies(policy: AffixPolicy, *, top_level: bool) -> bool:
    if policy is AffixPolicy.ALWAYS:
        return True
    if policy is AffixPolicy.TOP_LEVEL:
        return top_level
    return False


def qualify(namespace: Optional[str], name: str) -> str:
    """Join a namespace and a simple name into a qualified name."""
    return f"{namespace}.{name}" if namespace else name


def package_for_group(group: str) -> str:
    """Create a Java package from an API group by reversing its DNS labels.

    >>> package_for_group("test.org")
    'org.test'
    """
    labels = [label for label in group.split(".") if label]
    segments = [_escape_keyword(_WORD_SPLIT_RE.sub("", label.lower())) for label in reversed(labels)]
    for segment in segments:
        ensure_identifier(segment, source=group)
    return ".".join(segments)
