"""Kinds of types."""

from enum import Enum


class TypeKind(Enum):
    """Type kind of a documented type."""

    CLASS = "class"
    INTERFACE = "interface"
    STRUCT = "struct"
    ENUM = "enum"
    DELEGATE = "delegate"


def is_type_kind(kind: str) -> bool:
    """Check if the kind represents a type (class, struct, etc.)."""
    k = kind.lower()
    return k in {"class", "struct", "interface", "enum", "delegate"}


def is_namespace_kind(kind: str) -> bool:
    """Check if the kind represents a namespace."""
    return kind.lower() == "namespace"
