"""Kinds of type members."""

from enum import Enum


class MemberKind(Enum):
    """Symbol kind of a member."""

    METHOD = "method"
    CONSTRUCTOR = "constructor"
    PROPERTY = "property"
    FIELD = "field"
    EVENT = "event"

    @property
    def comment_prefix(self) -> str:
        """Documentation ID prefix used for this kind."""
        return {
            MemberKind.METHOD: "M:",
            MemberKind.CONSTRUCTOR: "M:",
            MemberKind.PROPERTY: "P:",
            MemberKind.FIELD: "F:",
            MemberKind.EVENT: "E:",
        }[self]


def is_member_kind(kind: str) -> bool:
    """Check if the kind represents a member (method, property, etc.)."""
    k = kind.lower()
    return k in {"method", "property", "field", "event", "operator", "constructor"}


def member_kind_of(kind: str) -> MemberKind:
    """Map a DocFX item type to a member kind. Operators are methods."""
    k = kind.lower()
    if k == "operator":
        return MemberKind.METHOD
    return MemberKind(k)
