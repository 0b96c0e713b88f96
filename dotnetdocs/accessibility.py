"""Declared accessibility of types and members."""

from enum import Enum


class Accessibility(Enum):
    """Accessibility levels as declared in metadata."""

    PUBLIC = "public"
    PROTECTED = "protected"
    INTERNAL = "internal"
    PROTECTED_OR_INTERNAL = "protected internal"
    PROTECTED_AND_INTERNAL = "private protected"
    PRIVATE = "private"

    @classmethod
    def parse(cls, value: "str | Accessibility") -> "Accessibility":
        """Parse a config value such as ``Public`` or ``protected internal``."""
        if isinstance(value, Accessibility):
            return value
        text = str(value).strip().lower().replace("_", " ")
        aliases = {
            "protectedorinternal": cls.PROTECTED_OR_INTERNAL,
            "protected or internal": cls.PROTECTED_OR_INTERNAL,
            "protectedandinternal": cls.PROTECTED_AND_INTERNAL,
            "protected and internal": cls.PROTECTED_AND_INTERNAL,
        }
        if text in aliases:
            return aliases[text]
        for member in cls:
            if member.value == text or member.name.lower() == text:
                return member
        msg = f"Unknown accessibility: {value!r}"
        raise ValueError(msg)

    @classmethod
    def from_modifiers(cls, modifiers: set[str]) -> "Accessibility | None":
        """Map C# access modifier keywords to an accessibility, if any are present."""
        if {"protected", "internal"} <= modifiers:
            return cls.PROTECTED_OR_INTERNAL
        if {"private", "protected"} <= modifiers:
            return cls.PROTECTED_AND_INTERNAL
        for keyword in ("public", "protected", "internal", "private"):
            if keyword in modifiers:
                return cls(keyword)
        return None


DEFAULT_INCLUDED_MEMBERS: tuple[Accessibility, ...] = (Accessibility.PUBLIC,)
