"""Enum entity and its values."""

from dataclasses import dataclass, field

from dotnetdocs.doc_entity import DocEntity
from dotnetdocs.doc_reference import DocReference
from dotnetdocs.doc_type import DocType
from dotnetdocs.reference_type import ReferenceType
from dotnetdocs.symbols import DEFAULT_ENUM_UNDERLYING_TYPE
from dotnetdocs.type_kind import TypeKind
from dotnetdocs.type_names import type_keyword

def underlying_type_reference(type_name: str = DEFAULT_ENUM_UNDERLYING_TYPE) -> DocReference:
    """Framework reference for an enum's underlying type, shown by its C# keyword."""
    return DocReference(
        raw_reference=f"T:{type_name}",
        reference_type=ReferenceType.FRAMEWORK,
        display_name=type_keyword(type_name),
        is_resolved=True,
    )


@dataclass(eq=False)
class DocEnumValue(DocEntity):
    """A single value of an enum.

    ``numeric_value`` keeps the literal text (``0x10``, ``Read | Write``) and is
    ``None`` when the value is implicit.
    """

    name: str = ""
    numeric_value: str | None = None


@dataclass(eq=False)
class DocEnum(DocType):
    """An enum type. Its values live in ``values``, not ``members``.

    ``members`` only ever holds extension methods relocated onto the enum.
    """

    type_kind: TypeKind = TypeKind.ENUM
    is_flags: bool = False
    underlying_type: DocReference = field(default_factory=underlying_type_reference)
    values: list[DocEnumValue] = field(default_factory=list)

    def children(self) -> list[DocEntity]:
        return [*self.values, *self.members]

    def find_value(self, name: str) -> DocEnumValue | None:
        return next((v for v in self.values if v.name == name), None)
