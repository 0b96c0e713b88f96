"""Type entity."""

from dataclasses import dataclass, field

from dotnetdocs.doc_entity import DocEntity
from dotnetdocs.doc_member import DocMember
from dotnetdocs.type_kind import TypeKind


@dataclass(eq=False)
class DocType(DocEntity):
    """A documented class, interface, struct, enum or delegate.

    ``base_type`` is the base type's full name, looked up by name when needed.
    Placeholders for framework types that extension methods target have
    ``is_external_reference`` set.
    """

    name: str = ""
    full_name: str = ""
    namespace_name: str = ""
    assembly_name: str | None = None
    type_kind: TypeKind = TypeKind.CLASS
    signature: str | None = None
    base_type: str | None = None
    implemented_interfaces: list[str] = field(default_factory=list)
    members: list[DocMember] = field(default_factory=list)
    is_static: bool = False
    is_abstract: bool = False
    is_sealed: bool = False
    is_external_reference: bool = False

    def children(self) -> list[DocEntity]:
        return list(self.members)

    def find_members(self, name: str) -> list[DocMember]:
        return [m for m in self.members if m.name == name]
