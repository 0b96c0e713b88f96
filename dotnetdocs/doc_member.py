"""Member entity."""

from dataclasses import dataclass, field

from dotnetdocs.accessibility import Accessibility
from dotnetdocs.doc_entity import DocEntity
from dotnetdocs.doc_parameter import DocParameter
from dotnetdocs.member_kind import MemberKind


@dataclass(eq=False)
class DocMember(DocEntity):
    """A method, constructor, property, field or event of a documented type."""

    name: str = ""
    member_kind: MemberKind = MemberKind.METHOD
    accessibility: Accessibility = Accessibility.PUBLIC
    signature: str | None = None
    declaring_type_name: str | None = None
    is_inherited: bool = False
    is_override: bool = False
    is_virtual: bool = False
    is_abstract: bool = False
    is_static: bool = False
    is_extension_method: bool = False
    extended_type_name: str | None = None
    overridden_member: str | None = None
    parameters: list[DocParameter] = field(default_factory=list)
    return_type_name: str | None = None

    def children(self) -> list[DocEntity]:
        return list(self.parameters)

    @property
    def identity(self) -> str:
        """Name plus parameter types; distinguishes overloads."""
        types = ",".join(p.type_name or "" for p in self.parameters)
        return f"{self.name}({types})"
