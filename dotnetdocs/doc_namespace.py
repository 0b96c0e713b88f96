"""Namespace entity."""

from dataclasses import dataclass, field

from dotnetdocs.doc_entity import DocEntity
from dotnetdocs.doc_type import DocType


@dataclass(eq=False)
class DocNamespace(DocEntity):
    """A namespace and the documented types it holds. ``""`` is the global namespace."""

    name: str = ""
    types: list[DocType] = field(default_factory=list)

    def children(self) -> list[DocEntity]:
        return list(self.types)

    def find_type(self, full_name: str) -> DocType | None:
        return next((t for t in self.types if t.full_name == full_name), None)
