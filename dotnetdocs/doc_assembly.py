"""Assembly entity, the root of a documentation model."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from dotnetdocs.doc_entity import DocEntity
from dotnetdocs.doc_namespace import DocNamespace
from dotnetdocs.doc_type import DocType


@dataclass(eq=False)
class DocAssembly(DocEntity):
    """Root of the documentation tree."""

    assembly_name: str = ""
    version: str | None = None
    namespaces: list[DocNamespace] = field(default_factory=list)

    def children(self) -> list[DocEntity]:
        return list(self.namespaces)

    def iter_types(self) -> Iterator[DocType]:
        for ns in self.namespaces:
            yield from ns.types

    def find_namespace(self, name: str) -> DocNamespace | None:
        return next((ns for ns in self.namespaces if ns.name == name), None)

    def find_type(self, full_name: str) -> DocType | None:
        return next((t for t in self.iter_types() if t.full_name == full_name), None)


def walk(entity: DocEntity) -> Iterator[DocEntity]:
    """Pre-order walk over an entity and everything it owns."""
    yield entity
    for child in entity.children():
        yield from walk(child)
