"""Shared documentation fields of every model entity."""

import json
from dataclasses import dataclass, field
from typing import Any

from dotnetdocs.accessibility import DEFAULT_INCLUDED_MEMBERS, Accessibility
from dotnetdocs.doc_exception import DocException
from dotnetdocs.doc_type_parameter import DocTypeParameter
from dotnetdocs.serialization import to_plain

CONCEPTUAL_FIELDS = (
    "usage",
    "examples",
    "best_practices",
    "patterns",
    "considerations",
)


@dataclass(eq=False)
class DocEntity:
    """Base for assemblies, namespaces, types, members and parameters.

    Text fields hold doc-comment content (possibly still containing XML markup
    until a transformer runs) or conceptual content loaded from disk.
    """

    display_name: str | None = None
    summary: str | None = None
    remarks: str | None = None
    returns: str | None = None
    value: str | None = None
    usage: str | None = None
    examples: str | None = None
    best_practices: str | None = None
    patterns: str | None = None
    considerations: str | None = None
    related_apis: list[str] = field(default_factory=list)
    exceptions: list[DocException] = field(default_factory=list)
    type_parameters: list[DocTypeParameter] = field(default_factory=list)
    see_also: list[str] = field(default_factory=list)
    included_members: list[Accessibility] = field(
        default_factory=lambda: list(DEFAULT_INCLUDED_MEMBERS)
    )

    def children(self) -> list["DocEntity"]:
        """Entities owned by this one, in document order."""
        return []

    def to_dict(self) -> dict[str, Any]:
        return to_plain(self)

    def to_json(self) -> str:
        """Serialize the entity (and everything it owns) to indented JSON."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
