"""A cross reference as resolved against a documentation model."""

from dataclasses import dataclass, field

from dotnetdocs.doc_entity import DocEntity
from dotnetdocs.reference_type import ReferenceType

PREFIX_TYPES = {
    "T:": ReferenceType.TYPE,
    "F:": ReferenceType.FIELD,
    "P:": ReferenceType.PROPERTY,
    "M:": ReferenceType.METHOD,
    "E:": ReferenceType.EVENT,
    "N:": ReferenceType.NAMESPACE,
}


def reference_type_of(raw: str | None) -> ReferenceType:
    """Guess the reference type from the raw token alone."""
    if not raw or not raw.strip():
        return ReferenceType.UNKNOWN
    for prefix, kind in PREFIX_TYPES.items():
        if raw.startswith(prefix):
            return kind
    if raw.startswith(("http://", "https://")):
        return ReferenceType.EXTERNAL
    return ReferenceType.UNKNOWN


def simple_name_of(raw: str) -> str:
    """Last dotted segment of a reference, without its prefix."""
    if ":" in raw:
        raw = raw.split(":", 1)[1]
    return raw.rsplit(".", 1)[-1]


@dataclass
class DocReference:
    """Result of resolving a reference token."""

    raw_reference: str = ""
    reference_type: ReferenceType = ReferenceType.UNKNOWN
    display_name: str | None = None
    anchor: str | None = None
    relative_path: str | None = None
    is_resolved: bool = False
    target_entity: DocEntity | None = field(
        default=None, compare=False, repr=False, metadata={"serialize": False}
    )

    @classmethod
    def from_raw(cls, raw: str | None) -> "DocReference":
        raw = raw or ""
        return cls(raw_reference=raw, reference_type=reference_type_of(raw))

    def to_markdown_link(self) -> str:
        """Render as a Markdown link, or inline code when unresolved."""
        if not self.is_resolved or not (self.relative_path or "").strip():
            return f"`{self.display_name or simple_name_of(self.raw_reference)}`"
        link = self.relative_path
        if self.anchor:
            link += f"#{self.anchor}"
        return f"[{self.display_name}]({link})"
