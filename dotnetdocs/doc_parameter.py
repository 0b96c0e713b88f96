"""Parameter entity."""

from dataclasses import dataclass

from dotnetdocs.doc_entity import DocEntity


@dataclass(eq=False)
class DocParameter(DocEntity):
    """A method parameter. ``default_value`` is the literal text of the default."""

    name: str = ""
    type_name: str | None = None
    is_optional: bool = False
    has_default_value: bool = False
    default_value: str | None = None
    is_params: bool = False
