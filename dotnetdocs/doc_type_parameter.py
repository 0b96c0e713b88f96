"""Generic type parameter documentation entry."""

from dataclasses import dataclass


@dataclass
class DocTypeParameter:
    """A generic type parameter and its ``<typeparam>`` description."""

    name: str
    description: str | None = None
