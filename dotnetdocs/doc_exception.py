"""Exception documentation entry."""

from dataclasses import dataclass


@dataclass
class DocException:
    """An exception a member may throw, from an ``<exception>`` tag."""

    type: str
    description: str | None = None
