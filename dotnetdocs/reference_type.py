"""Classification of resolved documentation references."""

from enum import Enum


class ReferenceType(Enum):
    """Specifies what a documentation reference points at."""

    UNKNOWN = "unknown"
    TYPE = "type"
    FIELD = "field"
    PROPERTY = "property"
    METHOD = "method"
    EVENT = "event"
    NAMESPACE = "namespace"
    EXTERNAL = "external"
    FRAMEWORK = "framework"
    UNRESOLVED = "unresolved"
