"""Where namespace and type pages live in the generated documentation tree."""

import re
from dataclasses import dataclass
from enum import Enum

from dotnetdocs.constants import GLOBAL_NAMESPACE_NAME

UNSAFE_RE = re.compile(r"[^A-Za-z0-9_.-]+")


class NamespaceMode(Enum):
    """How namespaces map onto the output tree."""

    FILE = "file"
    FOLDER = "folder"


@dataclass
class FileNamingOptions:
    """Naming of generated files.

    ``FILE`` writes every page into one folder, namespaces joined with
    ``namespace_separator``. ``FOLDER`` nests one folder per namespace segment.
    """

    namespace_mode: NamespaceMode = NamespaceMode.FILE
    namespace_separator: str = "-"

    def __post_init__(self) -> None:
        if isinstance(self.namespace_mode, str):
            self.namespace_mode = NamespaceMode(self.namespace_mode.lower())
        if len(self.namespace_separator) != 1:
            msg = "namespace_separator must be a single character"
            raise ValueError(msg)


def safe_segment(name: str) -> str:
    """Make a stable filename token; generic markers and odd characters become hyphens."""
    name = name.replace("`", "-").replace("<", "-").replace(">", "")
    name = UNSAFE_RE.sub("-", name).strip("-")
    # Avoid pathological emptiness
    return name or "Unknown"


def namespace_display_name(namespace: str) -> str:
    return namespace or GLOBAL_NAMESPACE_NAME


def namespace_page_path(namespace: str, options: FileNamingOptions) -> str:
    """Page path (no extension) of a namespace's landing page."""
    name = namespace_display_name(namespace)
    if options.namespace_mode == NamespaceMode.FOLDER:
        return "/".join([*name.split("."), "index"])
    return name.replace(".", options.namespace_separator)


def type_page_path(namespace: str, type_name: str, options: FileNamingOptions) -> str:
    """Page path (no extension) of a type page."""
    name = namespace_display_name(namespace)
    if options.namespace_mode == NamespaceMode.FOLDER:
        return "/".join([*name.split("."), safe_segment(type_name)])
    return f"{name.replace('.', options.namespace_separator)}.{safe_segment(type_name)}"
