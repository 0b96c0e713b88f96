"""An external documentation set copied into the generated output."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Files that belong to the referenced site's own tooling, by documentation type.
DEFAULT_EXCLUSIONS = {
    "docfx": ["toc.yml", "toc.yaml", "docfx.json"],
    "mkdocs": ["mkdocs.yml"],
    "jekyll": ["_config.yml", "_config.yaml"],
    "hugo": ["hugo.toml", "hugo.yaml", "hugo.json", "config.*"],
}


@dataclass
class DocumentationReference:
    """Another project's documentation to merge into this one."""

    documentation_root: str
    destination_path: str
    documentation_type: str = "docfx"
    navigation_file_path: str = "toc.yml"
    name: str | None = None
    exclude: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not str(self.documentation_root).strip():
            msg = "documentation_root must not be empty"
            raise ValueError(msg)
        if not str(self.destination_path).strip():
            msg = "destination_path must not be empty"
            raise ValueError(msg)

    @classmethod
    def from_config(cls, raw: dict[str, Any]) -> "DocumentationReference":
        return cls(
            documentation_root=str(raw.get("path") or raw.get("documentation_root") or ""),
            destination_path=str(raw.get("destination") or raw.get("destination_path") or ""),
            documentation_type=str(raw.get("type") or "docfx").lower(),
            navigation_file_path=str(raw.get("navigation") or "toc.yml"),
            name=raw.get("name"),
            exclude=list(raw.get("exclude") or []),
        )

    @property
    def title(self) -> str:
        return self.name or Path(self.destination_path).name

    def exclusion_patterns(self) -> list[str]:
        """Default exclusions for the documentation type plus configured ones."""
        return [*DEFAULT_EXCLUSIONS.get(self.documentation_type, []), *self.exclude]
