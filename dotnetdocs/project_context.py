"""Options that shape one documentation run."""

from dataclasses import dataclass, field
from typing import Any

from dotnetdocs.accessibility import DEFAULT_INCLUDED_MEMBERS, Accessibility
from dotnetdocs.documentation_reference import DocumentationReference
from dotnetdocs.file_naming import FileNamingOptions
from dotnetdocs.load_config import DEFAULT_CONFIG


@dataclass
class ProjectContext:
    """Everything the pipeline stages need to know about the project."""

    included_members: list[Accessibility] = field(
        default_factory=lambda: list(DEFAULT_INCLUDED_MEMBERS)
    )
    references: list[str] = field(default_factory=list)
    conceptual_path: str | None = None
    conceptual_docs_enabled: bool = True
    show_placeholders: bool = True
    create_placeholder_files: bool = False
    create_external_type_references: bool = True
    include_system_object_inheritance: bool = True
    ignore_global_namespace: bool = True
    output_path: str = "docs"
    api_reference_path: str = "api-reference"
    file_naming_options: FileNamingOptions = field(default_factory=FileNamingOptions)
    framework_namespaces: list[str] = field(
        default_factory=lambda: list(DEFAULT_CONFIG["framework_namespaces"])
    )
    documentation_references: list[DocumentationReference] = field(
        default_factory=list
    )

    def __post_init__(self) -> None:
        if self.references is None:
            msg = "references must not be None"
            raise TypeError(msg)
        self.included_members = [Accessibility.parse(a) for a in self.included_members]

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ProjectContext":
        """Build a context from a merged configuration dict (see ``load_config``)."""
        conceptual = config.get("conceptual") or {}
        model = config.get("model") or {}
        output = config.get("output") or {}
        return cls(
            included_members=list(config.get("included_members") or ["Public"]),
            references=[str(r) for r in config.get("references") or []],
            conceptual_path=conceptual.get("path"),
            conceptual_docs_enabled=bool(conceptual.get("enabled", True)),
            show_placeholders=bool(conceptual.get("show_placeholders", True)),
            create_placeholder_files=bool(conceptual.get("create_placeholders", False)),
            create_external_type_references=bool(
                model.get("create_external_type_references", True)
            ),
            include_system_object_inheritance=bool(
                model.get("include_system_object_inheritance", True)
            ),
            ignore_global_namespace=bool(model.get("ignore_global_namespace", True)),
            output_path=str(output.get("path") or "docs"),
            api_reference_path=str(output.get("api_reference_path") or "api-reference"),
            file_naming_options=FileNamingOptions(
                namespace_mode=output.get("namespace_mode") or "file",
                namespace_separator=output.get("namespace_separator") or "-",
            ),
            framework_namespaces=list(
                config.get("framework_namespaces")
                or DEFAULT_CONFIG["framework_namespaces"]
            ),
            documentation_references=[
                DocumentationReference.from_config(r)
                for r in config.get("documentation_references") or []
            ],
        )

    def includes(self, accessibility: Accessibility) -> bool:
        """Whether a declared accessibility passes the include-set.

        Combined levels pass when their parts do: ``protected internal`` needs either
        part, ``private protected`` needs both.
        """
        if accessibility in self.included_members:
            return True
        parts = {Accessibility.PROTECTED, Accessibility.INTERNAL}
        if accessibility == Accessibility.PROTECTED_OR_INTERNAL:
            return bool(parts & set(self.included_members))
        if accessibility == Accessibility.PROTECTED_AND_INTERNAL:
            return parts <= set(self.included_members)
        return False
