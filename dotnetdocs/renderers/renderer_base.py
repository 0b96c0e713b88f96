"""Shared plumbing for renderers: output locations and reference resolution."""

from pathlib import Path

from dotnetdocs.cross_reference_resolver import CrossReferenceResolver
from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.doc_namespace import DocNamespace
from dotnetdocs.doc_type import DocType
from dotnetdocs.file_naming import namespace_page_path, type_page_path
from dotnetdocs.plugins import DocRenderer
from dotnetdocs.project_context import ProjectContext


class RendererBase(DocRenderer):
    """Base for renderers that write files under ``<output>/<api_reference_path>``."""

    def __init__(
        self,
        context: ProjectContext | None = None,
        output_path: str | Path | None = None,
    ) -> None:
        self.context = context or ProjectContext()
        self.output_path = Path(output_path or self.context.output_path)
        self.resolver = CrossReferenceResolver(self.context)

    @property
    def api_root(self) -> Path:
        return self.output_path / self.context.api_reference_path.strip("/\\")

    def namespace_page(self, ns: DocNamespace) -> str:
        return namespace_page_path(ns.name, self.context.file_naming_options)

    def type_page(self, ns: DocNamespace, t: DocType) -> str:
        return type_page_path(ns.name, t.name, self.context.file_naming_options)

    def output_file(self, page_path: str, suffix: str) -> Path:
        """Absolute output file for a page path; parent folders are created."""
        p = self.api_root / f"{page_path.lstrip('/')}{suffix}"
        p.parent.mkdir(parents=True, exist_ok=True)
        return p

    @staticmethod
    def documented_namespaces(model: DocAssembly) -> list[DocNamespace]:
        """Namespaces that hold at least one type, by name."""
        return sorted(
            (ns for ns in model.namespaces if ns.types),
            key=lambda ns: ns.name.lower(),
        )
