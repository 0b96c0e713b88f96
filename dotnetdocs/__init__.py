"""Generate documentation models and pages for .NET assemblies."""

from dotnetdocs.assembly_manager import AssemblyManager
from dotnetdocs.cross_reference_resolver import CrossReferenceResolver
from dotnetdocs.documentation_manager import DocumentationManager
from dotnetdocs.project_context import ProjectContext

__all__ = [
    "AssemblyManager",
    "CrossReferenceResolver",
    "DocumentationManager",
    "ProjectContext",
]
