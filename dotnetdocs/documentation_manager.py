"""Run the full documentation pipeline over one or more assemblies.

Stages, in order: document each assembly, merge the models, run enrichers, run
transformers, create conceptual placeholders (optional), load conceptual content,
run renderers, copy referenced documentation sets into the output tree.
"""

import fnmatch
import logging
import shutil
from collections.abc import Iterable, Sequence
from pathlib import Path

from dotnetdocs.assembly_manager import AssemblyManager
from dotnetdocs.conceptual_loader import ConceptualContentLoader
from dotnetdocs.diagnostic import Diagnostic
from dotnetdocs.doc_assembly import DocAssembly, walk
from dotnetdocs.doc_namespace import DocNamespace
from dotnetdocs.doc_type import DocType
from dotnetdocs.documentation_reference import DocumentationReference
from dotnetdocs.navigation import merge_reference_navigation
from dotnetdocs.plugins import DocEnricher, DocRenderer, DocTransformer
from dotnetdocs.project_context import ProjectContext

logger = logging.getLogger(__name__)

AssemblyPair = tuple[str | Path, str | Path | None]
NAVIGATION_FILE = "toc.yml"


def is_pair(value: object) -> bool:
    return (
        isinstance(value, tuple)
        and len(value) == 2
        and isinstance(value[0], (str, Path))
        and (value[1] is None or isinstance(value[1], (str, Path)))
    )


def normalize_assemblies(
    assemblies: str | Path | AssemblyPair | Iterable[str | Path | AssemblyPair],
) -> list[tuple[Path, Path | None]]:
    """Accept a path, one ``(assembly, xml)`` pair, or an iterable of either."""
    if assemblies is None:
        msg = "assemblies must not be None"
        raise ValueError(msg)
    if isinstance(assemblies, (str, Path)) or is_pair(assemblies):
        assemblies = [assemblies]
    pairs = []
    for entry in assemblies:
        if is_pair(entry):
            path, xml = entry
        else:
            path, xml = entry, None
        pairs.append((Path(path), Path(xml) if xml else None))
    return pairs


def merge_namespace(target: DocAssembly, source: DocNamespace) -> None:
    existing = target.find_namespace(source.name)
    if existing is None:
        target.namespaces.append(source)
        return
    for t in source.types:
        merge_type(existing, t)
    if source.summary and not existing.summary:
        existing.summary = source.summary


def merge_type(target: DocNamespace, source: DocType) -> None:
    """Merge ``source`` into the namespace. The first real declaration wins.

    A placeholder created for extension methods gives way to the real type when a
    later assembly declares it; the placeholder's members move to the real type.
    """
    existing = target.find_type(source.full_name)
    if existing is None:
        target.types.append(source)
        return
    if existing.is_external_reference and not source.is_external_reference:
        target.types[target.types.index(existing)] = source
        existing, source = source, existing
        logger.debug("Replaced external reference %s with its declaration", existing.full_name)
    known = {(m.name, m.signature or m.identity) for m in existing.members}
    for m in source.members:
        key = (m.name, m.signature or m.identity)
        if key not in known:
            existing.members.append(m)
            known.add(key)
    if source.summary and not existing.summary and not source.is_external_reference:
        existing.summary = source.summary


def merge_doc_assemblies(models: Sequence[DocAssembly]) -> DocAssembly:
    """Merge models into the first one. On conflicts the first entity wins."""
    if not models:
        msg = "At least one assembly must be provided"
        raise ValueError(msg)
    merged = models[0]
    for model in models[1:]:
        for ns in model.namespaces:
            merge_namespace(merged, ns)
    return merged


class DocumentationManager:
    """Sequence the pipeline stages and the registered plugins."""

    def __init__(
        self,
        context: ProjectContext | None = None,
        enrichers: Iterable[DocEnricher] = (),
        transformers: Iterable[DocTransformer] = (),
        renderers: Iterable[DocRenderer] = (),
    ) -> None:
        self.context = context or ProjectContext()
        self.enrichers = list(enrichers)
        self.transformers = list(transformers)
        self.renderers = list(renderers)
        self.diagnostics: list[Diagnostic] = []

    def process(
        self,
        assemblies: str | Path | AssemblyPair | Iterable[str | Path | AssemblyPair],
    ) -> DocAssembly:
        """Document the assemblies as one merged model and render it."""
        model = self.build(assemblies)

        for entity in list(walk(model)):
            for enricher in self.enrichers:
                if enricher.handles(entity):
                    enricher.enrich(entity, self.context)
        for entity in list(walk(model)):
            for transformer in self.transformers:
                if transformer.handles(entity):
                    transformer.transform(entity)

        if self.context.conceptual_docs_enabled:
            loader = ConceptualContentLoader(self.context)
            if self.context.create_placeholder_files:
                loader.create_placeholders(model)
            loader.load(model)

        for renderer in self.renderers:
            logger.info("Rendering with %s", type(renderer).__name__)
            renderer.render(model)

        self.copy_documentation_references()
        return model

    def build(
        self,
        assemblies: str | Path | AssemblyPair | Iterable[str | Path | AssemblyPair],
    ) -> DocAssembly:
        """Document and merge the assemblies without running plugins."""
        self.diagnostics = []
        models = []
        for path, xml in normalize_assemblies(assemblies):
            with AssemblyManager(path, xml) as manager:
                models.append(manager.document(self.context))
                self.diagnostics.extend(manager.errors)
        return merge_doc_assemblies(models)

    def create_conceptual_files(
        self,
        assemblies: str | Path | AssemblyPair | Iterable[str | Path | AssemblyPair],
    ) -> int:
        """Write conceptual placeholder files for the assemblies; nothing is rendered."""
        model = self.build(assemblies)
        return ConceptualContentLoader(self.context).create_placeholders(model)

    def copy_documentation_references(self) -> int:
        """Copy referenced documentation sets into the output tree; returns files copied."""
        output = Path(self.context.output_path)
        copied = 0
        for reference in self.context.documentation_references:
            copied += self.copy_reference(reference, output)
        return copied

    def copy_reference(self, reference: DocumentationReference, output: Path) -> int:
        source = Path(reference.documentation_root)
        if not source.is_dir():
            logger.warning("Documentation reference not found: %s", source)
            return 0
        destination = output / reference.destination_path
        patterns = reference.exclusion_patterns()
        copied = 0
        for path in sorted(source.rglob("*")):
            if not path.is_file():
                continue
            relative = path.relative_to(source).as_posix()
            if any(
                fnmatch.fnmatch(relative, p) or fnmatch.fnmatch(path.name, p)
                for p in patterns
            ):
                continue
            target = destination / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(path, target)
            copied += 1
        logger.info("Copied %d files from %s to %s", copied, source, destination)

        merge_reference_navigation(
            output / NAVIGATION_FILE,
            reference.title,
            source / reference.navigation_file_path,
            reference.destination_path,
        )
        return copied
