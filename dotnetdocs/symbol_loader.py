"""Load an assembly's symbol graph and its documentation comments."""

import logging
from pathlib import Path
from types import TracebackType

from dotnetdocs.doc_comments import DocCommentExtractor, DocCommentFile
from dotnetdocs.managed_reference import ManagedReferenceSymbolSource
from dotnetdocs.reflection_source import ReflectionSymbolSource
from dotnetdocs.symbols import AssemblySymbol

logger = logging.getLogger(__name__)

BINARY_SUFFIXES = {".dll", ".exe"}


def default_xml_path(assembly_path: Path) -> Path:
    """Where the compiler puts the doc-comment file: next to the binary, ``.xml``."""
    if assembly_path.is_dir():
        return assembly_path / f"{assembly_path.name}.xml"
    return assembly_path.with_suffix(".xml")


class SymbolLoader:
    """Scoped access to an assembly's symbols and doc comments.

    ``assembly_path`` is either a compiled binary (read through reflection) or
    DocFX ManagedReference metadata (a directory of ``.yml`` files or a single file).
    Use as a context manager so the underlying source is always released.
    """

    def __init__(
        self,
        assembly_path: str | Path | None,
        xml_path: str | Path | None = None,
        references: list[str | Path] | tuple = (),
    ) -> None:
        if assembly_path is None or not str(assembly_path).strip():
            msg = "assembly_path must not be empty"
            raise ValueError(msg)
        self.assembly_path = Path(assembly_path)
        if not self.assembly_path.exists():
            msg = f"Assembly not found: {self.assembly_path}"
            raise FileNotFoundError(msg)
        self.xml_path = Path(xml_path) if xml_path else default_xml_path(self.assembly_path)
        self.references = [Path(r) for r in references]
        self._source: ReflectionSymbolSource | ManagedReferenceSymbolSource | None = None
        self._assembly: AssemblySymbol | None = None
        self._extractor: DocCommentExtractor | None = None

    @property
    def is_binary(self) -> bool:
        return self.assembly_path.suffix.lower() in BINARY_SUFFIXES

    def __enter__(self) -> "SymbolLoader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def load(self) -> AssemblySymbol:
        """Build (once) and return the assembly's symbol graph."""
        if self._assembly is None:
            self._source = self._open_source()
            self._assembly = self._source.load()
            for ref in self.references if not self.is_binary else []:
                self._merge_reference(ref)
            logger.info(
                "Loaded %s: %d namespaces, %d types",
                self._assembly.name,
                len(self._assembly.namespaces),
                sum(len(ns.types) for ns in self._assembly.namespaces),
            )
        return self._assembly

    @property
    def comments(self) -> DocCommentExtractor:
        """Doc-comment extractor; empty when the XML file is missing."""
        if self._extractor is None:
            if self.xml_path.is_file():
                self._extractor = DocCommentExtractor(DocCommentFile.load(self.xml_path))
            else:
                logger.info("No documentation file at %s; comments will be empty", self.xml_path)
                self._extractor = DocCommentExtractor()
        return self._extractor

    def close(self) -> None:
        """Release the symbol source. Safe to call more than once."""
        if self._source is not None:
            self._source.close()
            self._source = None

    def _open_source(self) -> ReflectionSymbolSource | ManagedReferenceSymbolSource:
        if self.is_binary:
            source = ReflectionSymbolSource(self.assembly_path, self.references)
            source.open()
            return source
        return ManagedReferenceSymbolSource(self.assembly_path)

    def _merge_reference(self, path: Path) -> None:
        """Make the types of referenced metadata available for base-type lookups."""
        if self._assembly is None or not path.exists():
            logger.warning("Reference not found: %s", path)
            return
        source = ManagedReferenceSymbolSource(path)
        try:
            referenced = source.load()
        finally:
            source.close()
        known = self._assembly.referenced_types
        for t in referenced.iter_types():
            known[t.full_name] = t
        for name, t in referenced.referenced_types.items():
            known.setdefault(name, t)
