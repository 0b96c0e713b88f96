"""Document a single assembly: load symbols, build the model, relocate extensions."""

import logging
from pathlib import Path
from types import TracebackType

from dotnetdocs.diagnostic import Diagnostic
from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.extension_relocator import relocate_extension_methods
from dotnetdocs.model_builder import ModelBuilder
from dotnetdocs.project_context import ProjectContext
from dotnetdocs.symbol_loader import SymbolLoader

logger = logging.getLogger(__name__)


class AssemblyManager:
    """Builds the ``DocAssembly`` for one assembly.

    Every ``document`` call is a full rebuild; the symbol source is released as
    soon as the model is built.
    """

    def __init__(self, assembly_path: str | Path | None, xml_path: str | Path | None = None) -> None:
        if assembly_path is None or not str(assembly_path).strip():
            msg = "assembly_path must not be empty"
            raise ValueError(msg)
        self.assembly_path = Path(assembly_path)
        if not self.assembly_path.exists():
            msg = f"Assembly not found: {self.assembly_path}"
            raise FileNotFoundError(msg)
        self.xml_path = Path(xml_path) if xml_path else None
        self.errors: list[Diagnostic] = []
        self.document_model: DocAssembly | None = None

    @property
    def assembly_name(self) -> str:
        if self.assembly_path.is_dir():
            return self.assembly_path.name
        return self.assembly_path.stem

    def __enter__(self) -> "AssemblyManager":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def document(self, context: ProjectContext | None = None) -> DocAssembly:
        """Build the documentation model of the assembly."""
        context = context or ProjectContext()
        self.errors = []
        logger.info("Documenting %s", self.assembly_path)
        with SymbolLoader(self.assembly_path, self.xml_path, context.references) as loader:
            builder = ModelBuilder(loader.load(), loader.comments, context)
            model = builder.build()
        self.errors.extend(builder.diagnostics)
        self.errors.extend(relocate_extension_methods(model, context))
        for diagnostic in self.errors:
            logger.debug("%s", diagnostic)
        self.document_model = model
        return model

    def close(self) -> None:
        self.document_model = None
