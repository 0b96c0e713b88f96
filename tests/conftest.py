"""Shared fixtures: the Tests.Shared sample assembly as DocFX metadata plus its XML comments."""

from collections.abc import Callable
from pathlib import Path

import pytest

from dotnetdocs.assembly_manager import AssemblyManager
from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.model_builder import ModelBuilder
from dotnetdocs.project_context import ProjectContext
from dotnetdocs.symbol_loader import SymbolLoader
from dotnetdocs.symbols import AssemblySymbol

SHARED = Path(__file__).parent / "fixtures" / "Tests.Shared"


@pytest.fixture
def shared_path() -> Path:
    return SHARED


@pytest.fixture
def shared_symbols() -> AssemblySymbol:
    with SymbolLoader(SHARED) as loader:
        return loader.load()


@pytest.fixture
def build_shared() -> Callable[..., DocAssembly]:
    """Build the model without relocating extension methods."""

    def build(context: ProjectContext | None = None) -> DocAssembly:
        with SymbolLoader(SHARED) as loader:
            return ModelBuilder(loader.load(), loader.comments, context).build()

    return build


@pytest.fixture
def shared_model() -> DocAssembly:
    """The fully documented model, extension methods relocated."""
    with AssemblyManager(SHARED) as manager:
        return manager.document(ProjectContext())
