"""Extension points of the documentation pipeline.

Enrichers and transformers run once per entity of the merged model (pre-order),
renderers once per model. Exceptions raised by a plugin are not caught.
"""

from abc import ABC, abstractmethod

from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.doc_entity import DocEntity
from dotnetdocs.project_context import ProjectContext


class DocEnricher(ABC):
    """Adds information to entities, e.g. from an external source."""

    def handles(self, entity: DocEntity) -> bool:
        return True

    @abstractmethod
    def enrich(self, entity: DocEntity, context: ProjectContext) -> None: ...


class DocTransformer(ABC):
    """Rewrites entity content in place."""

    def handles(self, entity: DocEntity) -> bool:
        return True

    @abstractmethod
    def transform(self, entity: DocEntity) -> None: ...


class DocRenderer(ABC):
    """Writes a whole model to some output format."""

    @abstractmethod
    def render(self, model: DocAssembly) -> None: ...
