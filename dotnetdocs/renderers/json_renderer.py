"""Render a documentation model to JSON files."""

import logging

from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.renderers.renderer_base import RendererBase

logger = logging.getLogger(__name__)


class JsonRenderer(RendererBase):
    """Write ``documentation.json`` and one file per namespace."""

    def render(self, model: DocAssembly) -> None:
        self.api_root.mkdir(parents=True, exist_ok=True)
        (self.api_root / "documentation.json").write_text(model.to_json(), encoding="utf-8")
        for ns in self.documented_namespaces(model):
            self.output_file(self.namespace_page(ns), ".json").write_text(
                ns.to_json(), encoding="utf-8"
            )
        logger.info("Wrote JSON documentation for %s to %s", model.assembly_name, self.api_root)
