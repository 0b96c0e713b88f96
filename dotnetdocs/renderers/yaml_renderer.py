"""Render a documentation model to YAML files."""

import logging

import yaml

from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.renderers.renderer_base import RendererBase

logger = logging.getLogger(__name__)


def dump_yaml(data: object) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, width=120)


class YamlRenderer(RendererBase):
    """Write ``documentation.yaml``, one file per namespace and a ``toc.yaml``."""

    def render(self, model: DocAssembly) -> None:
        self.api_root.mkdir(parents=True, exist_ok=True)
        (self.api_root / "documentation.yaml").write_text(
            dump_yaml(model.to_dict()), encoding="utf-8"
        )
        toc = []
        for ns in self.documented_namespaces(model):
            page = self.namespace_page(ns)
            self.output_file(page, ".yaml").write_text(
                dump_yaml(ns.to_dict()), encoding="utf-8"
            )
            toc.append(
                {
                    "name": ns.display_name or ns.name,
                    "href": f"{page}.yaml",
                    "items": [
                        {"name": t.display_name or t.name, "uid": t.full_name}
                        for t in sorted(ns.types, key=lambda x: x.name.lower())
                    ],
                }
            )
        (self.api_root / "toc.yaml").write_text(dump_yaml(toc), encoding="utf-8")
        logger.info("Wrote YAML documentation for %s to %s", model.assembly_name, self.api_root)
