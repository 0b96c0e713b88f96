"""Output renderers."""

from dotnetdocs.renderers.json_renderer import JsonRenderer
from dotnetdocs.renderers.markdown_renderer import MarkdownRenderer
from dotnetdocs.renderers.renderer_base import RendererBase
from dotnetdocs.renderers.yaml_renderer import YamlRenderer

RENDERERS = {
    "markdown": MarkdownRenderer,
    "yaml": YamlRenderer,
    "json": JsonRenderer,
}

__all__ = ["RENDERERS", "JsonRenderer", "MarkdownRenderer", "RendererBase", "YamlRenderer"]
