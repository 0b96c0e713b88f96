"""Content transformers."""

from dotnetdocs.transformers.markdown_xml_transformer import MarkdownXmlTransformer

__all__ = ["MarkdownXmlTransformer"]
