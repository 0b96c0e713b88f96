"""Convert doc-comment XML in entity text fields to Markdown.

``<see cref>`` references are resolved against the model being processed, so the
transformer has to see the ``DocAssembly`` before any of its children; the
pipeline's pre-order walk guarantees that.
"""

import html
import logging
import re
import textwrap

from dotnetdocs.cross_reference_resolver import CrossReferenceResolver
from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.doc_entity import DocEntity
from dotnetdocs.plugins import DocTransformer
from dotnetdocs.project_context import ProjectContext

logger = logging.getLogger(__name__)

TEXT_FIELDS = (
    "summary",
    "remarks",
    "returns",
    "value",
    "usage",
    "examples",
    "best_practices",
    "patterns",
    "considerations",
)

HAS_XML_RE = re.compile(
    r"<(?:see|seealso|c|code|para|b|i|br|list|item|paramref|typeparamref)\b", re.IGNORECASE
)
SEE_CREF_RE = re.compile(r'<see\s+cref="([^"]+)"\s*/>', re.IGNORECASE)
SEE_CREF_TEXT_RE = re.compile(r'<see\s+cref="([^"]+)"\s*>(.*?)</see>', re.IGNORECASE | re.DOTALL)
SEE_HREF_RE = re.compile(
    r'<see\s+href="([^"]+)"\s*(?:/>|>(.*?)</see>)', re.IGNORECASE | re.DOTALL
)
SEE_LANGWORD_RE = re.compile(r'<see\s+langword="([^"]+)"\s*/?>', re.IGNORECASE)
PARAMREF_RE = re.compile(r'<(?:type)?paramref\s+name="([^"]+)"\s*/?>', re.IGNORECASE)
INLINE_CODE_RE = re.compile(r"<c>(.*?)</c>", re.IGNORECASE | re.DOTALL)
CODE_BLOCK_RE = re.compile(
    r'<code(?:\s+language="([^"]+)")?\s*>(.*?)</code>', re.IGNORECASE | re.DOTALL
)
CDATA_RE = re.compile(r"^\s*<!\[CDATA\[(.*)\]\]>\s*$", re.DOTALL)
PARA_RE = re.compile(r"<para>(.*?)</para>", re.IGNORECASE | re.DOTALL)
BOLD_RE = re.compile(r"<b>(.*?)</b>", re.IGNORECASE | re.DOTALL)
ITALIC_RE = re.compile(r"<i>(.*?)</i>", re.IGNORECASE | re.DOTALL)
BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
LIST_RE = re.compile(
    r'<list\s+type="(bullet|number|table)"[^>]*>(.*?)</list>', re.IGNORECASE | re.DOTALL
)
LIST_HEADER_RE = re.compile(
    r"<listheader>\s*(?:<term>(.*?)</term>)?\s*(?:<description>(.*?)</description>)?\s*</listheader>",
    re.IGNORECASE | re.DOTALL,
)
LIST_ITEM_RE = re.compile(
    r"<item>\s*(?:<term>(.*?)</term>)?\s*(?:<description>(.*?)</description>)?\s*</item>",
    re.IGNORECASE | re.DOTALL,
)
REMAINING_TAG_RE = re.compile(
    r"<(/?(?:see|seealso|para|list|listheader|item|term|description|inheritdoc|include|note|code|c|b|i)\b[^<>]*)>",
    re.IGNORECASE,
)
BLANK_LINES_RE = re.compile(r"\n{3,}")

LANGWORD_URLS = {
    "null": "https://learn.microsoft.com/dotnet/csharp/language-reference/keywords/null",
    "true": "https://learn.microsoft.com/dotnet/csharp/language-reference/builtin-types/bool",
    "false": "https://learn.microsoft.com/dotnet/csharp/language-reference/builtin-types/bool",
    "async": "https://learn.microsoft.com/dotnet/csharp/language-reference/keywords/async",
    "await": "https://learn.microsoft.com/dotnet/csharp/language-reference/operators/await",
    "void": "https://learn.microsoft.com/dotnet/csharp/language-reference/builtin-types/void",
    "static": "https://learn.microsoft.com/dotnet/csharp/language-reference/keywords/static",
    "abstract": "https://learn.microsoft.com/dotnet/csharp/language-reference/keywords/abstract",
    "virtual": "https://learn.microsoft.com/dotnet/csharp/language-reference/keywords/virtual",
    "override": "https://learn.microsoft.com/dotnet/csharp/language-reference/keywords/override",
    "sealed": "https://learn.microsoft.com/dotnet/csharp/language-reference/keywords/sealed",
}


def convert_code(text: str) -> str:
    def repl_inline(m: re.Match) -> str:
        code = html.unescape(m.group(1).strip())
        return f"`{code}`" if code else ""

    def repl_block(m: re.Match) -> str:
        language = m.group(1) or "csharp"
        code = m.group(2)
        cdata = CDATA_RE.match(code)
        if cdata:
            code = cdata.group(1)
        else:
            code = html.unescape(code)
        code = textwrap.dedent(code).strip("\n").rstrip()
        if not code.strip():
            return ""
        code = code.replace("```", "\\`\\`\\`")
        return f"\n```{language}\n{code}\n```\n"

    text = CODE_BLOCK_RE.sub(repl_block, text)
    return INLINE_CODE_RE.sub(repl_inline, text)


def convert_formatting(text: str) -> str:
    text = PARAMREF_RE.sub(lambda m: f"*{m.group(1)}*", text)
    text = PARA_RE.sub(lambda m: f"\n\n{m.group(1).strip()}\n\n", text)
    text = BOLD_RE.sub(lambda m: f"**{m.group(1)}**", text)
    text = ITALIC_RE.sub(lambda m: f"*{m.group(1)}*", text)
    return BREAK_RE.sub("  \n", text)


def convert_lists(text: str) -> str:
    def repl(m: re.Match) -> str:
        kind = m.group(1).lower()
        body = m.group(2)
        items = LIST_ITEM_RE.findall(body)
        lines: list[str] = []
        if kind == "table":
            header = LIST_HEADER_RE.search(body)
            if header:
                lines.append(f"| {header.group(1) or ''} | {header.group(2) or ''} |")
                lines.append("| --- | --- |")
                lines.extend(f"| {term} | {desc} |" for term, desc in items)
            else:
                for term, desc in items:
                    if term.strip():
                        lines.append(f"**{term.strip()}**")
                    if desc.strip():
                        lines.append(desc.strip())
        else:
            for i, (term, desc) in enumerate(items, start=1):
                marker = f"{i}." if kind == "number" else "-"
                content = f"**{term.strip()}**: {desc.strip()}" if term.strip() else desc.strip()
                lines.append(f"{marker} {content}")
        return "\n\n" + "\n".join(lines) + "\n\n"

    return LIST_RE.sub(repl, text)


class MarkdownXmlTransformer(DocTransformer):
    """Rewrite XML doc-comment markup as Markdown, one entity at a time."""

    def __init__(self, context: ProjectContext | None = None) -> None:
        self.context = context or ProjectContext()
        self.resolver = CrossReferenceResolver(self.context)
        self.converted = 0

    def transform(self, entity: DocEntity) -> None:
        if isinstance(entity, DocAssembly):
            self.resolver.build_reference_map(entity)
            logger.debug("Converting doc-comment markup in %s", entity.assembly_name)
        for name in TEXT_FIELDS:
            setattr(entity, name, self.convert(getattr(entity, name)))
        for exc in entity.exceptions:
            exc.description = self.convert(exc.description)
        for tp in entity.type_parameters:
            tp.description = self.convert(tp.description)

    def convert(self, text: str | None) -> str | None:
        """Convert one text field. Text without doc-comment tags is returned as is."""
        if not text or not HAS_XML_RE.search(text):
            return text
        self.converted += 1
        text = self.convert_references(text)
        text = convert_code(text)
        text = convert_formatting(text)
        text = convert_lists(text)
        text = REMAINING_TAG_RE.sub(r"&lt;\1&gt;", text)
        return BLANK_LINES_RE.sub("\n\n", text).strip()

    def convert_references(self, text: str) -> str:
        def repl_cref(m: re.Match) -> str:
            return self.resolver.resolve_reference(m.group(1)).to_markdown_link()

        def repl_cref_text(m: re.Match) -> str:
            ref = self.resolver.resolve_reference(m.group(1))
            ref.display_name = m.group(2).strip() or ref.display_name
            return ref.to_markdown_link()

        def repl_href(m: re.Match) -> str:
            label = (m.group(2) or "").strip() or "link"
            return f"[{label}]({m.group(1)})"

        def repl_langword(m: re.Match) -> str:
            keyword = m.group(1).lower()
            url = LANGWORD_URLS.get(keyword)
            return f"[`{keyword}`]({url})" if url else f"`{keyword}`"

        text = SEE_CREF_RE.sub(repl_cref, text)
        text = SEE_CREF_TEXT_RE.sub(repl_cref_text, text)
        text = SEE_HREF_RE.sub(repl_href, text)
        return SEE_LANGWORD_RE.sub(repl_langword, text)
