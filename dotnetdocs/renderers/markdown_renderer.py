"""Render a documentation model to Markdown pages.

One landing page per namespace and one page per type, with members inlined on
the type page. References are resolved through the cross-reference resolver, so
links are root-relative under the API reference path.
"""

import logging
import re

from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.doc_entity import DocEntity
from dotnetdocs.doc_enum import DocEnum
from dotnetdocs.doc_member import DocMember
from dotnetdocs.doc_namespace import DocNamespace
from dotnetdocs.doc_type import DocType
from dotnetdocs.member_kind import MemberKind
from dotnetdocs.navigation import write_toc
from dotnetdocs.renderers.renderer_base import RendererBase
from dotnetdocs.type_kind import TypeKind

logger = logging.getLogger(__name__)

TYPE_KIND_GROUPS = {
    TypeKind.CLASS: "Classes",
    TypeKind.STRUCT: "Structs",
    TypeKind.INTERFACE: "Interfaces",
    TypeKind.ENUM: "Enums",
    TypeKind.DELEGATE: "Delegates",
}

MEMBER_KIND_GROUPS = {
    MemberKind.CONSTRUCTOR: "Constructors",
    MemberKind.FIELD: "Fields",
    MemberKind.PROPERTY: "Properties",
    MemberKind.METHOD: "Methods",
    MemberKind.EVENT: "Events",
}

CONCEPTUAL_SECTIONS = (
    ("usage", "Usage"),
    ("examples", "Examples"),
    ("best_practices", "Best Practices"),
    ("patterns", "Patterns"),
    ("considerations", "Considerations"),
)


def header_slug(s: str) -> str:
    """Generate a GitHub-ish anchor slug: lower, hyphenate non-alnum."""
    s = s.strip().lower()
    s = re.sub(r"[^a-z0-9]+", "-", s)
    s = re.sub(r"-{2,}", "-", s).strip("-")
    return s or "section"


def md_codeblock(lang: str, code: str) -> str:
    """Generate a Markdown code block."""
    return f"```{lang}\n{code.rstrip()}\n```"


def md_table(headers: list[str], rows: list[list[str]]) -> str:
    """Generate a Markdown table."""
    if not rows:
        return ""
    out = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join(["---"] * len(headers)) + " |",
    ]
    out.extend("| " + " | ".join(r) + " |" for r in rows)
    return "\n".join(out)


def one_line(text: str | None) -> str:
    return (text or "").replace("\n", " ").replace("|", "\\|").strip()


class MarkdownRenderer(RendererBase):
    """Write ``.md`` pages and a ``toc.yml`` navigation file."""

    def render(self, model: DocAssembly) -> None:
        self.resolver.build_reference_map(model)
        toc = []
        written = 0
        for ns in self.documented_namespaces(model):
            ns_page = self.namespace_page(ns)
            self.output_file(ns_page, ".md").write_text(
                self.render_namespace_page(ns), encoding="utf-8"
            )
            written += 1
            entry = {"name": ns.display_name or ns.name, "href": f"{ns_page}.md", "items": []}
            for t in sorted(ns.types, key=lambda x: x.name.lower()):
                page = self.type_page(ns, t)
                self.output_file(page, ".md").write_text(
                    self.render_type_page(t, ns), encoding="utf-8"
                )
                entry["items"].append({"name": t.display_name or t.name, "href": f"{page}.md"})
                written += 1
            toc.append(entry)
        write_toc(self.api_root / "toc.yml", toc)
        logger.info("Wrote %d Markdown pages to %s", written, self.api_root)

    def link(self, raw: str, current_path: str = "") -> str:
        return self.resolver.resolve_reference(raw, current_path).to_markdown_link()

    def render_namespace_page(self, ns: DocNamespace) -> str:
        """Render a namespace landing page in Markdown."""
        parts: list[str] = [f"# Namespace {ns.display_name or ns.name}", ""]
        if ns.summary:
            parts += [ns.summary, ""]
        parts.extend(self._conceptual_sections(ns))

        for kind, plural in TYPE_KIND_GROUPS.items():
            matches = [t for t in ns.types if t.type_kind == kind]
            if not matches:
                continue
            parts += [f"## {plural}", ""]
            for t in sorted(matches, key=lambda x: x.name.lower()):
                parts.append(f"### {self.link('T:' + t.full_name)}")
                summary = one_line(t.summary)
                if summary:
                    parts.append(summary)
                parts.append("")
        return "\n".join(parts).rstrip() + "\n"

    def render_type_page(self, t: DocType, ns: DocNamespace) -> str:
        """Render a type page (class, struct, etc.) in Markdown."""
        kind_label = t.type_kind.value.capitalize()
        parts: list[str] = [f"# {kind_label} {t.display_name or t.name}", ""]

        parts.append(f"**Namespace:** {self.link('N:' + ns.name)}")
        if t.assembly_name:
            parts.append(f"**Assembly:** {t.assembly_name}.dll")
        parts.append("")
        if t.is_external_reference:
            parts += ["> This type is defined outside the documented assemblies.", ""]

        if t.summary:
            parts += [t.summary, ""]
        if t.signature:
            parts += [md_codeblock("csharp", t.signature), ""]

        if t.base_type:
            parts += ["## Inheritance", f"{self.link('T:' + t.base_type)} → {t.name}", ""]
        if t.implemented_interfaces:
            parts.append("## Implements")
            parts.extend(f"- {self.link('T:' + i)}" for i in t.implemented_interfaces)
            parts.append("")

        parts.extend(self._type_parameters(t))
        if t.remarks:
            parts += ["## Remarks", t.remarks, ""]
        parts.extend(self._conceptual_sections(t))
        if isinstance(t, DocEnum):
            parts.extend(self._enum_values(t))
        parts.extend(self._members(t))
        parts.extend(self._see_also(t))
        return "\n".join(parts).rstrip() + "\n"

    def _enum_values(self, t: DocEnum) -> list[str]:
        underlying = self.resolver.resolve_reference(t.underlying_type.raw_reference)
        underlying.display_name = t.underlying_type.display_name
        parts = [f"**Underlying type:** {underlying.to_markdown_link()}"]
        if t.is_flags:
            parts.append("Values can be combined as bit flags.")
        parts.append("")
        if t.values:
            rows = [[v.name, v.numeric_value or "", one_line(v.summary)] for v in t.values]
            parts += ["## Values", "", md_table(["Name", "Value", "Description"], rows), ""]
        return parts

    def _members(self, t: DocType) -> list[str]:
        declared = [m for m in t.members if not m.is_inherited and not self._is_relocated(m, t)]
        extensions = [m for m in t.members if self._is_relocated(m, t)]
        inherited = [m for m in t.members if m.is_inherited]

        parts: list[str] = []
        for kind, plural in MEMBER_KIND_GROUPS.items():
            matches = [m for m in declared if m.member_kind == kind]
            if not matches:
                continue
            parts += [f"## {plural}", ""]
            for m in sorted(matches, key=lambda x: x.name.lower()):
                parts.extend(self._member(m))

        if extensions:
            parts += ["## Extension Methods", ""]
            for m in sorted(extensions, key=lambda x: x.name.lower()):
                parts.extend(self._member(m))

        if inherited:
            parts += ["## Inherited Members", ""]
            links = [
                self.link(f"{m.member_kind.comment_prefix}{m.declaring_type_name}.{m.name}")
                for m in inherited
            ]
            parts += [", ".join(links), ""]
        return parts

    @staticmethod
    def _is_relocated(m: DocMember, t: DocType) -> bool:
        return m.is_extension_method and m.declaring_type_name != t.full_name

    def _member(self, m: DocMember) -> list[str]:
        """Render a single member section."""
        parts = [f"### {m.name}", ""]
        if m.is_extension_method and m.declaring_type_name:
            parts += [f"*Extension method from {self.link('T:' + m.declaring_type_name)}*", ""]
        if m.signature:
            parts += [md_codeblock("csharp", m.signature), ""]
        if m.is_override and m.overridden_member:
            parts += [f"Overrides {self.link('M:' + m.overridden_member)}", ""]
        if m.summary:
            parts += [m.summary, ""]

        if m.parameters:
            parts += ["#### Parameters", ""]
            rows = []
            for p in m.parameters:
                description = one_line(p.usage)
                if p.has_default_value:
                    description = f"{description} (default: `{p.default_value}`)".strip()
                type_name = f"`{p.type_name}`" if p.type_name else ""
                prefix = "params " if p.is_params else ""
                rows.append([f"{prefix}`{p.name}`", type_name, description])
            parts += [md_table(["Name", "Type", "Description"], rows), ""]

        label = {
            MemberKind.PROPERTY: "Property Value",
            MemberKind.FIELD: "Field Value",
        }.get(m.member_kind, "Returns")
        description = m.value if m.member_kind == MemberKind.PROPERTY and m.value else m.returns
        if (m.return_type_name and m.return_type_name != "System.Void") or description:
            parts += [f"#### {label}", ""]
            if m.return_type_name:
                parts += [f"**Type:** {self.link('T:' + m.return_type_name)}", ""]
            if description:
                parts += [description, ""]

        if m.exceptions:
            parts += ["#### Exceptions", ""]
            for e in m.exceptions:
                et = self.link("T:" + e.type) if e.type else ""
                parts.append(f"- {et}: {one_line(e.description)}" if e.description else f"- {et}")
            parts.append("")
        if m.remarks:
            parts += ["#### Remarks", "", m.remarks, ""]
        return parts

    def _type_parameters(self, entity: DocEntity) -> list[str]:
        if not entity.type_parameters:
            return []
        rows = [[f"`{tp.name}`", one_line(tp.description)] for tp in entity.type_parameters]
        return ["## Type Parameters", "", md_table(["Name", "Description"], rows), ""]

    @staticmethod
    def _conceptual_sections(entity: DocEntity) -> list[str]:
        parts: list[str] = []
        for attribute, title in CONCEPTUAL_SECTIONS:
            text = getattr(entity, attribute)
            if text:
                parts += [f"## {title}", "", text, ""]
        return parts

    def _see_also(self, entity: DocEntity) -> list[str]:
        refs = self.resolver.resolve_references([*entity.see_also, *entity.related_apis])
        if not refs:
            return []
        parts = ["## See also"]
        parts.extend(f"- {ref.to_markdown_link()}" for ref in refs)
        parts.append("")
        return parts
