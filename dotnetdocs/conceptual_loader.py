"""Overlay hand-written conceptual content onto a documentation model.

Content lives in a folder tree that mirrors the model::

    <root>/summary.md                       assembly
    <root>/Ns/Sub/usage.md                  namespace Ns.Sub
    <root>/Ns/Sub/MyType/examples.md        type Ns.Sub.MyType
    <root>/Ns/Sub/MyType-1/examples.md      type Ns.Sub.MyType<T>
    <root>/Ns/Sub/MyType/Run/usage.md       member Run
    <root>/Ns/Sub/MyType/Run/param-x.md     parameter x of Run
    <root>/Ns/Sub/MyType/Run/x/usage.md     parameter x of Run

A loaded file replaces the field it maps to; missing files leave fields alone.
Files that still start with the placeholder marker are skipped unless
placeholders are shown.
"""

import logging
import re
from pathlib import Path

from dotnetdocs.constants import (
    CONCEPTUAL_FILES,
    GLOBAL_NAMESPACE_NAME,
    PARAMETER_FILE_EXTENSION,
    PARAMETER_FILE_PREFIX,
    PLACEHOLDER_MARKER,
    RELATED_APIS_FILE,
)
from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.doc_entity import DocEntity
from dotnetdocs.doc_member import DocMember
from dotnetdocs.doc_type import DocType
from dotnetdocs.project_context import ProjectContext
from dotnetdocs.type_names import strip_generic_arguments

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(
    r"^\s*<!--\s*TODO:\s*REMOVE\s+THIS\s+COMMENT\s+AFTER\s+YOU\s+CUSTOMIZE\s+THIS\s+CONTENT\s*-->\s*$",
    re.IGNORECASE,
)
BOM = "\ufeff"

# Files written by create_placeholders, with the heading that follows the marker.
PLACEHOLDER_TEMPLATES = {
    "usage.md": "Usage",
    "examples.md": "Examples",
    "best-practices.md": "Best Practices",
    "patterns.md": "Patterns",
    "considerations.md": "Considerations",
    RELATED_APIS_FILE: None,
}


def is_todo_placeholder_file(content: str | None) -> bool:
    """True when the first non-blank line is the placeholder marker."""
    if not content:
        return False
    for line in content.lstrip(BOM).splitlines():
        if line.strip():
            return bool(PLACEHOLDER_RE.match(line))
    return False


def read_content(path: Path) -> str | None:
    """Read a content file without its BOM and surrounding whitespace."""
    text = path.read_text(encoding="utf-8").lstrip(BOM).strip()
    return text or None


def namespace_dir(root: Path, namespace: str) -> Path:
    name = namespace or GLOBAL_NAMESPACE_NAME
    return root.joinpath(*name.split("."))


def type_dir_name(t: DocType) -> str:
    """Folder name of a type; generic arity keeps ``Box`` and ``Box<T>`` apart."""
    _, arity = strip_generic_arguments(t.full_name or t.name)
    return f"{t.name}-{arity}" if arity else t.name


class ConceptualContentLoader:
    """Apply conceptual content from ``context.conceptual_path`` to a model."""

    def __init__(self, context: ProjectContext | None = None) -> None:
        self.context = context or ProjectContext()

    @property
    def root(self) -> Path | None:
        if not self.context.conceptual_path:
            return None
        return Path(self.context.conceptual_path)

    def load(self, assembly: DocAssembly) -> int:
        """Load content for every entity in the model; returns the number of files applied.

        A missing root makes this a no-op.
        """
        root = self.root
        if root is None or not root.is_dir():
            logger.debug("No conceptual content at %s", root)
            return 0

        applied = self._load_entity(assembly, root)
        for ns in assembly.namespaces:
            ns_dir = namespace_dir(root, ns.name)
            if not ns_dir.is_dir():
                continue
            applied += self._load_entity(ns, ns_dir)
            for t in ns.types:
                type_dir = ns_dir / type_dir_name(t)
                if type_dir.is_dir():
                    applied += self._load_type(t, type_dir)
        logger.info("Applied %d conceptual files from %s", applied, root)
        return applied

    def create_placeholders(self, assembly: DocAssembly) -> int:
        """Write marker-prefixed templates where no content exists yet.

        Existing files are never touched. Returns the number of files written.
        """
        root = self.root
        if root is None:
            logger.warning("Cannot create placeholders: no conceptual path configured")
            return 0
        written = 0
        for ns in assembly.namespaces:
            ns_dir = namespace_dir(root, ns.name)
            written += self._write_templates(ns_dir, ns.name or GLOBAL_NAMESPACE_NAME)
            for t in ns.types:
                if t.is_external_reference:
                    continue
                type_dir = ns_dir / type_dir_name(t)
                written += self._write_templates(type_dir, t.full_name)
                for m in t.members:
                    if m.is_inherited:
                        continue
                    written += self._write_templates(type_dir / m.name, f"{t.name}.{m.name}")
        logger.info("Created %d conceptual placeholder files under %s", written, root)
        return written

    def _load_type(self, t: DocType, type_dir: Path) -> int:
        applied = self._load_entity(t, type_dir)
        for m in t.members:
            member_dir = type_dir / m.name
            if member_dir.is_dir():
                applied += self._load_member(m, member_dir)
        return applied

    def _load_member(self, m: DocMember, member_dir: Path) -> int:
        applied = self._load_entity(m, member_dir)
        for p in m.parameters:
            param_file = member_dir / f"{PARAMETER_FILE_PREFIX}{p.name}{PARAMETER_FILE_EXTENSION}"
            content = self._read(param_file)
            if content is not None:
                p.usage = content
                applied += 1
            param_dir = member_dir / p.name
            if param_dir.is_dir():
                applied += self._load_entity(p, param_dir)
        return applied

    def _load_entity(self, entity: DocEntity, directory: Path) -> int:
        applied = 0
        for file_name, attribute in CONCEPTUAL_FILES.items():
            content = self._read(directory / file_name)
            if content is not None:
                setattr(entity, attribute, content)
                applied += 1
        related = self._read(directory / RELATED_APIS_FILE)
        if related is not None:
            entity.related_apis = [
                line.strip()
                for line in related.splitlines()
                if line.strip() and not line.strip().startswith("<!--")
            ]
            applied += 1
        return applied

    def _read(self, path: Path) -> str | None:
        if not path.is_file():
            return None
        content = read_content(path)
        if content is None:
            return None
        if not self.context.show_placeholders and is_todo_placeholder_file(content):
            logger.debug("Skipping placeholder %s", path)
            return None
        return content

    def _write_templates(self, directory: Path, title: str) -> int:
        directory.mkdir(parents=True, exist_ok=True)
        written = 0
        for file_name, heading in PLACEHOLDER_TEMPLATES.items():
            path = directory / file_name
            if path.exists():
                continue
            if heading is None:
                body = f"{PLACEHOLDER_MARKER}\n<!-- One API reference per line, e.g. T:System.String -->\n"
            else:
                body = (
                    f"{PLACEHOLDER_MARKER}\n# {heading}\n\n"
                    f"Describe {heading.lower()} for {title} here.\n"
                )
            path.write_text(body, encoding="utf-8")
            written += 1
        return written
