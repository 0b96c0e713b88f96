"""Resolve cross-reference tokens against a documentation model.

Tokens come from doc comments (``<see cref="T:Ns.Type"/>``), ``<seealso>`` and
``related-apis.md`` files. A token resolves to a page in the generated tree, to an
external URL, or to the framework documentation site. Resolution never raises:
anything unknown comes back as an unresolved ``DocReference``.
"""

import logging
import re
from collections.abc import Iterable

from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.doc_entity import DocEntity
from dotnetdocs.doc_enum import DocEnum, DocEnumValue
from dotnetdocs.doc_member import DocMember
from dotnetdocs.doc_namespace import DocNamespace
from dotnetdocs.doc_reference import DocReference
from dotnetdocs.doc_type import DocType
from dotnetdocs.file_naming import namespace_page_path, type_page_path
from dotnetdocs.member_kind import MemberKind
from dotnetdocs.project_context import ProjectContext
from dotnetdocs.reference_type import ReferenceType
from dotnetdocs.type_names import (
    generic_definition_name,
    simple_name,
    split_generic,
    split_top_level,
    strip_generic_arguments,
    strip_member_parameters,
)

logger = logging.getLogger(__name__)

FRAMEWORK_DOCS_URL = "https://learn.microsoft.com/dotnet/api/"
PREFIX_RE = re.compile(r"^[ANTFPME!]:")
ARITY_MARKER_RE = re.compile(r"`+(\d+)")

MEMBER_REFERENCE_TYPES = {
    MemberKind.FIELD: ReferenceType.FIELD,
    MemberKind.PROPERTY: ReferenceType.PROPERTY,
    MemberKind.METHOD: ReferenceType.METHOD,
    MemberKind.CONSTRUCTOR: ReferenceType.METHOD,
    MemberKind.EVENT: ReferenceType.EVENT,
}


def strip_prefix(raw: str) -> str:
    """Drop a documentation-ID prefix such as ``T:`` or ``M:``."""
    return PREFIX_RE.sub("", raw.strip(), count=1)


def is_url(raw: str) -> bool:
    return raw.startswith(("http://", "https://"))


def is_framework_type(name: str, framework_namespaces: Iterable[str]) -> bool:
    return any(name.startswith(prefix) for prefix in framework_namespaces)


def framework_docs_url(type_name: str) -> str:
    """Documentation URL of a framework type: ``List`1`` -> ``.../list-1``."""
    name = generic_definition_name(type_name)
    name = ARITY_MARKER_RE.sub(r"-\1", name).replace("+", ".")
    return FRAMEWORK_DOCS_URL + name.lower()


def framework_display_name(type_name: str) -> str:
    """Simple name with type arguments in braces: ``List`1`` -> ``List{T}``."""
    _, args = split_generic(type_name)
    _, arity = strip_generic_arguments(type_name)
    name = simple_name(type_name)
    if args:
        return name + "{" + ", ".join(simple_name(a) for a in split_top_level(args)) + "}"
    if arity == 1:
        return name + "{T}"
    if arity:
        return name + "{" + ", ".join(f"T{i + 1}" for i in range(arity)) + "}"
    return name


class CrossReferenceResolver:
    """Index a ``DocAssembly`` and resolve reference tokens against it.

    Lookups are case-insensitive. When two entities claim the same key the
    first one indexed wins, so declared members shadow inherited ones.
    """

    def __init__(self, context: ProjectContext | None = None) -> None:
        self.context = context or ProjectContext()
        self._entities: dict[str, DocEntity] = {}
        self._paths: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._entities)

    def build_reference_map(self, assembly: DocAssembly) -> None:
        """(Re)build the index from a model."""
        if assembly is None:
            msg = "assembly must not be None"
            raise ValueError(msg)
        self._entities.clear()
        self._paths.clear()
        self._add(assembly, f"A:{assembly.assembly_name}", "")
        for ns in assembly.namespaces:
            self._index_namespace(ns)
        logger.debug("Indexed %d reference keys for %s", len(self), assembly.assembly_name)

    def resolve_reference(self, raw: str | None, current_path: str = "") -> DocReference:
        """Resolve one token. Paths are root-relative, so ``current_path`` is informational."""
        ref = DocReference.from_raw(raw)
        token = (raw or "").strip()
        if not token:
            return ref

        if is_url(token):
            ref.reference_type = ReferenceType.EXTERNAL
            ref.display_name = "link"
            ref.relative_path = token
            ref.is_resolved = True
            return ref

        target = strip_member_parameters(strip_prefix(token))
        for key in (strip_member_parameters(token), target, generic_definition_name(target)):
            entity = self._entities.get(key.lower())
            if entity is not None:
                self._resolved(ref, key, entity)
                return ref

        if is_framework_type(target, self.context.framework_namespaces):
            ref.reference_type = ReferenceType.FRAMEWORK
            ref.display_name = framework_display_name(target)
            ref.relative_path = framework_docs_url(target)
            ref.is_resolved = True
            return ref

        logger.debug("Unresolved reference %s (from %s)", token, current_path or "?")
        ref.reference_type = ReferenceType.UNRESOLVED
        ref.display_name = simple_name(target) if target else token
        return ref

    def resolve_references(
        self, raws: Iterable[str], current_path: str = ""
    ) -> list[DocReference]:
        """Resolve tokens in order."""
        return [self.resolve_reference(raw, current_path) for raw in raws]

    def _resolved(self, ref: DocReference, key: str, entity: DocEntity) -> None:
        ref.target_entity = entity
        ref.is_resolved = True
        ref.relative_path = self._root_relative(self._paths[key.lower()])
        if isinstance(entity, DocMember):
            owner = strip_prefix(key).rpartition(".")[0]
            ref.reference_type = MEMBER_REFERENCE_TYPES.get(
                entity.member_kind, ReferenceType.METHOD
            )
            ref.display_name = f"{simple_name(owner)}.{entity.name}" if owner else entity.name
            ref.anchor = entity.name.lower()
        elif isinstance(entity, DocEnumValue):
            owner = strip_prefix(key).rpartition(".")[0]
            ref.reference_type = ReferenceType.FIELD
            ref.display_name = f"{simple_name(owner)}.{entity.name}"
            ref.anchor = entity.name.lower()
        elif isinstance(entity, DocType):
            ref.reference_type = ReferenceType.TYPE
            ref.display_name = entity.name
        elif isinstance(entity, DocNamespace):
            ref.reference_type = ReferenceType.NAMESPACE
            ref.display_name = entity.display_name or entity.name
        else:
            ref.display_name = entity.display_name or simple_name(strip_prefix(key))

    def _root_relative(self, path: str) -> str:
        root = self.context.api_reference_path.replace("\\", "/").strip("/")
        if not path:
            return f"/{root}"
        return f"/{root}/{path.lstrip('/')}"

    def _add(self, entity: DocEntity, key: str, path: str) -> None:
        if not key.strip():
            return
        lowered = key.lower()
        if lowered not in self._entities:
            self._entities[lowered] = entity
            self._paths[lowered] = path

    def _index_namespace(self, ns: DocNamespace) -> None:
        options = self.context.file_naming_options
        self._add(ns, f"N:{ns.name}", namespace_page_path(ns.name, options))
        if ns.name:
            self._add(ns, ns.name, namespace_page_path(ns.name, options))
        for t in ns.types:
            self._index_type(t, ns)

    def _index_type(self, t: DocType, ns: DocNamespace) -> None:
        path = type_page_path(ns.name, t.name, self.context.file_naming_options)
        full_name = t.full_name or t.name
        self._add(t, f"T:{full_name}", path)
        self._add(t, full_name, path)
        self._add(t, t.name, path)
        for m in t.members:
            self._add(m, f"{m.member_kind.comment_prefix}{full_name}.{m.name}", path)
            self._add(m, f"{full_name}.{m.name}", path)
        if isinstance(t, DocEnum):
            for v in t.values:
                self._add(v, f"F:{full_name}.{v.name}", path)
                self._add(v, f"{full_name}.{v.name}", path)
                self._add(v, f"{t.name}.{v.name}", path)
