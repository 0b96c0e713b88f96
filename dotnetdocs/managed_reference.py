"""Symbol source over DocFX ManagedReference YAML metadata.

``docfx metadata`` writes one YAML file per namespace and type. Each file has an
``items`` list (the type and its members) and a ``references`` list describing
every symbol the items mention, including framework types outside the assembly.
This module turns a directory of such files into an ``AssemblySymbol`` graph.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml  # type: ignore[import-untyped]

from dotnetdocs.accessibility import Accessibility
from dotnetdocs.diagnostic import SYMBOL_SKIPPED, Diagnostic
from dotnetdocs.member_kind import MemberKind, is_member_kind, member_kind_of
from dotnetdocs.signature_parser import ParsedParameter, parse_signature
from dotnetdocs.symbols import (
    DEFAULT_ENUM_UNDERLYING_TYPE,
    OBJECT_TYPE_NAME,
    AssemblySymbol,
    MemberSymbol,
    ParameterSymbol,
    TypeSymbol,
)
from dotnetdocs.type_kind import TypeKind, is_type_kind
from dotnetdocs.type_names import (
    ARITY_RE,
    generic_definition_name,
    keyword_type_name,
    namespace_of,
    simple_name,
    split_top_level,
    strip_member_parameters,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

YAML_MIME_PREFIX = "### YamlMime:"
SKIPPED_FILES = {"toc.yml", ".manifest"}
COMMENT_ID_KINDS = {
    "M:": MemberKind.METHOD,
    "P:": MemberKind.PROPERTY,
    "F:": MemberKind.FIELD,
    "E:": MemberKind.EVENT,
}
ENUM_BASE_RE = re.compile(r"\benum\s+\w+\s*:\s*([\w.]+)")
FLAGS_RE = re.compile(r"\[\s*(?:System\.)?Flags(?:Attribute)?\s*[\](,]")
FLAGS_ATTRIBUTE = "System.FlagsAttribute"
CONSTANT_RE = re.compile(r"=\s*(.+?)\s*;?\s*$")


def strip_yaml_mime_header(text: str) -> str:
    """Remove the DocFX YAML MIME header from the content."""
    lines = text.splitlines()
    if lines and lines[0].startswith(YAML_MIME_PREFIX):
        return "\n".join(lines[1:]).lstrip("\n")
    return text


def load_managed_reference(path: Path) -> dict[str, Any]:
    """Load and parse a DocFX ManagedReference YAML file."""
    raw = strip_yaml_mime_header(path.read_text(encoding="utf-8-sig"))
    # Fix unquoted equals sign in VB names which confuses PyYAML
    raw = re.sub(r"^(\s*[\w\.]+\.vb:\s+)(=$)", r"\1'='", raw, flags=re.MULTILINE)
    doc = yaml.safe_load(raw)
    return doc if isinstance(doc, dict) else {}


def iter_main_items(doc: dict[str, Any]) -> Iterable[dict[str, Any]]:
    """Iterate over the main items in a DocFX YAML document."""
    items = doc.get("items") or []
    for it in items:
        if isinstance(it, dict) and it.get("uid"):
            yield it


def as_text(v: object) -> str:
    """Convert a value to a string, handling lists and None."""
    if v is None:
        return ""
    if isinstance(v, str):
        return v.strip()
    if isinstance(v, list):
        return "\n".join(as_text(x) for x in v if as_text(x))
    return str(v).strip()


def uid_of(value: object) -> str:
    return str(value.get("uid") if isinstance(value, dict) else value)


def enum_underlying_type(content: str) -> str:
    """Underlying type from ``public enum Color : byte``; ``System.Int32`` when omitted."""
    match = ENUM_BASE_RE.search(content)
    if not match:
        return DEFAULT_ENUM_UNDERLYING_TYPE
    return keyword_type_name(match.group(1))


def is_flags_enum(item: dict[str, Any], content: str) -> bool:
    """``[Flags]`` shows up in the item's attributes or in its declaration."""
    for attribute in item.get("attributes") or []:
        if isinstance(attribute, dict) and uid_of(attribute.get("type")) == FLAGS_ATTRIBUTE:
            return True
    return bool(FLAGS_RE.search(content))


def constant_value(content: str) -> str | None:
    """Literal value of a constant or enum field: ``Third = 10`` -> ``10``."""
    match = CONSTANT_RE.search(content)
    return match.group(1) if match else None


def find_metadata_files(path: Path) -> list[Path]:
    """List the ManagedReference files under a directory (or the single file given)."""
    if path.is_file():
        return [path]
    return sorted(
        f for f in path.rglob("*.yml") if f.name not in SKIPPED_FILES
    )


def member_name(uid: str, parent: str) -> str:
    """Member name from its UID: ``Ns.T.Calculate(System.Int32)`` -> ``Calculate``."""
    rest = uid[len(parent) + 1 :] if uid.startswith(parent + ".") else uid
    rest = ARITY_RE.sub("", strip_member_parameters(rest))
    if rest == "#ctor":
        return ".ctor"
    if rest == "#cctor":
        return ".cctor"
    return rest.rsplit(".", 1)[-1] if "#" not in rest else rest


def default_member_access(container: TypeSymbol | None) -> Accessibility:
    """Accessibility of a member declared without an access modifier."""
    if container and container.kind in {TypeKind.INTERFACE, TypeKind.ENUM}:
        return Accessibility.PUBLIC
    return Accessibility.PRIVATE


def exposes_non_public(types: Iterable[TypeSymbol]) -> bool:
    """Whether the metadata was generated with internal or private symbols included."""
    hidden = {Accessibility.INTERNAL, Accessibility.PRIVATE}
    for t in types:
        if t.accessibility in hidden or any(m.accessibility in hidden for m in t.members):
            return True
    return False


class ManagedReferenceSymbolSource:
    """Build an ``AssemblySymbol`` from DocFX ManagedReference YAML files."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.items: dict[str, dict[str, Any]] = {}
        self.references: dict[str, dict[str, Any]] = {}
        self.diagnostics: list[Diagnostic] = []

    def load(self) -> AssemblySymbol:
        """Parse every metadata file and assemble the symbol graph."""
        files = find_metadata_files(self.path)
        logger.info("Reading %d metadata files from %s", len(files), self.path)
        for f in files:
            doc = load_managed_reference(f)
            for it in iter_main_items(doc):
                self.items[str(it["uid"])] = it
            for ref in doc.get("references") or []:
                if isinstance(ref, dict) and ref.get("uid"):
                    self.references.setdefault(str(ref["uid"]), ref)

        assembly = AssemblySymbol(name=self._assembly_name())
        types = self._build_types(assembly)
        self._build_members(types)
        self._build_referenced_types(assembly, types)
        assembly.includes_non_public = exposes_non_public(types.values())
        assembly.diagnostics.extend(self.diagnostics)
        return assembly

    def close(self) -> None:
        self.items.clear()
        self.references.clear()

    def _assembly_name(self) -> str:
        for it in self.items.values():
            names = it.get("assemblies") or []
            if names:
                return str(names[0])
        return self.path.stem

    def _skip(self, uid: str, exc: Exception) -> None:
        logger.warning("Skipped %s: %s", uid, exc)
        self.diagnostics.append(Diagnostic(SYMBOL_SKIPPED, f"Skipped: {exc}", uid))

    def _build_types(self, assembly: AssemblySymbol) -> dict[str, TypeSymbol]:
        types: dict[str, TypeSymbol] = {}
        for uid, it in self.items.items():
            if not is_type_kind(str(it.get("type") or "")):
                continue
            try:
                symbol = self._type_symbol(uid, it, assembly.name)
            except (KeyError, TypeError, ValueError) as exc:
                self._skip(uid, exc)
                continue
            types[uid] = symbol
            assembly.namespace_for(symbol.namespace).types.append(symbol)
        return types

    def _type_symbol(self, uid: str, it: dict[str, Any], assembly: str) -> TypeSymbol:
        kind = TypeKind(str(it["type"]).lower())
        syntax = it.get("syntax") or {}
        content = as_text(syntax.get("content"))
        parsed = parse_signature(content)
        parent = str(it.get("parent") or "")
        nested = parent in self.items and is_type_kind(
            str(self.items[parent].get("type") or "")
        )
        access = parsed.accessibility or (
            Accessibility.PRIVATE if nested else Accessibility.INTERNAL
        )
        inheritance = [uid_of(x) for x in it.get("inheritance") or []]
        base = inheritance[-1] if inheritance else None
        if kind == TypeKind.INTERFACE:
            base = None
        namespace = str(it.get("namespace") or namespace_of(uid))
        return TypeSymbol(
            name=simple_name(uid),
            full_name=generic_definition_name(uid),
            namespace=namespace,
            kind=kind,
            accessibility=access,
            comment_id=str(it.get("commentId") or f"T:{uid}"),
            assembly_name=assembly,
            base_type=base,
            interfaces=[uid_of(x) for x in it.get("implements") or []],
            type_parameters=[
                str(tp.get("id")) for tp in syntax.get("typeParameters") or []
            ],
            is_static=parsed.is_static,
            is_abstract=parsed.is_abstract,
            is_sealed=parsed.is_sealed,
            is_flags=kind == TypeKind.ENUM and is_flags_enum(it, content),
            enum_underlying_type=enum_underlying_type(content) if kind == TypeKind.ENUM else None,
            signature=content,
        )

    def _build_members(self, types: dict[str, TypeSymbol]) -> None:
        for uid, it in self.items.items():
            if not is_member_kind(str(it.get("type") or "")):
                continue
            container = types.get(str(it.get("parent") or ""))
            if container is None:
                continue
            try:
                container.members.append(self._member_symbol(uid, it, container))
            except (KeyError, TypeError, ValueError) as exc:
                self._skip(uid, exc)

    def _member_symbol(
        self, uid: str, it: dict[str, Any], container: TypeSymbol
    ) -> MemberSymbol:
        kind = member_kind_of(str(it["type"]))
        syntax = it.get("syntax") or {}
        content = as_text(syntax.get("content"))
        parsed = parse_signature(content)
        name = member_name(uid, str(it["parent"]))
        if name == ".ctor":
            kind = MemberKind.CONSTRUCTOR

        parameters = []
        declared = syntax.get("parameters") or []
        for i, p in enumerate(declared):
            hint = parsed.parameters[i] if i < len(parsed.parameters) else None
            parameters.append(self._parameter_symbol(p, hint))

        overridden = it.get("overridden")
        is_interface = container.kind == TypeKind.INTERFACE
        returns = syntax.get("return") or {}
        is_static = parsed.is_static or (
            container.kind == TypeKind.ENUM and kind == MemberKind.FIELD
        )
        return MemberSymbol(
            name=name,
            kind=kind,
            accessibility=parsed.accessibility or default_member_access(container),
            containing_type=container.full_name,
            comment_id=str(it.get("commentId") or ""),
            return_type=uid_of(returns["type"]) if returns.get("type") else None,
            parameters=parameters,
            type_parameters=[
                str(tp.get("id")) for tp in syntax.get("typeParameters") or []
            ],
            is_static=is_static,
            is_virtual=parsed.is_virtual,
            is_abstract=parsed.is_abstract or (is_interface and not parsed.is_static),
            is_override=parsed.is_override,
            is_sealed=parsed.is_sealed,
            overridden=strip_member_parameters(str(overridden)) if overridden else None,
            is_extension_method=bool(
                parsed.is_static and parameters and parameters[0].is_this
            ),
            constant_value=constant_value(content) if kind == MemberKind.FIELD else None,
            signature=content,
        )

    @staticmethod
    def _parameter_symbol(
        p: dict[str, Any], hint: ParsedParameter | None
    ) -> ParameterSymbol:
        default = hint.default_value if hint else None
        return ParameterSymbol(
            name=str(p.get("id") or (hint.name if hint else "")),
            type_name=uid_of(p.get("type") or (hint.type_name if hint else "")),
            is_optional=default is not None,
            has_default_value=default is not None,
            default_value=default,
            is_params=bool(hint and hint.is_params),
            is_this=bool(hint and hint.is_this),
        )

    def _build_referenced_types(
        self, assembly: AssemblySymbol, types: dict[str, TypeSymbol]
    ) -> None:
        """Create stubs for base types declared outside the assembly.

        Their members come from the ``inheritedMembers`` lists of derived types.
        ``System.Object`` is left out; the model builder handles it.
        """
        declared = {t.full_name for t in types.values()}
        for uid, t in types.items():
            base = t.base_type
            if not base:
                continue
            base_key = generic_definition_name(base)
            if base_key in declared or base_key == OBJECT_TYPE_NAME:
                continue
            stub = assembly.referenced_types.get(base_key)
            if stub is None:
                ref = self.references.get(base) or self.references.get(base_key) or {}
                stub = TypeSymbol(
                    name=simple_name(base_key),
                    full_name=base_key,
                    namespace=str(ref.get("namespace") or namespace_of(base_key)),
                    kind=TypeKind.CLASS,
                    comment_id=str(ref.get("commentId") or f"T:{base_key}"),
                    assembly_name="",
                )
                assembly.referenced_types[base_key] = stub
            self._add_inherited_stubs(stub, self.items[uid].get("inheritedMembers"))

    def _add_inherited_stubs(self, stub: TypeSymbol, inherited: object) -> None:
        known = {m.comment_id for m in stub.members}
        for member_uid in inherited or []:
            member_uid = str(member_uid)
            if not member_uid.startswith(stub.full_name + "."):
                continue
            ref = self.references.get(member_uid) or {}
            comment_id = str(ref.get("commentId") or "")
            if not comment_id or comment_id in known:
                continue
            kind = COMMENT_ID_KINDS.get(comment_id[:2], MemberKind.METHOD)
            name = member_name(member_uid, stub.full_name)
            param_types = []
            if "(" in comment_id:
                inner = comment_id[comment_id.index("(") + 1 : comment_id.rindex(")")]
                param_types = split_top_level(inner)
            stub.members.append(
                MemberSymbol(
                    name=name,
                    kind=MemberKind.CONSTRUCTOR if name == ".ctor" else kind,
                    accessibility=Accessibility.PUBLIC,
                    containing_type=stub.full_name,
                    comment_id=comment_id,
                    parameters=[
                        ParameterSymbol(name=f"arg{i}", type_name=pt)
                        for i, pt in enumerate(param_types)
                    ],
                )
            )
            known.add(comment_id)
