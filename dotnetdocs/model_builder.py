"""Build the documentation model from a symbol graph and its doc comments.

Walks assembly -> namespaces -> types -> members -> parameters and produces the
``DocAssembly`` tree. Members are gathered along the base-class chain so that
inherited members show up on derived types, attributed to the ancestor that
declares them. Accessibility filtering uses the declared accessibility of each
symbol against the project's include-set.
"""

import logging
from collections.abc import Iterator

from dotnetdocs.accessibility import Accessibility
from dotnetdocs.diagnostic import INTERNALS_NOT_VISIBLE, SYMBOL_SKIPPED, Diagnostic
from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.doc_comments import DocCommentExtractor
from dotnetdocs.doc_entity import DocEntity
from dotnetdocs.doc_enum import DocEnum, DocEnumValue, underlying_type_reference
from dotnetdocs.doc_member import DocMember
from dotnetdocs.doc_namespace import DocNamespace
from dotnetdocs.doc_parameter import DocParameter
from dotnetdocs.doc_type import DocType
from dotnetdocs.doc_type_parameter import DocTypeParameter
from dotnetdocs.errors import SymbolEvaluationError
from dotnetdocs.file_naming import namespace_display_name
from dotnetdocs.member_kind import MemberKind
from dotnetdocs.project_context import ProjectContext
from dotnetdocs.symbols import (
    DEFAULT_ENUM_UNDERLYING_TYPE,
    OBJECT_TYPE_NAME,
    AssemblySymbol,
    MemberSymbol,
    ParameterSymbol,
    TypeSymbol,
)
from dotnetdocs.type_kind import TypeKind
from dotnetdocs.type_names import (
    generic_arguments,
    generic_definition_name,
    substitute_type_parameters,
)

logger = logging.getLogger(__name__)

# Public members every class inherits from System.Object.
OBJECT_MEMBERS = (
    MemberSymbol(
        name="ToString",
        kind=MemberKind.METHOD,
        accessibility=Accessibility.PUBLIC,
        containing_type=OBJECT_TYPE_NAME,
        comment_id="M:System.Object.ToString",
        return_type="System.String",
        is_virtual=True,
        signature="public virtual string ToString()",
    ),
    MemberSymbol(
        name="Equals",
        kind=MemberKind.METHOD,
        accessibility=Accessibility.PUBLIC,
        containing_type=OBJECT_TYPE_NAME,
        comment_id="M:System.Object.Equals(System.Object)",
        return_type="System.Boolean",
        parameters=[ParameterSymbol(name="obj", type_name="System.Object")],
        is_virtual=True,
        signature="public virtual bool Equals(object obj)",
    ),
    MemberSymbol(
        name="GetHashCode",
        kind=MemberKind.METHOD,
        accessibility=Accessibility.PUBLIC,
        containing_type=OBJECT_TYPE_NAME,
        comment_id="M:System.Object.GetHashCode",
        return_type="System.Int32",
        is_virtual=True,
        signature="public virtual int GetHashCode()",
    ),
    MemberSymbol(
        name="GetType",
        kind=MemberKind.METHOD,
        accessibility=Accessibility.PUBLIC,
        containing_type=OBJECT_TYPE_NAME,
        comment_id="M:System.Object.GetType",
        return_type="System.Type",
        signature="public Type GetType()",
    ),
)

OBJECT_SUMMARIES = {
    "ToString": "Returns a string that represents the current object.",
    "Equals": "Determines whether the specified object is equal to the current object.",
    "GetHashCode": "Serves as the default hash function.",
    "GetType": "Gets the Type of the current instance.",
}


def declare_type_parameters(entity: DocEntity, names: list[str]) -> None:
    """List every declared type parameter, keeping ``<typeparam>`` descriptions."""
    documented = {tp.name: tp for tp in entity.type_parameters}
    declared = [documented.pop(name, None) or DocTypeParameter(name) for name in names]
    entity.type_parameters = declared + list(documented.values())


class ModelBuilder:
    """Turn an ``AssemblySymbol`` into a ``DocAssembly``."""

    def __init__(
        self,
        assembly: AssemblySymbol,
        extractor: DocCommentExtractor | None = None,
        context: ProjectContext | None = None,
    ) -> None:
        self.assembly = assembly
        self.extractor = extractor or DocCommentExtractor()
        self.context = context or ProjectContext()
        self.diagnostics: list[Diagnostic] = list(assembly.diagnostics)

    def build(self) -> DocAssembly:
        """Build the whole model. Symbols that fail to evaluate are skipped."""
        included = list(self.context.included_members)
        model = DocAssembly(
            assembly_name=self.assembly.name,
            version=self.assembly.version or None,
            display_name=self.assembly.name,
            included_members=included,
        )
        self._check_internals_visible()

        for ns in self.assembly.namespaces:
            if ns.is_global and self.context.ignore_global_namespace:
                logger.debug("Ignoring %d types in the global namespace", len(ns.types))
                continue
            doc_ns = DocNamespace(
                name=ns.name,
                display_name=namespace_display_name(ns.name),
                included_members=list(included),
            )
            self._merge_comment(doc_ns, f"N:{ns.name}" if ns.name else None)
            for t in ns.types:
                if not self.context.includes(t.accessibility):
                    logger.debug("Filtered %s (%s)", t.full_name, t.accessibility.value)
                    continue
                try:
                    doc_ns.types.append(self.build_type(t))
                except SymbolEvaluationError as exc:
                    self._skip(exc)
            model.namespaces.append(doc_ns)

        logger.info(
            "Built model for %s: %d namespaces, %d types",
            model.assembly_name,
            len(model.namespaces),
            sum(len(ns.types) for ns in model.namespaces),
        )
        return model

    def build_type(self, t: TypeSymbol) -> DocType:
        base = t.base_type
        if base and generic_definition_name(base) == OBJECT_TYPE_NAME:
            base = None
        display = t.name
        if t.type_parameters:
            display += "<" + ", ".join(t.type_parameters) + ">"
        fields = dict(
            name=t.name,
            full_name=t.full_name,
            namespace_name=t.namespace,
            assembly_name=t.assembly_name or self.assembly.name,
            type_kind=t.kind,
            signature=t.signature or None,
            base_type=base,
            implemented_interfaces=list(t.interfaces),
            is_static=t.is_static,
            is_abstract=t.is_abstract,
            is_sealed=t.is_sealed,
            display_name=display,
            included_members=list(self.context.included_members),
        )
        if t.kind == TypeKind.ENUM:
            return self.build_enum(t, fields)
        doc_type = DocType(**fields)
        self._merge_comment(doc_type, t.comment_id)
        declare_type_parameters(doc_type, t.type_parameters)
        doc_type.members = self.collect_members(t)
        return doc_type

    def build_enum(self, t: TypeSymbol, fields: dict) -> DocEnum:
        """Enums carry their fields as values and get no inherited members."""
        doc_enum = DocEnum(
            **fields,
            is_flags=t.is_flags,
            underlying_type=underlying_type_reference(
                t.enum_underlying_type or DEFAULT_ENUM_UNDERLYING_TYPE
            ),
        )
        self._merge_comment(doc_enum, t.comment_id)
        for m in t.members:
            if m.kind != MemberKind.FIELD or m.is_implicitly_declared:
                continue
            value = DocEnumValue(
                name=m.name,
                numeric_value=m.constant_value,
                display_name=m.name,
                included_members=list(self.context.included_members),
            )
            self._merge_comment(value, m.comment_id)
            doc_enum.values.append(value)
        return doc_enum

    def collect_members(self, t: TypeSymbol) -> list[DocMember]:
        """Declared members first, then those inherited along the base-class chain.

        Static classes get no ``System.Object`` members; nothing can call them.
        """
        members: list[DocMember] = []
        hidden: set[str] = set()

        for m in t.members:
            if m.is_implicitly_declared:
                continue
            hidden.add(m.key)
            if self.context.includes(m.accessibility):
                self._add_member(members, m, t, inherited=False)

        if t.kind == TypeKind.INTERFACE:
            return members

        for ancestor, arguments in self.inheritance_chain(t):
            for m in ancestor.members:
                key = m.key_for(arguments)
                if (
                    m.kind == MemberKind.CONSTRUCTOR
                    or m.accessibility == Accessibility.PRIVATE
                    or m.is_implicitly_declared
                    or key in hidden
                ):
                    continue
                hidden.add(key)
                if self.context.includes(m.accessibility):
                    self._add_member(members, m, t, inherited=True, declaring=ancestor)

        if self.context.include_system_object_inheritance and not t.is_static:
            for m in OBJECT_MEMBERS:
                if m.key not in hidden and self.context.includes(m.accessibility):
                    members.append(self.build_member(m, t, inherited=True))
        else:
            members = [m for m in members if m.declaring_type_name != OBJECT_TYPE_NAME]
        return members

    def inheritance_chain(
        self, t: TypeSymbol
    ) -> Iterator[tuple[TypeSymbol, dict[str, str]]]:
        """Yield base classes nearest first, stopping at ``System.Object``.

        Each base comes with the type arguments ``t`` supplies for its type
        parameters, so ``Base<T>.Process(T)`` can be matched against
        ``Derived : Base<int>``'s ``Process(int)``.
        """
        seen = {t.full_name}
        current = t
        arguments: dict[str, str] = {}
        while current.base_type:
            key = generic_definition_name(current.base_type)
            if key == OBJECT_TYPE_NAME:
                return
            if key in seen:
                raise SymbolEvaluationError(t.full_name, f"inheritance cycle through {key}")
            seen.add(key)
            base = self.assembly.find_type(key)
            if base is None:
                logger.debug("Base type %s of %s is not available", key, t.full_name)
                return
            supplied = [
                substitute_type_parameters(arg, arguments)
                for arg in generic_arguments(current.base_type)
            ]
            arguments = dict(zip(base.type_parameters, supplied))
            yield base, arguments
            current = base

    def build_member(
        self,
        m: MemberSymbol,
        owner: TypeSymbol,
        inherited: bool,
        declaring: TypeSymbol | None = None,
    ) -> DocMember:
        if not m.name:
            raise SymbolEvaluationError(m.comment_id or owner.full_name, "member has no name")
        declaring_name = declaring.full_name if declaring else m.containing_type
        member = DocMember(
            name=m.name,
            member_kind=m.kind,
            accessibility=m.accessibility,
            signature=m.signature or None,
            declaring_type_name=declaring_name or owner.full_name,
            is_inherited=inherited,
            is_static=m.is_static,
            is_abstract=m.is_abstract,
            is_virtual=m.is_virtual,
            is_override=m.is_override,
            is_extension_method=m.is_extension_method,
            return_type_name=m.return_type,
            display_name=self._member_display_name(m),
            included_members=list(self.context.included_members),
        )
        if m.is_override:
            member.overridden_member = self.overridden_member_name(
                m, declaring or owner
            )
        if m.is_extension_method and m.parameters:
            member.extended_type_name = m.parameters[0].type_name

        comment = self._merge_comment(member, m.comment_id)
        declare_type_parameters(member, m.type_parameters)
        if comment is None and m.containing_type == OBJECT_TYPE_NAME:
            member.summary = OBJECT_SUMMARIES.get(m.name)
        for p in m.parameters:
            param = DocParameter(
                name=p.name,
                type_name=p.type_name,
                is_optional=p.is_optional,
                has_default_value=p.has_default_value,
                default_value=p.default_value,
                is_params=p.is_params,
                display_name=p.name,
                included_members=list(self.context.included_members),
            )
            if comment is not None:
                param.usage = comment.parameter(p.name)
            member.parameters.append(param)
        return member

    def overridden_member_name(self, m: MemberSymbol, declaring: TypeSymbol) -> str:
        """Qualified name of the nearest ancestor member that ``m`` overrides."""
        for ancestor, arguments in self.inheritance_chain(declaring):
            if any(a.key_for(arguments) == m.key and a.kind == m.kind for a in ancestor.members):
                return f"{ancestor.full_name}.{m.name}"
        if m.overridden:
            return m.overridden
        base = generic_definition_name(declaring.base_type or OBJECT_TYPE_NAME)
        return f"{base}.{m.name}"

    def _add_member(
        self,
        members: list[DocMember],
        m: MemberSymbol,
        owner: TypeSymbol,
        inherited: bool,
        declaring: TypeSymbol | None = None,
    ) -> None:
        try:
            members.append(self.build_member(m, owner, inherited, declaring))
        except SymbolEvaluationError as exc:
            self._skip(exc)

    def _merge_comment(self, entity: DocEntity, comment_id: str | None):
        comment = self.extractor.extract(comment_id)
        if comment is None:
            return None
        entity.summary = comment.summary
        entity.remarks = comment.remarks
        entity.returns = comment.returns
        entity.value = comment.value
        entity.examples = comment.example
        entity.exceptions = comment.exceptions
        entity.type_parameters = comment.type_parameters
        entity.see_also = comment.see_also
        if comment.has_inheritdoc:
            logger.debug("%s uses <inheritdoc>, which is not resolved", comment_id)
        return comment

    def _member_display_name(self, m: MemberSymbol) -> str:
        if m.kind in {MemberKind.METHOD, MemberKind.CONSTRUCTOR}:
            return f"{m.name}({', '.join(p.type_name for p in m.parameters)})"
        return m.name

    def _check_internals_visible(self) -> None:
        if Accessibility.INTERNAL not in self.context.included_members:
            return
        if self.assembly.includes_non_public:
            return
        message = (
            f"Internal members requested for {self.assembly.name} but the symbol source "
            "exposes no non-public members"
        )
        logger.warning(message)
        self.diagnostics.append(
            Diagnostic(INTERNALS_NOT_VISIBLE, message, self.assembly.name)
        )

    def _skip(self, exc: SymbolEvaluationError) -> None:
        logger.warning("Skipping %s: %s", exc.symbol, exc.reason)
        self.diagnostics.append(Diagnostic(SYMBOL_SKIPPED, exc.reason, exc.symbol))
