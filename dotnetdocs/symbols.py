"""The symbol graph produced by a symbol source.

This is the analyzable view over a compiled assembly: namespaces, types, members and
parameters with their declared accessibility and documentation IDs. Relationships
between types (base type, interfaces) are full-name strings resolved on demand
through ``AssemblySymbol.find_type``.
"""

from dataclasses import dataclass, field

from dotnetdocs.accessibility import Accessibility
from dotnetdocs.diagnostic import Diagnostic
from dotnetdocs.member_kind import MemberKind
from dotnetdocs.type_kind import TypeKind
from dotnetdocs.type_names import (
    clr_type_name,
    generic_definition_name,
    substitute_type_parameters,
)

OBJECT_TYPE_NAME = "System.Object"
DEFAULT_ENUM_UNDERLYING_TYPE = "System.Int32"


@dataclass
class ParameterSymbol:
    """A method or indexer parameter."""

    name: str
    type_name: str
    is_optional: bool = False
    has_default_value: bool = False
    default_value: str | None = None
    is_params: bool = False
    is_this: bool = False


@dataclass
class MemberSymbol:
    """A member declared by a type."""

    name: str
    kind: MemberKind
    accessibility: Accessibility
    containing_type: str
    comment_id: str = ""
    return_type: str | None = None
    parameters: list[ParameterSymbol] = field(default_factory=list)
    type_parameters: list[str] = field(default_factory=list)
    is_static: bool = False
    is_virtual: bool = False
    is_abstract: bool = False
    is_override: bool = False
    is_sealed: bool = False
    overridden: str | None = None
    is_extension_method: bool = False
    is_implicitly_declared: bool = False
    constant_value: str | None = None
    signature: str = ""

    @property
    def key(self) -> str:
        """Identity used for hiding and override matching across a chain."""
        return self.key_for({})

    def key_for(self, type_arguments: dict[str, str]) -> str:
        """``key`` as seen from a derived type that closes the declaring generic type."""
        types = ",".join(
            clr_type_name(substitute_type_parameters(p.type_name, type_arguments))
            for p in self.parameters
        )
        if self.kind in {MemberKind.METHOD, MemberKind.CONSTRUCTOR}:
            return f"{self.name}({types})"
        if self.parameters:
            return f"{self.name}[{types}]"
        return self.name


@dataclass
class TypeSymbol:
    """A type declared in an assembly."""

    name: str
    full_name: str
    namespace: str
    kind: TypeKind
    accessibility: Accessibility = Accessibility.PUBLIC
    comment_id: str = ""
    assembly_name: str = ""
    base_type: str | None = None
    interfaces: list[str] = field(default_factory=list)
    members: list[MemberSymbol] = field(default_factory=list)
    type_parameters: list[str] = field(default_factory=list)
    is_static: bool = False
    is_abstract: bool = False
    is_sealed: bool = False
    is_flags: bool = False
    enum_underlying_type: str | None = None
    signature: str = ""

    @property
    def is_object(self) -> bool:
        return self.full_name == OBJECT_TYPE_NAME


@dataclass
class NamespaceSymbol:
    """A namespace and the types it declares. ``""`` is the global namespace."""

    name: str
    types: list[TypeSymbol] = field(default_factory=list)

    @property
    def is_global(self) -> bool:
        return not self.name


@dataclass
class AssemblySymbol:
    """Root of the symbol graph."""

    name: str
    version: str = ""
    namespaces: list[NamespaceSymbol] = field(default_factory=list)
    referenced_types: dict[str, TypeSymbol] = field(default_factory=dict)
    includes_non_public: bool = False
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def iter_types(self):
        """Yield every type declared in the assembly."""
        for ns in self.namespaces:
            yield from ns.types

    def find_type(self, full_name: str | None) -> TypeSymbol | None:
        """Find a declared or referenced type by full name."""
        if not full_name:
            return None
        key = generic_definition_name(full_name)
        for t in self.iter_types():
            if t.full_name == key:
                return t
        return self.referenced_types.get(key)

    def find_namespace(self, name: str) -> NamespaceSymbol | None:
        return next((ns for ns in self.namespaces if ns.name == name), None)

    def namespace_for(self, name: str) -> NamespaceSymbol:
        """Find or create the namespace with the given name."""
        ns = self.find_namespace(name)
        if ns is None:
            ns = NamespaceSymbol(name=name)
            self.namespaces.append(ns)
        return ns
