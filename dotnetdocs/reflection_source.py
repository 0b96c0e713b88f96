"""Symbol source over a compiled assembly, read with pythonnet reflection.

Reflection with ``BindingFlags.NonPublic`` sees internal and private members of a
compiled binary, which is what makes internal documentation possible without the
source. pythonnet is imported when the source is opened so the rest of the
package works on machines without a .NET runtime.
"""

import logging
from pathlib import Path
from typing import Any

from dotnetdocs.accessibility import Accessibility
from dotnetdocs.diagnostic import SYMBOL_SKIPPED, Diagnostic
from dotnetdocs.errors import SymbolSourceError
from dotnetdocs.member_kind import MemberKind
from dotnetdocs.symbols import (
    OBJECT_TYPE_NAME,
    AssemblySymbol,
    MemberSymbol,
    ParameterSymbol,
    TypeSymbol,
)
from dotnetdocs.type_kind import TypeKind

logger = logging.getLogger(__name__)

EXTENSION_ATTRIBUTE = "System.Runtime.CompilerServices.ExtensionAttribute"
PARAM_ARRAY_ATTRIBUTE = "System.ParamArrayAttribute"
COMPILER_GENERATED_ATTRIBUTE = "System.Runtime.CompilerServices.CompilerGeneratedAttribute"
FLAGS_ATTRIBUTE = "System.FlagsAttribute"
DELEGATE_BASES = {"System.MulticastDelegate", "System.Delegate"}
ACCESSOR_PREFIXES = ("get_", "set_", "add_", "remove_")
ACCESS_RANK = {
    Accessibility.PUBLIC: 0,
    Accessibility.PROTECTED_OR_INTERNAL: 1,
    Accessibility.INTERNAL: 2,
    Accessibility.PROTECTED: 3,
    Accessibility.PROTECTED_AND_INTERNAL: 4,
    Accessibility.PRIVATE: 5,
}


def has_attribute(info: Any, attribute_name: str) -> bool:
    """Check custom attribute data without instantiating the attributes."""
    return any(
        a.AttributeType.FullName == attribute_name for a in info.GetCustomAttributesData()
    )


def clr_full_name(t: Any) -> str:
    """Full name of a type definition in ``Ns.Outer.Inner`1`` form."""
    if t.IsGenericParameter:
        return t.Name
    if t.IsGenericType and not t.IsGenericTypeDefinition:
        t = t.GetGenericTypeDefinition()
    name = t.FullName or (f"{t.Namespace}.{t.Name}" if t.Namespace else t.Name)
    return name.split("[[", 1)[0].replace("+", ".")


def doc_id_type(t: Any) -> str:
    """Type as spelled in documentation IDs: ``List{System.Int32}``, ````0``, ``Int32@``."""
    if t.IsByRef:
        return doc_id_type(t.GetElementType()) + "@"
    if t.IsArray:
        rank = t.GetArrayRank()
        return doc_id_type(t.GetElementType()) + ("[]" if rank == 1 else f"[{',' * (rank - 1)}]")
    if t.IsPointer:
        return doc_id_type(t.GetElementType()) + "*"
    if t.IsGenericParameter:
        ticks = "``" if t.DeclaringMethod is not None else "`"
        return f"{ticks}{t.GenericParameterPosition}"
    if t.IsGenericType and not t.IsGenericTypeDefinition:
        base = clr_full_name(t).rsplit("`", 1)[0]
        args = ",".join(doc_id_type(a) for a in t.GetGenericArguments())
        return f"{base}{{{args}}}"
    return clr_full_name(t)


def type_display_name(t: Any) -> str:
    """Type reference as stored on parameters and return types."""
    if t.IsByRef:
        return type_display_name(t.GetElementType())
    if t.IsArray:
        return type_display_name(t.GetElementType()) + "[]"
    if t.IsGenericParameter:
        return t.Name
    if t.IsGenericType and not t.IsGenericTypeDefinition:
        base = clr_full_name(t).rsplit("`", 1)[0]
        args = ",".join(type_display_name(a) for a in t.GetGenericArguments())
        return f"{base}{{{args}}}"
    return clr_full_name(t)


def member_accessibility(info: Any) -> Accessibility:
    """Accessibility of a method, constructor or field."""
    if info.IsPublic:
        return Accessibility.PUBLIC
    if info.IsFamilyOrAssembly:
        return Accessibility.PROTECTED_OR_INTERNAL
    if info.IsFamilyAndAssembly:
        return Accessibility.PROTECTED_AND_INTERNAL
    if info.IsFamily:
        return Accessibility.PROTECTED
    if info.IsAssembly:
        return Accessibility.INTERNAL
    return Accessibility.PRIVATE


def type_accessibility(t: Any) -> Accessibility:
    if t.IsPublic or t.IsNestedPublic:
        return Accessibility.PUBLIC
    if t.IsNestedFamORAssem:
        return Accessibility.PROTECTED_OR_INTERNAL
    if t.IsNestedFamANDAssem:
        return Accessibility.PROTECTED_AND_INTERNAL
    if t.IsNestedFamily:
        return Accessibility.PROTECTED
    if t.IsNestedPrivate:
        return Accessibility.PRIVATE
    return Accessibility.INTERNAL


def type_kind_of(t: Any) -> TypeKind:
    if t.IsInterface:
        return TypeKind.INTERFACE
    if t.IsEnum:
        return TypeKind.ENUM
    if t.IsValueType:
        return TypeKind.STRUCT
    if t.BaseType is not None and t.BaseType.FullName in DELEGATE_BASES:
        return TypeKind.DELEGATE
    return TypeKind.CLASS


def format_default(value: Any) -> str:
    """Literal text of a parameter default value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def comment_id(prefix: str, declaring: Any, name: str, parameters: list[Any], arity: int = 0) -> str:
    """Build the documentation ID the compiler writes for a member."""
    member = name.replace(".", "#")
    if arity:
        member += f"``{arity}"
    if parameters:
        member += "(" + ",".join(doc_id_type(p.ParameterType) for p in parameters) + ")"
    return f"{prefix}{clr_full_name(declaring)}.{member}"


def is_override(method: Any) -> bool:
    if not method.IsVirtual:
        return False
    base = method.GetBaseDefinition()
    return base is not None and clr_full_name(base.DeclaringType) != clr_full_name(
        method.DeclaringType
    )


def parameter_symbol(p: Any) -> ParameterSymbol:
    has_default = bool(p.HasDefaultValue)
    return ParameterSymbol(
        name=p.Name or "",
        type_name=type_display_name(p.ParameterType),
        is_optional=bool(p.IsOptional),
        has_default_value=has_default,
        default_value=format_default(p.DefaultValue) if has_default else None,
        is_params=has_attribute(p, PARAM_ARRAY_ATTRIBUTE),
    )


def method_symbol(m: Any, container: str, is_constructor: bool = False) -> MemberSymbol:
    parameters = list(m.GetParameters())
    arity = len(m.GetGenericArguments()) if not is_constructor and m.IsGenericMethod else 0
    extension = not is_constructor and m.IsStatic and has_attribute(m, EXTENSION_ATTRIBUTE)
    symbols = [parameter_symbol(p) for p in parameters]
    if extension and symbols:
        symbols[0].is_this = True
    override = not is_constructor and is_override(m)
    overridden = None
    if override:
        overridden = f"{clr_full_name(m.GetBaseDefinition().DeclaringType)}.{m.Name}"
    return MemberSymbol(
        name=m.Name,
        kind=MemberKind.CONSTRUCTOR if is_constructor else MemberKind.METHOD,
        accessibility=member_accessibility(m),
        containing_type=container,
        comment_id=comment_id("M:", m.DeclaringType, m.Name, parameters, arity),
        return_type=None if is_constructor else type_display_name(m.ReturnType),
        parameters=symbols,
        type_parameters=[a.Name for a in m.GetGenericArguments()] if arity else [],
        is_static=bool(m.IsStatic),
        is_virtual=bool(m.IsVirtual and not m.IsFinal and not m.IsAbstract and not override),
        is_abstract=bool(m.IsAbstract),
        is_override=override,
        is_sealed=bool(override and m.IsFinal),
        overridden=overridden,
        is_extension_method=extension,
        is_implicitly_declared=has_attribute(m, COMPILER_GENERATED_ATTRIBUTE),
    )


def accessor_symbol(info: Any, kind: MemberKind, accessors: list[Any], container: str) -> MemberSymbol:
    """Symbol for a property or event, described by its most accessible accessor."""
    accessors = [a for a in accessors if a is not None]
    primary = min(accessors, key=lambda a: ACCESS_RANK[member_accessibility(a)])
    parameters = list(info.GetIndexParameters()) if kind == MemberKind.PROPERTY else []
    override = is_override(primary)
    type_ref = info.PropertyType if kind == MemberKind.PROPERTY else info.EventHandlerType
    prefix = "P:" if kind == MemberKind.PROPERTY else "E:"
    return MemberSymbol(
        name=info.Name,
        kind=kind,
        accessibility=member_accessibility(primary),
        containing_type=container,
        comment_id=comment_id(prefix, info.DeclaringType, info.Name, parameters),
        return_type=type_display_name(type_ref),
        parameters=[parameter_symbol(p) for p in parameters],
        is_static=bool(primary.IsStatic),
        is_virtual=bool(primary.IsVirtual and not primary.IsFinal and not primary.IsAbstract and not override),
        is_abstract=bool(primary.IsAbstract),
        is_override=override,
        overridden=f"{clr_full_name(primary.GetBaseDefinition().DeclaringType)}.{info.Name}" if override else None,
    )


def field_symbol(f: Any, container: str) -> MemberSymbol:
    return MemberSymbol(
        name=f.Name,
        kind=MemberKind.FIELD,
        accessibility=member_accessibility(f),
        containing_type=container,
        comment_id=f"F:{clr_full_name(f.DeclaringType)}.{f.Name}",
        return_type=type_display_name(f.FieldType),
        is_static=bool(f.IsStatic),
        constant_value=str(f.GetRawConstantValue()) if f.IsLiteral else None,
        is_implicitly_declared=has_attribute(f, COMPILER_GENERATED_ATTRIBUTE),
    )


def is_compiler_generated_name(name: str) -> bool:
    return "<" in name or "$" in name


class ReflectionSymbolSource:
    """Build an ``AssemblySymbol`` by reflecting over a compiled binary."""

    def __init__(self, path: Path | str, references: list[Path] | None = None, runtime: str | None = None) -> None:
        self.path = Path(path)
        self.references = [Path(r) for r in references or []]
        self.runtime = runtime
        self.diagnostics: list[Diagnostic] = []
        self._assembly: Any = None
        self._flags: Any = None

    def open(self) -> None:
        """Start the .NET runtime (if needed) and load the assembly and its references."""
        try:
            if self.runtime:
                import pythonnet

                pythonnet.load(self.runtime)
            import clr  # noqa: F401
            from System.Reflection import Assembly, BindingFlags
        except (ImportError, RuntimeError) as exc:
            msg = "Reading compiled assemblies requires pythonnet and a .NET runtime"
            raise SymbolSourceError(msg) from exc

        for ref in self.references:
            logger.debug("Loading reference %s", ref)
            Assembly.LoadFrom(str(ref.resolve()))
        self._assembly = Assembly.LoadFrom(str(self.path.resolve()))
        self._flags = (
            BindingFlags.Public
            | BindingFlags.NonPublic
            | BindingFlags.Instance
            | BindingFlags.Static
            | BindingFlags.DeclaredOnly
        )

    def close(self) -> None:
        self._assembly = None
        self._flags = None

    def load(self) -> AssemblySymbol:
        """Reflect over every type of the opened assembly."""
        if self._assembly is None:
            self.open()
        name = self._assembly.GetName()
        assembly = AssemblySymbol(
            name=str(name.Name),
            version=str(name.Version),
            includes_non_public=True,
        )
        for t in self._get_types():
            if is_compiler_generated_name(t.Name) or has_attribute(t, COMPILER_GENERATED_ATTRIBUTE):
                continue
            full_name = clr_full_name(t)
            try:
                symbol = self._type_symbol(t, assembly.name)
            except Exception as exc:  # .NET exceptions surface as System.Exception subclasses
                logger.warning("Skipped %s: %s", full_name, exc)
                self.diagnostics.append(Diagnostic(SYMBOL_SKIPPED, f"Skipped: {exc}", full_name))
                continue
            assembly.namespace_for(symbol.namespace).types.append(symbol)
            self._add_referenced_bases(t, assembly)
        assembly.diagnostics.extend(self.diagnostics)
        return assembly

    def _get_types(self) -> list[Any]:
        from System.Reflection import ReflectionTypeLoadException

        try:
            return list(self._assembly.GetTypes())
        except ReflectionTypeLoadException as exc:
            logger.warning("Some types of %s could not be loaded", self.path.name)
            return [t for t in exc.Types if t is not None]

    def _type_symbol(self, t: Any, assembly_name: str) -> TypeSymbol:
        full_name = clr_full_name(t)
        kind = type_kind_of(t)
        base = t.BaseType
        symbol = TypeSymbol(
            name=t.Name.split("`", 1)[0],
            full_name=full_name,
            namespace=t.Namespace or "",
            kind=kind,
            accessibility=type_accessibility(t),
            comment_id=f"T:{full_name}",
            assembly_name=assembly_name,
            base_type=type_display_name(base) if base is not None and kind != TypeKind.INTERFACE else None,
            interfaces=[type_display_name(i) for i in t.GetInterfaces()],
            type_parameters=[a.Name for a in t.GetGenericArguments()] if t.IsGenericTypeDefinition else [],
            is_static=bool(t.IsAbstract and t.IsSealed),
            is_abstract=bool(t.IsAbstract and not t.IsSealed and not t.IsInterface),
            is_sealed=bool(t.IsSealed and not t.IsAbstract),
        )
        if kind == TypeKind.ENUM:
            symbol.is_flags = has_attribute(t, FLAGS_ATTRIBUTE)
            symbol.enum_underlying_type = clr_full_name(t.GetEnumUnderlyingType())
        symbol.members = self._members(t, full_name)
        return symbol

    def _members(self, t: Any, container: str) -> list[MemberSymbol]:
        members: list[MemberSymbol] = []
        for c in t.GetConstructors(self._flags):
            if not c.IsStatic:
                members.append(method_symbol(c, container, is_constructor=True))
        for m in t.GetMethods(self._flags):
            if m.IsSpecialName and m.Name.startswith(ACCESSOR_PREFIXES):
                continue
            if is_compiler_generated_name(m.Name):
                continue
            members.append(method_symbol(m, container))
        for p in t.GetProperties(self._flags):
            members.append(accessor_symbol(p, MemberKind.PROPERTY, [p.GetMethod, p.SetMethod], container))
        for e in t.GetEvents(self._flags):
            members.append(accessor_symbol(e, MemberKind.EVENT, [e.AddMethod, e.RemoveMethod], container))
        for f in t.GetFields(self._flags):
            if f.IsSpecialName or is_compiler_generated_name(f.Name):
                continue
            members.append(field_symbol(f, container))
        return members

    def _add_referenced_bases(self, t: Any, assembly: AssemblySymbol) -> None:
        """Describe base types declared in other assemblies, up to ``System.Object``."""
        base = t.BaseType
        while base is not None:
            key = clr_full_name(base)
            if key == OBJECT_TYPE_NAME or key in assembly.referenced_types:
                return
            if base.Assembly.FullName == self._assembly.FullName:
                base = base.BaseType
                continue
            definition = base.GetGenericTypeDefinition() if base.IsGenericType else base
            assembly.referenced_types[key] = self._type_symbol(definition, str(base.Assembly.GetName().Name))
            base = base.BaseType
