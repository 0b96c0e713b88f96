"""Move extension methods onto the types they extend.

Extension methods are declared on static helper classes but read as members of the
type named by their ``this`` parameter, so the documentation lists them there.
Targets outside the assembly get a placeholder ``DocType`` marked as an external
reference; every method extending the same generic definition shares one
placeholder. Helper classes left with no members are removed afterwards.
"""

import logging
from collections.abc import Iterable

from dotnetdocs.accessibility import Accessibility
from dotnetdocs.cross_reference_resolver import (
    framework_docs_url,
    is_framework_type,
)
from dotnetdocs.diagnostic import EXTENSION_NOT_RELOCATED, Diagnostic
from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.doc_member import DocMember
from dotnetdocs.doc_namespace import DocNamespace
from dotnetdocs.doc_type import DocType
from dotnetdocs.file_naming import namespace_display_name
from dotnetdocs.project_context import ProjectContext
from dotnetdocs.type_kind import TypeKind
from dotnetdocs.type_names import (
    generic_definition_name,
    is_array_type,
    namespace_of,
    simple_name,
    strip_generic_arguments,
)

logger = logging.getLogger(__name__)

EXTERNAL_INCLUDED_MEMBERS = [Accessibility.PUBLIC, Accessibility.PROTECTED]


def is_generic_parameter(type_name: str, type_parameters: Iterable[str] = ()) -> bool:
    """Check if ``type_name`` names a type parameter rather than a type.

    ``{T}`` and ``` ``0 ``` always do. A bare ``T`` does only when it is one of the
    method's own type parameters, so types in the global namespace still count.
    """
    name = type_name.strip()
    return name.startswith(("{", "`")) or name in set(type_parameters)


def extension_target(member: DocMember) -> str | None:
    """Type name of the ``this`` parameter, or ``None`` when it cannot be a target."""
    if not member.parameters:
        return None
    type_name = member.parameters[0].type_name or ""
    own = [tp.name for tp in member.type_parameters]
    if not type_name or is_array_type(type_name) or is_generic_parameter(type_name, own):
        return None
    return type_name


def type_parameter_names(arity: int) -> list[str]:
    if arity == 1:
        return ["T"]
    return [f"T{i + 1}" for i in range(arity)]


def create_external_type(
    assembly: DocAssembly, type_name: str, context: ProjectContext
) -> DocType:
    """Create a placeholder for a type outside the assembly and add it to the model.

    The namespace is reused when the model already has it.
    """
    full_name = generic_definition_name(type_name)
    _, arity = strip_generic_arguments(full_name)
    name = simple_name(full_name)
    display = name
    if arity:
        display += "<" + ", ".join(type_parameter_names(arity)) + ">"
    namespace = namespace_of(full_name)

    placeholder = DocType(
        name=name,
        full_name=full_name,
        namespace_name=namespace,
        assembly_name=namespace or name,
        type_kind=TypeKind.CLASS,
        signature=f"public class {display}",
        display_name=display,
        is_external_reference=True,
        summary=f"Extension methods for {display} defined in {assembly.assembly_name}.",
        included_members=list(EXTERNAL_INCLUDED_MEMBERS),
    )
    if is_framework_type(full_name, context.framework_namespaces):
        placeholder.remarks = (
            f"{display} is part of the .NET platform. See the "
            f"[Microsoft documentation]({framework_docs_url(full_name)}) for its full API."
        )
    else:
        placeholder.remarks = f"{display} is defined outside {assembly.assembly_name}."

    ns = assembly.find_namespace(namespace)
    if ns is None:
        ns = DocNamespace(
            name=namespace,
            display_name=namespace_display_name(namespace),
            included_members=list(assembly.included_members),
        )
        assembly.namespaces.append(ns)
    ns.types.append(placeholder)
    logger.debug("Created external reference %s", full_name)
    return placeholder


def relocate_extension_methods(
    assembly: DocAssembly, context: ProjectContext | None = None
) -> list[Diagnostic]:
    """Move every extension method in ``assembly`` onto its target type.

    Returns diagnostics for methods that had to stay on their declaring class.
    """
    context = context or ProjectContext()
    pending = [
        (t, m)
        for t in assembly.iter_types()
        for m in t.members
        if m.is_extension_method and not m.is_inherited
    ]
    if not pending:
        logger.debug("No extension methods in %s", assembly.assembly_name)
        return []

    diagnostics: list[Diagnostic] = []
    sources: list[DocType] = []
    moved = 0
    for source, member in pending:
        type_name = extension_target(member)
        if type_name is None:
            logger.debug("%s.%s extends a type parameter or array", source.name, member.name)
            continue
        key = generic_definition_name(type_name)
        target = assembly.find_type(key)
        if target is source:
            continue
        if target is None:
            if not context.create_external_type_references:
                diagnostics.append(
                    Diagnostic(
                        EXTENSION_NOT_RELOCATED,
                        f"Target type {key} is not part of {assembly.assembly_name}",
                        f"{source.full_name}.{member.name}",
                        is_warning=False,
                    )
                )
                continue
            target = create_external_type(assembly, key, context)

        source.members.remove(member)
        target.members.append(member)
        member.extended_type_name = target.full_name
        if source not in sources:
            sources.append(source)
        moved += 1

    removed = prune_empty_classes(assembly, sources)
    logger.info(
        "Relocated %d extension methods, removed %d empty classes", moved, removed
    )
    return diagnostics


def prune_empty_classes(assembly: DocAssembly, sources: list[DocType]) -> int:
    """Remove static classes that lost every member to relocation."""
    removed = 0
    for ns in assembly.namespaces:
        keep = []
        for t in ns.types:
            if t in sources and t.is_static and not t.members:
                logger.debug("Removed empty extension class %s", t.full_name)
                removed += 1
                continue
            keep.append(t)
        ns.types = keep
    return removed
