"""Tests for building the documentation model from symbols and comments."""

from collections.abc import Callable

from dotnetdocs.accessibility import Accessibility
from dotnetdocs.diagnostic import INTERNALS_NOT_VISIBLE, SYMBOL_SKIPPED
from dotnetdocs.doc_assembly import DocAssembly, walk
from dotnetdocs.doc_comments import DocCommentExtractor, DocCommentFile
from dotnetdocs.doc_enum import DocEnum
from dotnetdocs.doc_type import DocType
from dotnetdocs.member_kind import MemberKind
from dotnetdocs.model_builder import OBJECT_SUMMARIES, ModelBuilder
from dotnetdocs.project_context import ProjectContext
from dotnetdocs.symbols import (
    AssemblySymbol,
    MemberSymbol,
    NamespaceSymbol,
    ParameterSymbol,
    TypeSymbol,
)
from dotnetdocs.type_kind import TypeKind

BASIC = "CloudNimble.DotNetDocs.Tests.Shared.BasicScenarios"
ACCESS = "CloudNimble.DotNetDocs.Tests.Shared.AccessModifiers"


def declared(t: DocType) -> set[str]:
    return {m.name for m in t.members if not m.is_inherited}


def class_symbol(name: str, base: str | None = None, **kwargs) -> TypeSymbol:
    return TypeSymbol(
        name=name.rsplit(".", 1)[-1],
        full_name=name,
        namespace=name.rpartition(".")[0],
        kind=TypeKind.CLASS,
        base_type=base,
        **kwargs,
    )


def test_namespaces_and_types(build_shared: Callable[..., DocAssembly]) -> None:
    """Types land in their namespaces with summaries from the XML file."""
    model = build_shared()
    assert model.assembly_name == "Tests.Shared"
    ns = model.find_namespace(BASIC)
    assert ns.summary == "Basic documentation scenarios."
    simple = ns.find_type(f"{BASIC}.SimpleClass")
    assert simple.summary == "A sample class for testing documentation generation."
    assert simple.remarks.startswith("These are remarks about the SimpleClass.")
    assert "var simple = new SimpleClass();" in simple.examples
    assert simple.signature == "public class SimpleClass"
    assert simple.base_type is None
    assert simple.assembly_name == "Tests.Shared"


def test_inherited_members(build_shared: Callable[..., DocAssembly]) -> None:
    """Derived types list base members once, attributed to the declaring base."""
    derived = build_shared().find_type(f"{BASIC}.DerivedClass")
    assert derived.base_type == f"{BASIC}.BaseClass"
    assert declared(derived) == {"DerivedProperty", "BaseProperty", "VirtualMethod", "DerivedMethod"}

    (base_method,) = derived.find_members("BaseMethod")
    assert base_method.is_inherited
    assert base_method.declaring_type_name == f"{BASIC}.BaseClass"
    assert base_method.summary == "A method in the base class."

    (virtual,) = derived.find_members("VirtualMethod")
    assert not virtual.is_inherited
    assert virtual.is_override
    assert virtual.overridden_member == f"{BASIC}.BaseClass.VirtualMethod"
    assert virtual.summary == "Overrides the virtual method from the base class."

    (prop,) = derived.find_members("BaseProperty")
    assert prop.overridden_member == f"{BASIC}.BaseClass.BaseProperty"


def test_object_members(build_shared: Callable[..., DocAssembly]) -> None:
    """Classes get System.Object members unless disabled; interfaces and static classes never do."""
    model = build_shared()
    simple = model.find_type(f"{BASIC}.SimpleClass")
    (to_string,) = simple.find_members("ToString")
    assert to_string.is_inherited
    assert to_string.declaring_type_name == "System.Object"
    assert to_string.summary == OBJECT_SUMMARIES["ToString"]
    assert to_string.display_name == "ToString()"

    assert not model.find_type(f"{BASIC}.ITestInterface").find_members("ToString")
    assert not model.find_type(f"{BASIC}.TestsShared_SimpleClassExtensions").find_members("ToString")

    plain = build_shared(ProjectContext(include_system_object_inheritance=False))
    simple = plain.find_type(f"{BASIC}.SimpleClass")
    assert [m.name for m in simple.members] == ["DoWork"]


def test_object_members_round_trip(build_shared: Callable[..., DocAssembly]) -> None:
    """Dropping System.Object members from a full build equals building without them."""
    with_object = build_shared()
    without = build_shared(ProjectContext(include_system_object_inheritance=False))
    for t in with_object.iter_types():
        kept = [m.name for m in t.members if m.declaring_type_name != "System.Object"]
        assert kept == [m.name for m in without.find_type(t.full_name).members]


def test_interface_members_are_not_inherited(build_shared: Callable[..., DocAssembly]) -> None:
    interface = build_shared().find_type(f"{BASIC}.ITestInterface")
    assert {m.name for m in interface.members} == {"TestValue", "TestMethod"}
    assert all(m.is_abstract for m in interface.members)


def test_accessibility_filter(build_shared: Callable[..., DocAssembly]) -> None:
    """Only members whose declared accessibility is in the include-set are documented."""
    public = build_shared().find_type(f"{ACCESS}.MixedAccessClass")
    assert declared(public) == {"PublicField", "PublicProperty", "PublicMethod"}
    assert build_shared().find_type(f"{ACCESS}.InternalClass") is None

    context = ProjectContext(included_members=["Public", "Protected"])
    protected = build_shared(context).find_type(f"{ACCESS}.MixedAccessClass")
    assert declared(protected) == {
        "PublicField",
        "ProtectedField",
        "PublicProperty",
        "PublicMethod",
        "ProtectedMethod",
    }
    assert protected.included_members == [Accessibility.PUBLIC, Accessibility.PROTECTED]

    context = ProjectContext(included_members=["Public", "Internal", "Private"])
    everything = build_shared(context)
    assert everything.find_type(f"{ACCESS}.InternalClass") is not None
    assert "PrivateMethod" in declared(everything.find_type(f"{ACCESS}.MixedAccessClass"))


def test_parameters(build_shared: Callable[..., DocAssembly]) -> None:
    """Parameters carry defaults, params arrays and their doc-comment text."""
    t = build_shared().find_type("CloudNimble.DotNetDocs.Tests.Shared.Parameters.ParameterVariations")
    (method,) = t.find_members("MethodWithOptionalParam")
    assert method.display_name == "MethodWithOptionalParam(System.String, System.Int32)"
    assert method.returns == "A formatted string combining both parameters."
    required, optional = method.parameters
    assert required.usage == "The required string parameter."
    assert not required.has_default_value
    assert optional.is_optional
    assert optional.has_default_value
    assert optional.default_value == "42"
    assert optional.usage == "The optional integer parameter with a default value."

    (params,) = t.find_members("MethodWithParams")
    assert params.parameters[0].is_params
    assert params.return_type_name == "System.Int32"


def test_extension_methods_are_flagged(build_shared: Callable[..., DocAssembly]) -> None:
    t = build_shared().find_type("CloudNimble.DotNetDocs.Tests.Shared.Extensions.StringExtensions")
    (reverse,) = t.find_members("Reverse")
    assert reverse.is_extension_method
    assert reverse.is_static
    assert reverse.extended_type_name == "System.String"


def test_enum_values(build_shared: Callable[..., DocAssembly]) -> None:
    t = build_shared().find_type("CloudNimble.DotNetDocs.Tests.Shared.Enums.SimpleEnum")
    assert isinstance(t, DocEnum)
    assert t.type_kind == TypeKind.ENUM
    assert [v.name for v in t.values] == ["None", "First", "Second", "Third", "Fourth"]
    third = t.find_value("Third")
    assert third.numeric_value == "10"
    assert third.summary == "Third option with explicit value."
    assert not t.is_flags
    assert t.underlying_type.display_name == "int"
    assert t.members == []
    assert third in list(walk(t))


def test_flags_enum_underlying_type() -> None:
    access = TypeSymbol(
        name="Access",
        full_name="Demo.Access",
        namespace="Demo",
        kind=TypeKind.ENUM,
        is_flags=True,
        enum_underlying_type="System.Byte",
        members=[
            MemberSymbol("Read", MemberKind.FIELD, Accessibility.PUBLIC, "Demo.Access", constant_value="1"),
            MemberSymbol("Write", MemberKind.FIELD, Accessibility.PUBLIC, "Demo.Access", constant_value="2"),
        ],
    )
    assembly = AssemblySymbol(name="Demo", namespaces=[NamespaceSymbol("Demo", [access])])
    t = ModelBuilder(assembly).build().find_type("Demo.Access")
    assert t.is_flags
    assert t.underlying_type.raw_reference == "T:System.Byte"
    assert t.underlying_type.display_name == "byte"
    assert [(v.name, v.numeric_value) for v in t.values] == [("Read", "1"), ("Write", "2")]
    assert t.members == []


def test_generic_display_name() -> None:
    box = class_symbol("Demo.Box`1", type_parameters=["T"])
    box.name = "Box"
    assembly = AssemblySymbol(name="Demo", namespaces=[NamespaceSymbol("Demo", [box])])
    model = ModelBuilder(assembly).build()
    assert model.find_type("Demo.Box`1").display_name == "Box<T>"


def test_global_namespace_is_ignored_by_default() -> None:
    loose = class_symbol("Loose")
    assembly = AssemblySymbol(name="Demo", namespaces=[NamespaceSymbol("", [loose])])
    assert ModelBuilder(assembly).build().namespaces == []

    model = ModelBuilder(assembly, context=ProjectContext(ignore_global_namespace=False)).build()
    (ns,) = model.namespaces
    assert ns.display_name == "global"
    assert ns.types[0].name == "Loose"


def test_inheritance_cycle_is_skipped() -> None:
    """A type that cannot be evaluated is skipped with a diagnostic."""
    a = class_symbol("Demo.A", base="Demo.B")
    b = class_symbol("Demo.B", base="Demo.A")
    ok = class_symbol("Demo.Ok")
    assembly = AssemblySymbol(name="Demo", namespaces=[NamespaceSymbol("Demo", [a, b, ok])])
    builder = ModelBuilder(assembly)
    model = builder.build()
    assert [t.name for t in model.namespaces[0].types] == ["Ok"]
    assert [d.code for d in builder.diagnostics] == [SYMBOL_SKIPPED, SYMBOL_SKIPPED]


def test_internals_not_visible_diagnostic() -> None:
    """Asking for internals from a public-only source is reported, not fatal."""
    assembly = AssemblySymbol(name="Demo", namespaces=[NamespaceSymbol("Demo", [class_symbol("Demo.A")])])
    builder = ModelBuilder(assembly, context=ProjectContext(included_members=["Public", "Internal"]))
    model = builder.build()
    assert model.find_type("Demo.A") is not None
    (diagnostic,) = builder.diagnostics
    assert diagnostic.code == INTERNALS_NOT_VISIBLE
    assert diagnostic.is_warning

    assembly.includes_non_public = True
    builder = ModelBuilder(assembly, context=ProjectContext(included_members=["Internal"]))
    builder.build()
    assert builder.diagnostics == []


def test_inherited_from_referenced_type() -> None:
    """Members of bases outside the assembly are inherited too."""
    base = class_symbol(
        "Other.BaseWidget",
        members=[
            MemberSymbol(
                name="Refresh",
                kind=MemberKind.METHOD,
                accessibility=Accessibility.PUBLIC,
                containing_type="Other.BaseWidget",
                parameters=[ParameterSymbol("arg0", "System.Boolean")],
            ),
            MemberSymbol(
                name="Secret",
                kind=MemberKind.METHOD,
                accessibility=Accessibility.PRIVATE,
                containing_type="Other.BaseWidget",
            ),
        ],
    )
    widget = class_symbol("Demo.Widget", base="Other.BaseWidget")
    assembly = AssemblySymbol(
        name="Demo",
        namespaces=[NamespaceSymbol("Demo", [widget])],
        referenced_types={"Other.BaseWidget": base},
    )
    model = ModelBuilder(assembly, context=ProjectContext(include_system_object_inheritance=False)).build()
    (refresh,) = model.find_type("Demo.Widget").members
    assert refresh.name == "Refresh"
    assert refresh.declaring_type_name == "Other.BaseWidget"
    assert refresh.display_name == "Refresh(System.Boolean)"


def test_comments_apply_to_members() -> None:
    comments = DocCommentFile.from_string(
        '<doc><members><member name="M:Demo.A.Run">'
        "<summary>Runs.</summary><remarks>Fast.</remarks>"
        "</member></members></doc>"
    )
    a = class_symbol(
        "Demo.A",
        comment_id="T:Demo.A",
        members=[
            MemberSymbol(
                name="Run",
                kind=MemberKind.METHOD,
                accessibility=Accessibility.PUBLIC,
                containing_type="Demo.A",
                comment_id="M:Demo.A.Run",
            )
        ],
    )
    assembly = AssemblySymbol(name="Demo", namespaces=[NamespaceSymbol("Demo", [a])])
    model = ModelBuilder(assembly, DocCommentExtractor(comments)).build()
    (run,) = model.find_type("Demo.A").find_members("Run")
    assert run.summary == "Runs."
    assert run.remarks == "Fast."
    assert model.find_type("Demo.A").summary is None


def test_walk_is_pre_order(build_shared: Callable[..., DocAssembly]) -> None:
    model = build_shared()
    entities = list(walk(model))
    assert entities[0] is model
    assert entities[1] is model.namespaces[0]
    assert entities[2] is model.namespaces[0].types[0]


def test_interface_implementation_is_declared(build_shared: Callable[..., DocAssembly]) -> None:
    """Members implementing an interface belong to the implementing class."""
    impl = build_shared().find_type(f"{BASIC}.TestImplementation")
    for name in ("TestMethod", "TestValue"):
        (member,) = impl.find_members(name)
        assert not member.is_inherited
        assert member.declaring_type_name == f"{BASIC}.TestImplementation"


def virtual_process(containing: str, type_name: str, **kwargs) -> MemberSymbol:
    return MemberSymbol(
        name="Process",
        kind=MemberKind.METHOD,
        accessibility=Accessibility.PUBLIC,
        containing_type=containing,
        parameters=[ParameterSymbol("value", type_name)],
        **kwargs,
    )


def test_override_of_closed_generic_base() -> None:
    """``Derived : Base<int>`` overriding ``Process(T)`` hides the base method."""
    base = class_symbol(
        "Demo.Base`1",
        type_parameters=["T"],
        members=[virtual_process("Demo.Base`1", "{T}", is_virtual=True)],
    )
    base.name = "Base"
    derived = class_symbol(
        "Demo.Derived",
        base="Demo.Base{System.Int32}",
        members=[virtual_process("Demo.Derived", "System.Int32", is_override=True)],
    )
    assembly = AssemblySymbol(name="Demo", namespaces=[NamespaceSymbol("Demo", [base, derived])])
    context = ProjectContext(include_system_object_inheritance=False)
    model = ModelBuilder(assembly, context=context).build()

    (process,) = model.find_type("Demo.Derived").find_members("Process")
    assert not process.is_inherited
    assert process.declaring_type_name == "Demo.Derived"
    assert process.overridden_member == "Demo.Base`1.Process"


def test_type_arguments_flow_through_generic_chain() -> None:
    """Arguments are carried through intermediate generic bases."""
    root = class_symbol(
        "Demo.Root`1",
        type_parameters=["T"],
        members=[virtual_process("Demo.Root`1", "T", is_virtual=True)],
    )
    middle = class_symbol("Demo.Middle`1", base="Demo.Root{{U}}", type_parameters=["U"])
    leaf = class_symbol(
        "Demo.Leaf",
        base="Demo.Middle{System.String}",
        members=[virtual_process("Demo.Leaf", "System.String", is_override=True)],
    )
    assembly = AssemblySymbol(
        name="Demo", namespaces=[NamespaceSymbol("Demo", [root, middle, leaf])]
    )
    context = ProjectContext(include_system_object_inheritance=False)
    model = ModelBuilder(assembly, context=context).build()
    assert len(model.find_type("Demo.Leaf").find_members("Process")) == 1
    (inherited,) = model.find_type("Demo.Middle`1").find_members("Process")
    assert inherited.is_inherited
