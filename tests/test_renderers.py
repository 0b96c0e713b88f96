"""Tests for the Markdown, YAML and JSON renderers."""

import json
from pathlib import Path

import yaml

from dotnetdocs.doc_assembly import DocAssembly
from dotnetdocs.doc_exception import DocException
from dotnetdocs.doc_member import DocMember
from dotnetdocs.doc_namespace import DocNamespace
from dotnetdocs.doc_type import DocType
from dotnetdocs.doc_type_parameter import DocTypeParameter
from dotnetdocs.file_naming import FileNamingOptions, NamespaceMode
from dotnetdocs.member_kind import MemberKind
from dotnetdocs.project_context import ProjectContext
from dotnetdocs.renderers import RENDERERS, JsonRenderer, MarkdownRenderer, YamlRenderer
from dotnetdocs.renderers.markdown_renderer import header_slug, md_table, one_line

BASIC = "CloudNimble.DotNetDocs.Tests.Shared.BasicScenarios"
BASIC_PAGE = "CloudNimble-DotNetDocs-Tests-Shared-BasicScenarios"


def render_markdown(model: DocAssembly, tmp_path: Path, **kwargs) -> Path:
    context = ProjectContext(output_path=str(tmp_path), **kwargs)
    MarkdownRenderer(context).render(model)
    return tmp_path / "api-reference"


def read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def test_header_slug() -> None:
    assert header_slug("Hello, World!") == "hello-world"
    assert header_slug("  Run(int)  ") == "run-int"
    assert header_slug("!!!") == "section"


def test_md_table() -> None:
    assert md_table(["A", "B"], []) == ""
    assert md_table(["A", "B"], [["1", "2"]]) == "| A | B |\n| --- | --- |\n| 1 | 2 |"


def test_one_line() -> None:
    assert one_line("a\nb | c") == "a b \\| c"
    assert one_line(None) == ""


def test_renderer_registry() -> None:
    assert RENDERERS == {"markdown": MarkdownRenderer, "yaml": YamlRenderer, "json": JsonRenderer}


def test_markdown_pages_and_toc(shared_model: DocAssembly, tmp_path: Path) -> None:
    """One page per namespace and type, listed in toc.yml."""
    root = render_markdown(shared_model, tmp_path)

    ns_page = read(root / f"{BASIC_PAGE}.md")
    assert ns_page.startswith(f"# Namespace {BASIC}\n")
    assert "Basic documentation scenarios." in ns_page
    assert "## Classes" in ns_page
    assert "## Interfaces" in ns_page
    assert f"### [SimpleClass](/api-reference/{BASIC_PAGE}.SimpleClass)" in ns_page

    toc = yaml.safe_load(read(root / "toc.yml"))
    basic = next(entry for entry in toc if entry["name"] == BASIC)
    assert basic["href"] == f"{BASIC_PAGE}.md"
    assert {"name": "SimpleClass", "href": f"{BASIC_PAGE}.SimpleClass.md"} in basic["items"]


def test_empty_namespaces_get_no_page(shared_model: DocAssembly, tmp_path: Path) -> None:
    """The extension-only namespace is emptied by relocation and is not rendered."""
    root = render_markdown(shared_model, tmp_path)
    assert not (root / "CloudNimble-DotNetDocs-Tests-Shared-Extensions.md").exists()
    toc = yaml.safe_load(read(root / "toc.yml"))
    assert "CloudNimble.DotNetDocs.Tests.Shared.Extensions" not in {e["name"] for e in toc}


def test_type_page_sections(shared_model: DocAssembly, tmp_path: Path) -> None:
    root = render_markdown(shared_model, tmp_path)
    page = read(root / f"{BASIC_PAGE}.SimpleClass.md")
    assert page.startswith("# Class SimpleClass\n")
    assert f"**Namespace:** [{BASIC}](/api-reference/{BASIC_PAGE})" in page
    assert "**Assembly:** Tests.Shared.dll" in page
    assert "```csharp\npublic class SimpleClass\n```" in page
    assert "## Methods" in page
    assert "### DoWork" in page
    assert "## Extension Methods" in page
    assert "### ToDisplayString" in page
    assert "*Extension method from `TestsShared_SimpleClassExtensions`*" in page
    assert "## Inherited Members" in page
    assert "(https://learn.microsoft.com/dotnet/api/system.object.tostring)" in page


def test_override_and_inheritance_links(shared_model: DocAssembly, tmp_path: Path) -> None:
    root = render_markdown(shared_model, tmp_path)
    page = read(root / f"{BASIC_PAGE}.DerivedClass.md")
    base_page = f"/api-reference/{BASIC_PAGE}.BaseClass"
    assert f"[BaseClass]({base_page}) → DerivedClass" in page
    assert f"Overrides [BaseClass.VirtualMethod]({base_page}#virtualmethod)" in page


def test_external_type_page(shared_model: DocAssembly, tmp_path: Path) -> None:
    root = render_markdown(shared_model, tmp_path)
    page = read(root / "System-Collections-Generic.List.md")
    assert page.startswith("# Class List<T>\n")
    assert "> This type is defined outside the documented assemblies." in page
    assert "### IsNullOrEmpty" in page


def test_parameter_table(shared_model: DocAssembly, tmp_path: Path) -> None:
    root = render_markdown(shared_model, tmp_path)
    page = read(root / "CloudNimble-DotNetDocs-Tests-Shared-Parameters.ParameterVariations.md")
    assert "#### Parameters" in page
    assert "| Name | Type | Description |" in page
    assert "(default: `42`)" in page
    assert "| params `values` | `System.Int32[]` |" in page


def test_folder_mode(shared_model: DocAssembly, tmp_path: Path) -> None:
    """Folder naming nests pages by namespace segment."""
    options = FileNamingOptions(namespace_mode=NamespaceMode.FOLDER)
    root = render_markdown(shared_model, tmp_path, file_naming_options=options)
    ns_dir = root / "CloudNimble" / "DotNetDocs" / "Tests" / "Shared" / "BasicScenarios"
    assert (ns_dir / "index.md").exists()
    page = read(ns_dir / "SimpleClass.md")
    assert "[" + BASIC + "](/api-reference/CloudNimble/DotNetDocs/Tests/Shared/BasicScenarios/index)" in page


def test_member_details(tmp_path: Path) -> None:
    """Return values, exceptions, type parameters and see-also links."""
    name = DocMember(
        name="GetName",
        member_kind=MemberKind.METHOD,
        signature="public string GetName()",
        return_type_name="System.String",
        returns="The name.",
        exceptions=[DocException("System.ArgumentNullException", "When null.")],
    )
    size = DocMember(
        name="Size",
        member_kind=MemberKind.PROPERTY,
        return_type_name="System.Int32",
        value="Pixels.",
    )
    box = DocType(
        name="Box`1",
        display_name="Box<T>",
        full_name="Demo.Box`1",
        namespace_name="Demo",
        members=[name, size],
        type_parameters=[DocTypeParameter("T", "The payload.")],
        see_also=["T:Demo.Box`1", "https://example.com"],
        usage="Put things in it.",
    )
    model = DocAssembly(assembly_name="Demo", namespaces=[DocNamespace(name="Demo", types=[box])])
    root = render_markdown(model, tmp_path)

    page = read(root / "Demo.Box-1.md")
    assert page.startswith("# Class Box<T>\n")
    assert "## Type Parameters" in page
    assert "| `T` | The payload. |" in page
    assert "## Usage\n\nPut things in it." in page
    assert "#### Returns" in page
    assert "**Type:** [String](https://learn.microsoft.com/dotnet/api/system.string)" in page
    assert "- [ArgumentNullException](https://learn.microsoft.com/dotnet/api/system.argumentnullexception): When null." in page
    assert "#### Property Value\n\n**Type:** [Int32](https://learn.microsoft.com/dotnet/api/system.int32)\n\nPixels." in page
    assert "## See also\n- [Box`1](/api-reference/Demo.Box-1)\n- [link](https://example.com)" in page


def test_yaml_renderer(shared_model: DocAssembly, tmp_path: Path) -> None:
    YamlRenderer(ProjectContext(output_path=str(tmp_path))).render(shared_model)
    root = tmp_path / "api-reference"

    doc = yaml.safe_load(read(root / "documentation.yaml"))
    assert doc["assemblyName"] == "Tests.Shared"
    assert any(ns["name"] == BASIC for ns in doc["namespaces"])

    ns = yaml.safe_load(read(root / f"{BASIC_PAGE}.yaml"))
    assert ns["summary"] == "Basic documentation scenarios."

    toc = yaml.safe_load(read(root / "toc.yaml"))
    basic = next(entry for entry in toc if entry["name"] == BASIC)
    assert {"name": "SimpleClass", "uid": f"{BASIC}.SimpleClass"} in basic["items"]


def test_json_renderer(shared_model: DocAssembly, tmp_path: Path) -> None:
    JsonRenderer(ProjectContext(), output_path=tmp_path).render(shared_model)
    root = tmp_path / "api-reference"
    doc = json.loads(read(root / "documentation.json"))
    assert doc["assemblyName"] == "Tests.Shared"
    ns = json.loads(read(root / f"{BASIC_PAGE}.json"))
    simple = next(t for t in ns["types"] if t["name"] == "SimpleClass")
    assert simple["typeKind"] == "class"
    assert "includedMembers" in simple


def test_enum_values_table(shared_model: DocAssembly, tmp_path: Path) -> None:
    root = render_markdown(shared_model, tmp_path)
    page = read(root / "CloudNimble-DotNetDocs-Tests-Shared-Enums.SimpleEnum.md")
    assert page.startswith("# Enum SimpleEnum\n")
    assert "**Underlying type:** [int](https://learn.microsoft.com/dotnet/api/system.int32)" in page
    assert "bit flags" not in page
    assert "## Values" in page
    assert "| Name | Value | Description |" in page
    assert "| None | 0 | No value specified. |" in page
    assert "| Third | 10 | Third option with explicit value. |" in page
    assert "| Fourth | 11 |  |" in page
    assert "## Fields" not in page


def test_json_renderer_enum_values(shared_model: DocAssembly, tmp_path: Path) -> None:
    JsonRenderer(ProjectContext(), output_path=tmp_path).render(shared_model)
    ns = json.loads(read(tmp_path / "api-reference" / "CloudNimble-DotNetDocs-Tests-Shared-Enums.json"))
    simple = next(t for t in ns["types"] if t["name"] == "SimpleEnum")
    assert simple["typeKind"] == "enum"
    assert [v["name"] for v in simple["values"]] == ["None", "First", "Second", "Third", "Fourth"]
    assert simple["values"][3]["numericValue"] == "10"
    assert simple["underlyingType"]["displayName"] == "int"
    assert "members" not in simple
