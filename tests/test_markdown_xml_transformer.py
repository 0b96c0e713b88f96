"""Tests for converting doc-comment XML to Markdown."""

from dotnetdocs.doc_assembly import DocAssembly, walk
from dotnetdocs.doc_exception import DocException
from dotnetdocs.doc_member import DocMember
from dotnetdocs.doc_namespace import DocNamespace
from dotnetdocs.doc_type import DocType
from dotnetdocs.doc_type_parameter import DocTypeParameter
from dotnetdocs.transformers.markdown_xml_transformer import (
    LANGWORD_URLS,
    MarkdownXmlTransformer,
    convert_code,
    convert_lists,
)

WIDGET_PAGE = "/api-reference/Demo.Widget"


def make_model() -> DocAssembly:
    run = DocMember(name="Run", summary='Runs <paramref name="count"/> times.')
    widget = DocType(
        name="Widget",
        full_name="Demo.Widget",
        namespace_name="Demo",
        summary='A widget. See <see cref="M:Demo.Widget.Run(System.Int32)"/>.',
        members=[run],
    )
    return DocAssembly(assembly_name="Demo", namespaces=[DocNamespace(name="Demo", types=[widget])])


def transformer() -> MarkdownXmlTransformer:
    t = MarkdownXmlTransformer()
    t.resolver.build_reference_map(make_model())
    return t


def test_plain_text_untouched() -> None:
    t = transformer()
    assert t.convert(None) is None
    assert t.convert("") == ""
    assert t.convert("Works with List<int> values.") == "Works with List<int> values."
    assert t.converted == 0


def test_see_cref() -> None:
    t = transformer()
    assert t.convert('Use <see cref="T:Demo.Widget"/>.') == f"Use [Widget]({WIDGET_PAGE})."
    assert t.convert('<see cref="T:Demo.Widget">the widget</see>') == f"[the widget]({WIDGET_PAGE})"
    assert t.convert('<see cref="T:Acme.Gadget"/>') == "`Gadget`"
    assert t.convert('<see cref="T:System.String"/>') == (
        "[String](https://learn.microsoft.com/dotnet/api/system.string)"
    )


def test_see_href() -> None:
    t = transformer()
    assert t.convert('<see href="https://example.com"/>') == "[link](https://example.com)"
    assert t.convert('<see href="https://example.com">docs</see>') == "[docs](https://example.com)"


def test_langword() -> None:
    t = transformer()
    assert t.convert('Returns <see langword="null"/>.') == f"Returns [`null`]({LANGWORD_URLS['null']})."
    assert t.convert('<see langword="unchecked"/>') == "`unchecked`"


def test_paramref_and_formatting() -> None:
    t = transformer()
    assert t.convert('Uses <paramref name="count"/>.') == "Uses *count*."
    assert t.convert('Of <typeparamref name="T"/>.') == "Of *T*."
    assert t.convert("<b>bold</b> and <i>it</i>") == "**bold** and *it*"
    assert t.convert("a<br/>b") == "a  \nb"
    assert t.convert("First.<para>Second.</para>") == "First.\n\nSecond."


def test_inline_code() -> None:
    t = transformer()
    assert t.convert("Compare <c>a &lt; b</c>.") == "Compare `a < b`."
    assert t.convert("Use List<int> and <c>x</c>") == "Use List<int> and `x`"


def test_code_block() -> None:
    """Code blocks are dedented and fenced; CDATA content is kept verbatim."""
    text = "<code>\n    if (a &lt; b)\n        Run();\n</code>"
    assert convert_code(text).strip() == "```csharp\nif (a < b)\n    Run();\n```"

    cdata = '<code language="xml"><![CDATA[<a>&amp;</a>]]></code>'
    assert convert_code(cdata).strip() == "```xml\n<a>&amp;</a>\n```"
    assert convert_code("<code>   </code>") == ""


def test_lists() -> None:
    bullets = (
        '<list type="bullet"><item><description>One</description></item>'
        "<item><term>T</term><description>Two</description></item></list>"
    )
    assert convert_lists(bullets).strip() == "- One\n- **T**: Two"

    numbers = (
        '<list type="number"><item><description>One</description></item>'
        "<item><description>Two</description></item></list>"
    )
    assert convert_lists(numbers).strip() == "1. One\n2. Two"

    table = (
        '<list type="table"><listheader><term>Name</term><description>Meaning</description></listheader>'
        "<item><term>a</term><description>first</description></item></list>"
    )
    assert convert_lists(table).strip() == "| Name | Meaning |\n| --- | --- |\n| a | first |"


def test_leftover_doc_tags_are_escaped() -> None:
    t = transformer()
    assert t.convert('Text <seealso cref="T:X"/> more <c>y</c>') == (
        'Text &lt;seealso cref="T:X"/&gt; more `y`'
    )


def test_transform_walks_model() -> None:
    """Transforming the assembly first builds the index used by its children."""
    model = make_model()
    widget = model.namespaces[0].types[0]
    widget.exceptions.append(DocException("System.ArgumentException", "When <c>x</c> is bad."))
    widget.type_parameters.append(DocTypeParameter("T", "<b>Payload</b>"))

    t = MarkdownXmlTransformer()
    for entity in walk(model):
        t.transform(entity)

    assert widget.summary == f"A widget. See [Widget.Run]({WIDGET_PAGE}#run)."
    assert widget.members[0].summary == "Runs *count* times."
    assert widget.exceptions[0].description == "When `x` is bad."
    assert widget.type_parameters[0].description == "**Payload**"
    assert t.converted == 4
