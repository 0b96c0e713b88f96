"""Tests for parsing C# declarations."""

from dotnetdocs.accessibility import Accessibility
from dotnetdocs.signature_parser import (
    find_parameter_list,
    leading_modifiers,
    parse_parameter,
    parse_signature,
    strip_attributes,
)


def test_strip_attributes() -> None:
    assert strip_attributes("[Obsolete] [Flags]public enum E") == "public enum E"
    assert strip_attributes("public void Run()") == "public void Run()"


def test_leading_modifiers() -> None:
    """Modifier collection stops at the first non-keyword."""
    assert leading_modifiers("public static class Helpers") == {"public", "static"}
    assert leading_modifiers("protected internal virtual void Run()") == {
        "protected",
        "internal",
        "virtual",
    }
    assert leading_modifiers("void Run()") == set()


def test_find_parameter_list() -> None:
    assert find_parameter_list("public int Calculate(int a, int b)") == "int a, int b"
    assert find_parameter_list("public void Run()") == ""
    assert find_parameter_list("public string Name { get; }") is None
    assert find_parameter_list("public void Wrap<T>(Func<T, (int, int)> f)") == "Func<T, (int, int)> f"
    assert find_parameter_list("[Obsolete(\"x\")] public void Run(int a)") == "int a"


def test_parse_parameter_default_value() -> None:
    param = parse_parameter("int optional = 42")
    assert param.name == "optional"
    assert param.type_name == "int"
    assert param.has_default_value
    assert param.default_value == "42"

    text = parse_parameter('string sep = "a=b"')
    assert text.default_value == '"a=b"'


def test_parse_parameter_modifiers() -> None:
    assert parse_parameter("params int[] values").is_params
    this = parse_parameter("this List<T> list")
    assert this.is_this
    assert this.type_name == "List<T>"
    assert parse_parameter("ref int value").modifier == "ref"
    assert parse_parameter("out string result").modifier == "out"
    assert parse_parameter("[NotNull] string @class").name == "class"


def test_parse_signature_method() -> None:
    parsed = parse_signature("public static string Repeat(this string value, int count = 2)")
    assert parsed.accessibility == Accessibility.PUBLIC
    assert parsed.is_static
    first, second = parsed.parameters
    assert first.is_this
    assert second.default_value == "2"


def test_parse_signature_flags() -> None:
    assert parse_signature("public override void Run()").is_override
    assert parse_signature("public abstract class Shape").is_abstract
    assert parse_signature("public sealed class Leaf").is_sealed
    assert parse_signature("public virtual int Size { get; }").is_virtual
    assert parse_signature("public const int Max = 3").is_static


def test_parse_signature_combined_accessibility() -> None:
    assert parse_signature("protected internal void Run()").accessibility == (
        Accessibility.PROTECTED_OR_INTERNAL
    )
    assert parse_signature("private protected void Run()").accessibility == (
        Accessibility.PROTECTED_AND_INTERNAL
    )
    assert parse_signature("void Run()").accessibility is None


def test_parse_signature_empty() -> None:
    parsed = parse_signature(None)
    assert parsed.modifiers == set()
    assert parsed.parameters == []
