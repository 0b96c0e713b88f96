"""Parse C# declaration signatures as emitted in DocFX ``syntax.content``."""

import re
from dataclasses import dataclass, field

from dotnetdocs.accessibility import Accessibility
from dotnetdocs.type_names import split_top_level

MODIFIER_WORDS = {
    "public",
    "protected",
    "internal",
    "private",
    "static",
    "virtual",
    "override",
    "abstract",
    "sealed",
    "readonly",
    "const",
    "extern",
    "unsafe",
    "new",
    "async",
    "partial",
    "volatile",
    "required",
}
PARAMETER_MODIFIERS = {"this", "params", "ref", "out", "in", "scoped", "readonly"}
LEADING_ATTRIBUTE_RE = re.compile(r"^\s*\[[^\]]*\]\s*")


@dataclass
class ParsedParameter:
    """A single parameter of a parsed signature."""

    name: str
    type_name: str
    default_value: str | None = None
    is_params: bool = False
    is_this: bool = False
    modifier: str | None = None

    @property
    def has_default_value(self) -> bool:
        """Whether the parameter declares a default value."""
        return self.default_value is not None


@dataclass
class ParsedSignature:
    """Modifiers and parameters recovered from a declaration."""

    modifiers: set[str] = field(default_factory=set)
    parameters: list[ParsedParameter] = field(default_factory=list)

    @property
    def accessibility(self) -> Accessibility | None:
        """Declared accessibility, if the declaration spells one out."""
        return Accessibility.from_modifiers(self.modifiers)

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers or "const" in self.modifiers

    @property
    def is_virtual(self) -> bool:
        return "virtual" in self.modifiers

    @property
    def is_override(self) -> bool:
        return "override" in self.modifiers

    @property
    def is_abstract(self) -> bool:
        return "abstract" in self.modifiers

    @property
    def is_sealed(self) -> bool:
        return "sealed" in self.modifiers


def strip_attributes(text: str) -> str:
    """Drop leading ``[Attribute]`` groups."""
    previous = None
    while previous != text:
        previous = text
        text = LEADING_ATTRIBUTE_RE.sub("", text, count=1)
    return text


def leading_modifiers(declaration: str) -> set[str]:
    """Collect the modifier keywords at the start of a declaration."""
    found: set[str] = set()
    for word in strip_attributes(declaration).split():
        if word not in MODIFIER_WORDS:
            break
        found.add(word)
    return found


def find_parameter_list(declaration: str) -> str | None:
    """Return the text inside the declaration's parameter list, if it has one."""
    depth = 0
    start = -1
    for i, ch in enumerate(declaration):
        if ch in "<[":
            depth += 1
        elif ch in ">]":
            depth -= 1
        elif ch == "(":
            if start < 0 and depth == 0 and i > 0 and re.match(r"[\w>]", declaration[i - 1]):
                start = i + 1
                nested = 0
                for j in range(start, len(declaration)):
                    if declaration[j] == "(":
                        nested += 1
                    elif declaration[j] == ")":
                        if nested == 0:
                            return declaration[start:j]
                        nested -= 1
                return declaration[start:]
            depth += 1
        elif ch == ")":
            depth -= 1
    return None


def parse_parameter(text: str) -> ParsedParameter:
    """Parse one parameter such as ``this List<T> list`` or ``int optional = 42``."""
    text = strip_attributes(text.strip())
    default_value = None
    parts = split_top_level(text, "=")
    if len(parts) > 1:
        text = parts[0]
        default_value = "=".join(parts[1:]).strip()

    words = text.split()
    modifiers = []
    while len(words) > 2 and words[0] in PARAMETER_MODIFIERS:
        modifiers.append(words.pop(0))
    name = words[-1] if words else ""
    type_name = " ".join(words[:-1])

    passing = next((m for m in modifiers if m in {"ref", "out", "in"}), None)
    return ParsedParameter(
        name=name.lstrip("@"),
        type_name=type_name,
        default_value=default_value,
        is_params="params" in modifiers,
        is_this="this" in modifiers,
        modifier=passing,
    )


def parse_signature(declaration: str) -> ParsedSignature:
    """Parse modifiers and parameters out of a C# declaration."""
    declaration = declaration or ""
    parsed = ParsedSignature(modifiers=leading_modifiers(declaration))
    param_text = find_parameter_list(declaration)
    if param_text and param_text.strip():
        parsed.parameters = [
            parse_parameter(p) for p in split_top_level(param_text) if p.strip()
        ]
    return parsed
