"""Helpers for working with .NET type and member names.

Names arrive in several spellings depending on where they come from: C# display
form (``List<string>``), documentation-ID form (``List{System.String}``) and CLR
metadata form (``List`1``, nested types joined with ``+``). These helpers
normalize between them without trying to be a full type parser.
"""

import re

GENERIC_OPENERS = "<{"
BRACKET_PAIRS = {"<": ">", "{": "}", "[": "]", "(": ")"}
ARITY_RE = re.compile(r"`+(\d+)$")
KEYWORD_TYPES = {
    "bool": "System.Boolean",
    "byte": "System.Byte",
    "sbyte": "System.SByte",
    "short": "System.Int16",
    "ushort": "System.UInt16",
    "int": "System.Int32",
    "uint": "System.UInt32",
    "long": "System.Int64",
    "ulong": "System.UInt64",
    "char": "System.Char",
    "string": "System.String",
    "object": "System.Object",
}
TYPE_KEYWORDS = {clr: keyword for keyword, clr in KEYWORD_TYPES.items()}


def split_top_level(text: str, sep: str = ",") -> list[str]:
    """Split text on a separator, ignoring separators nested in brackets or quotes."""
    parts: list[str] = []
    depth = 0
    quote: str | None = None
    current: list[str] = []
    for ch in text:
        if quote:
            current.append(ch)
            if ch == quote:
                quote = None
            continue
        if ch in "\"'":
            quote = ch
        elif ch in BRACKET_PAIRS:
            depth += 1
        elif ch in BRACKET_PAIRS.values():
            depth -= 1
        elif ch == sep and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    tail = "".join(current).strip()
    if tail or parts:
        parts.append(tail)
    return parts


def clr_type_name(name: str) -> str:
    """Normalize nesting and by-ref markers: ``Outer+Inner&`` -> ``Outer.Inner``."""
    return name.strip().replace("+", ".").rstrip("&@*")


def split_generic(name: str) -> tuple[str, str]:
    """Split ``Ns.Type<A, B>`` into (``Ns.Type``, ``A, B``)."""
    name = clr_type_name(name)
    for i, ch in enumerate(name):
        if ch in GENERIC_OPENERS:
            closer = BRACKET_PAIRS[ch]
            end = name.rfind(closer)
            if end <= i:
                return name[:i], ""
            return name[:i], name[i + 1 : end]
    return name, ""


def strip_generic_arguments(name: str) -> tuple[str, int]:
    """Return the name without type arguments and the generic arity."""
    base, args = split_generic(name)
    arity = 0
    match = ARITY_RE.search(base)
    if match:
        arity = int(match.group(1))
        base = base[: match.start()]
    if args:
        arity = len(split_top_level(args))
    return base, arity


def generic_definition_name(name: str) -> str:
    """Return the CLR generic definition name: ``List<int>`` -> ``List`1``."""
    base, arity = strip_generic_arguments(name)
    return f"{base}`{arity}" if arity else base


def simple_name(name: str) -> str:
    """Return the last dotted segment without type arguments."""
    base, _ = strip_generic_arguments(name)
    return base.rsplit(".", 1)[-1]


def namespace_of(full_name: str) -> str:
    """Return the namespace portion of a dotted type name."""
    base, _ = strip_generic_arguments(full_name)
    return base.rpartition(".")[0]


def is_array_type(name: str) -> bool:
    """Check if a type name denotes an array (``int[]``, ``int[,]``)."""
    return bool(re.search(r"\[,*\]$", name.strip()))


def strip_member_parameters(name: str) -> str:
    """Remove a trailing parameter list: ``Type.Method(System.Int32)`` -> ``Type.Method``."""
    depth = 0
    for i, ch in enumerate(name):
        if ch in "<{[":
            depth += 1
        elif ch in ">}]":
            depth -= 1
        elif ch == "(" and depth == 0:
            return name[:i]
    return name


def member_simple_name(name: str) -> str:
    """Simple member name from a display name such as ``Calculate(int, int)``."""
    name = strip_member_parameters(name)
    base, _ = split_generic(name)
    return ARITY_RE.sub("", base).rsplit(".", 1)[-1]


def generic_arguments(name: str) -> list[str]:
    """Type arguments of a constructed name: ``Base{System.Int32,{T}}`` -> both."""
    _, args = split_generic(name)
    return split_top_level(args) if args else []


PLACEHOLDER_RE = re.compile(r"(?<![\w`])\{(\w+)\}")
IDENTIFIER_RE = re.compile(r"[A-Za-z_][\w.`]*")


def substitute_type_parameters(name: str, arguments: dict[str, str]) -> str:
    """Replace type parameters in a type name with concrete arguments.

    Handles both the bare (``T``) and documentation-ID (``{T}``) spellings.
    """
    if not arguments:
        return name

    def placeholder_repl(match: re.Match[str]) -> str:
        return arguments.get(match.group(1), match.group(0))

    def name_repl(match: re.Match[str]) -> str:
        return arguments.get(match.group(0), match.group(0))

    name = PLACEHOLDER_RE.sub(placeholder_repl, name)
    return IDENTIFIER_RE.sub(name_repl, name)


def keyword_type_name(name: str) -> str:
    """CLR name of a C# keyword type: ``byte`` -> ``System.Byte``; others pass through."""
    return KEYWORD_TYPES.get(name.strip(), name.strip())


def type_keyword(name: str) -> str:
    """C# keyword for a CLR type name when there is one: ``System.Int32`` -> ``int``."""
    return TYPE_KEYWORDS.get(name, simple_name(name))
