"""Read XML documentation comment files and extract typed comment data.

The compiler writes one ``<member name="ID">`` element per documented symbol, keyed
by documentation ID (``T:Ns.Type``, ``M:Ns.Type.Method(System.Int32)``). Text
fields keep their inner XML so a transformer can later turn ``<see cref>`` and
friends into links. ``<inheritdoc>`` and ``<include>`` are left as-is.
"""

import logging
import textwrap
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from dotnetdocs.doc_exception import DocException
from dotnetdocs.doc_type_parameter import DocTypeParameter

logger = logging.getLogger(__name__)

CREF_PREFIXES = ("T:", "N:")


def inner_xml(element: ET.Element | None) -> str | None:
    """Return an element's content (text and child markup), dedented and trimmed."""
    if element is None:
        return None
    parts = [element.text or ""]
    parts.extend(ET.tostring(child, encoding="unicode") for child in element)
    text = textwrap.dedent("".join(parts)).strip()
    return text or None


def strip_cref_prefix(cref: str) -> str:
    for prefix in CREF_PREFIXES:
        if cref.startswith(prefix):
            return cref[len(prefix) :]
    return cref


@dataclass
class DocComment:
    """The parsed comment of one symbol."""

    element: ET.Element

    def _text(self, tag: str) -> str | None:
        return inner_xml(self.element.find(tag))

    @property
    def summary(self) -> str | None:
        return self._text("summary")

    @property
    def remarks(self) -> str | None:
        return self._text("remarks")

    @property
    def returns(self) -> str | None:
        return self._text("returns")

    @property
    def value(self) -> str | None:
        return self._text("value")

    @property
    def example(self) -> str | None:
        return self._text("example")

    def parameter(self, name: str) -> str | None:
        """Text of the ``<param>`` with the given name."""
        for el in self.element.findall("param"):
            if el.get("name") == name:
                return inner_xml(el)
        return None

    @property
    def type_parameters(self) -> list[DocTypeParameter]:
        return [
            DocTypeParameter(name=el.get("name", ""), description=inner_xml(el))
            for el in self.element.findall("typeparam")
        ]

    @property
    def exceptions(self) -> list[DocException]:
        return [
            DocException(
                type=strip_cref_prefix(el.get("cref", "")),
                description=inner_xml(el),
            )
            for el in self.element.findall("exception")
        ]

    @property
    def see_also(self) -> list[str]:
        """``<seealso>`` targets, crefs kept with their ID prefix."""
        tokens = []
        for el in self.element.findall("seealso"):
            token = el.get("cref") or el.get("href")
            if token:
                tokens.append(token)
        return tokens

    @property
    def has_inheritdoc(self) -> bool:
        return self.element.find("inheritdoc") is not None


@dataclass
class DocCommentFile:
    """All ``<member>`` comments of one XML documentation file."""

    assembly_name: str = ""
    members: dict[str, ET.Element] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path | str) -> "DocCommentFile":
        """Parse a documentation file and index its members by documentation ID."""
        root = ET.parse(path).getroot()
        return cls.from_element(root)

    @classmethod
    def from_string(cls, text: str) -> "DocCommentFile":
        return cls.from_element(ET.fromstring(text))

    @classmethod
    def from_element(cls, root: ET.Element) -> "DocCommentFile":
        members: dict[str, ET.Element] = {}
        for el in root.iter("member"):
            name = el.get("name")
            if name:
                members[name] = el
        assembly = root.findtext("assembly/name") or ""
        logger.debug("Loaded %d doc comments for %s", len(members), assembly or "?")
        return cls(assembly_name=assembly.strip(), members=members)


class DocCommentExtractor:
    """Look up and parse the doc comment of a symbol by documentation ID."""

    def __init__(self, comments: DocCommentFile | None = None) -> None:
        self.comments = comments or DocCommentFile()

    def extract(self, comment_id: str | None) -> DocComment | None:
        """Return the comment for a documentation ID, or ``None`` when absent."""
        if not comment_id:
            return None
        element = self.comments.members.get(comment_id)
        if element is None:
            return None
        return DocComment(element)
