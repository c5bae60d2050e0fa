import threading
from collections.abc import Iterator
from dataclasses import dataclass, field

import tree_sitter_css
import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

from srcmapper.processor.syntax import SyntaxKind
from srcmapper.processor.vlq import Segment, encode_mappings


@dataclass(slots=True)
class IdentityMap:
    mappings: str = ""
    names: list[str] = field(default_factory=list)


class IdentityMapGenerator:
    """Builds a map that points every token of a file back at itself."""

    _LANGUAGES: dict[SyntaxKind, Language] = {}
    # Nodes emitted as a single token even though the grammar splits them.
    _ATOMIC: dict[SyntaxKind, frozenset[str]] = {
        SyntaxKind.JS: frozenset({"string", "number", "regex"}),
        SyntaxKind.CSS: frozenset(),
    }
    _NAMED: frozenset[str] = frozenset({
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "private_property_identifier",
    })
    _CSS_MAPPED: frozenset[str] = frozenset({"rule_set", "declaration"})

    def __init__(self) -> None:
        self._parsers: dict[SyntaxKind, Parser] = {}
        self._init_languages()

    def _init_languages(self) -> None:
        if not IdentityMapGenerator._LANGUAGES:
            IdentityMapGenerator._LANGUAGES = {
                SyntaxKind.JS: Language(tree_sitter_javascript.language()),
                SyntaxKind.CSS: Language(tree_sitter_css.language()),
            }

    def _get_parser(self, kind: SyntaxKind) -> Parser | None:
        if kind not in IdentityMapGenerator._LANGUAGES:
            return None
        if kind not in self._parsers:
            self._parsers[kind] = Parser(IdentityMapGenerator._LANGUAGES[kind])
        return self._parsers[kind]

    def generate(self, content: str, kind: SyntaxKind) -> IdentityMap:
        parser = self._get_parser(kind)
        if not parser or not content:
            return IdentityMap()
        source = content.encode("utf-8")
        tree = parser.parse(source)
        lines = source.split(b"\n")

        names: list[str] = []
        index: dict[str, int] = {}
        by_line: dict[int, list[Segment]] = {}
        nodes = self._tokens(tree.root_node, kind) if kind == SyntaxKind.JS else self._css_nodes(tree.root_node)
        for node in nodes:
            row, byte_col = node.start_point
            column = len(lines[row][:byte_col].decode("utf-8", errors="ignore"))
            segment: Segment = (column, 0, row, column)
            if node.type in self._NAMED and node.text:
                name = node.text.decode("utf-8")
                if name not in index:
                    index[name] = len(names)
                    names.append(name)
                segment = (column, 0, row, column, index[name])
            by_line.setdefault(row, []).append(segment)

        if not by_line:
            return IdentityMap(names=names)
        grouped = [by_line.get(row, []) for row in range(max(by_line) + 1)]
        return IdentityMap(mappings=encode_mappings(grouped), names=names)

    def _tokens(self, node: Node, kind: SyntaxKind) -> Iterator[Node]:
        if node.start_byte == node.end_byte or node.type == "comment":
            return
        if node.child_count == 0 or node.type in self._ATOMIC[kind]:
            yield node
            return
        for child in node.children:
            yield from self._tokens(child, kind)

    def _css_nodes(self, node: Node) -> Iterator[Node]:
        if node.type in self._CSS_MAPPED or node.type.endswith("_statement"):
            yield node
        for child in node.children:
            yield from self._css_nodes(child)


# Parsers are not shared between threads.
_local = threading.local()


def generate(content: str, kind: SyntaxKind) -> IdentityMap:
    if kind == SyntaxKind.UNKNOWN:
        return IdentityMap()
    generator = getattr(_local, "generator", None)
    if generator is None:
        generator = _local.generator = IdentityMapGenerator()
    return generator.generate(content, kind)
