"""tree-sitter setup and small node helpers for TypeScript sources."""

from __future__ import annotations

import re

import tree_sitter_typescript as tsts
from tree_sitter import Language, Node, Parser

_parsers: dict[str, Parser] = {}

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    # Line continuations.
    "\n": "",
    "\r": "",
    "\r\n": "",
    "\u2028": "",
    "\u2029": "",
}


def get_parser(file_name: str) -> Parser:
    """Return a (cached) parser for the TypeScript dialect of *file_name*."""
    dialect = "tsx" if file_name.endswith(".tsx") else "typescript"
    parser = _parsers.get(dialect)
    if parser is None:
        if dialect == "tsx":
            language = Language(tsts.language_tsx())
        else:
            language = Language(tsts.language_typescript())
        parser = Parser(language)
        _parsers[dialect] = parser
    return parser


def node_text(node: Node) -> str:
    return node.text.decode("utf-8")


def collapse(text: str) -> str:
    """Squash runs of whitespace into single spaces."""
    return " ".join(text.split())


def string_value(node: Node) -> str:
    """Return the value of a string literal node: quotes removed, escapes decoded."""
    return unescape(node_text(node)[1:-1])


def unescape(text: str) -> str:
    """Decode JavaScript escape sequences in the body of a string literal."""
    return _ESCAPE_RE.sub(_decode_escape, text)


def _decode_escape(match: re.Match[str]) -> str:
    escape = match.group(1)
    if escape in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[escape]
    if escape.startswith("u{"):
        return chr(int(escape[2:-1], 16))
    if len(escape) > 1 and escape[0] in "ux":
        return chr(int(escape[1:], 16))
    return escape


def property_name(node: Node | None) -> str | None:
    """Return the name of a property/member name node."""
    if node is None:
        return None
    if node.type == "string":
        return string_value(node)
    return node_text(node)


def named_children(node: Node) -> list[Node]:
    """Named children of *node*, comments excluded."""
    return [child for child in node.named_children if child.type != "comment"]


def first_named_child(node: Node, *types: str) -> Node | None:
    for child in node.named_children:
        if not types or child.type in types:
            return child
    return None


def has_token(node: Node, token: str) -> bool:
    """True if *node* has an anonymous child token such as ``?`` or ``get``."""
    return any(not child.is_named and child.type == token for child in node.children)


def has_child_of_type(node: Node, *types: str) -> bool:
    return any(child.type in types for child in node.children)
