"""Serialize decorator nodes and their literal arguments.

Only literal-ish arguments are understood; anything else is reported as an
``"error"`` argument instead of failing, since decorator metadata is
informational.
"""

from __future__ import annotations

from typing import Callable, Iterable

from tree_sitter import Node

from typezoom.host.typescript.syntax import collapse, named_children, node_text, string_value
from typezoom.model import DecoratorArgument, DecoratorRecord

UNIDENTIFIED_NODE = "unidentified node"


def decorator_name(node: Node) -> str | None:
    """Name of decorator *node*: ``@A``, ``@A(...)`` and ``@ns.A(...)`` all give ``A``."""
    expression = _decorator_expression(node)
    if expression is None:
        return None
    if expression.type == "call_expression":
        expression = expression.child_by_field_name("function")
        if expression is None:
            return None
    if expression.type == "identifier":
        return node_text(expression)
    if expression.type == "member_expression":
        prop = expression.child_by_field_name("property")
        return node_text(prop) if prop is not None else None
    return None


def serialize_literal_decorator(
    names: Iterable[str],
) -> Callable[[Node], DecoratorRecord | None]:
    """Return a decorator serializer restricted to decorators called *names*."""
    allowed = frozenset(names)

    def serialize(node: Node) -> DecoratorRecord | None:
        return serialize_decorator_node(node, allowed)

    return serialize


def serialize_decorator_node(node: Node, names: Iterable[str]) -> DecoratorRecord | None:
    name = decorator_name(node)
    if name is None or name not in names:
        return None

    args: list[DecoratorArgument] = []
    expression = _decorator_expression(node)
    if expression is not None and expression.type == "call_expression":
        arguments = expression.child_by_field_name("arguments")
        if arguments is not None:
            args = [serialize_argument(arg) for arg in named_children(arguments)]
    return DecoratorRecord(name=name, args=args)


def serialize_argument(node: Node | None) -> DecoratorArgument:
    """Describe one decorator argument as a tagged :class:`DecoratorArgument`."""
    if node is None:
        return DecoratorArgument("null")

    kind = node.type
    if kind == "string":
        return DecoratorArgument("string literal", string_value(node))
    if kind == "number":
        return DecoratorArgument("numeric literal", node_text(node))
    if kind in ("true", "false"):
        return DecoratorArgument("boolean", kind)
    if kind in ("null", "undefined"):
        return DecoratorArgument("null")
    if kind == "identifier":
        return DecoratorArgument("identifier", node_text(node))
    if kind == "member_expression":
        chain = _property_chain(node)
        if chain is None:
            return DecoratorArgument("error", UNIDENTIFIED_NODE)
        return DecoratorArgument("propertyAccessRaw", chain)
    if kind == "object":
        return DecoratorArgument("object", _print_object(node))
    return DecoratorArgument("error", UNIDENTIFIED_NODE)


def _decorator_expression(node: Node) -> Node | None:
    expression = next(iter(named_children(node)), None)
    while expression is not None and expression.type == "parenthesized_expression":
        expression = next(iter(named_children(expression)), None)
    return expression


def _property_chain(node: Node) -> list[str] | None:
    """Flatten ``a.b.c`` into ``["a", "b", "c"]``; None unless rooted at an identifier."""
    segments: list[str] = []
    current = node
    while current.type == "member_expression":
        prop = current.child_by_field_name("property")
        obj = current.child_by_field_name("object")
        if prop is None or obj is None:
            return None
        segments.append(node_text(prop))
        current = obj
    if current.type != "identifier":
        return None
    segments.append(node_text(current))
    segments.reverse()
    return segments


def _print_object(node: Node) -> str:
    properties = [collapse(node_text(child)) for child in named_children(node)]
    if not properties:
        return "{}"
    body = ",\n".join(f"    {prop}" for prop in properties)
    return "{\n" + body + "\n}"
