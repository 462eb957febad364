"""Collect every named type reachable from an entry entity.

The traversal is a depth-first walk over an explicit stack.  Entities are
recorded before their children are visited, and an entity already present
in the dependency map is never visited twice, which is what makes cyclic
type graphs terminate.  Anonymous type literals and arrays are walked
through but never recorded.
"""

from __future__ import annotations

from dataclasses import dataclass

from typezoom.classifier import ArrayDetection, classify
from typezoom.errors import TypeResolutionError, TypezoomError, UnknownTypeError
from typezoom.host.base import TypeHost
from typezoom.model import (
    Declaration,
    DependencyMap,
    DepMapItem,
    Kind,
    Symbol,
    Type,
    entity_id,
    symbol_declaration,
    symbol_text_range,
)


@dataclass
class _Pending:
    """A type waiting to be classified.

    *origin* is the symbol blamed when the type cannot be resolved: the
    property whose type this is, or the entity whose generic argument it is.
    Property types are resolved lazily, so *type* is None until then.
    """

    origin: Symbol
    type: Type | None = None
    declaration: Declaration | None = None
    context: str | None = None


def collect_dependencies(
    symbol: Symbol,
    host: TypeHost,
    *,
    array_detection: ArrayDetection = ArrayDetection.PATH,
) -> DependencyMap:
    """Return the dependency map of the entity declared by *symbol*.

    The entity itself is not part of the result.  Any resolution failure
    aborts the whole collection with a :class:`TypeResolutionError`
    attributed to the offending property or declaration.
    """
    dependencies: DependencyMap = {}
    seen_literals: set[tuple[str, int, int]] = set()

    stack = [_Pending(symbol, type=host.get_declared_type_of_symbol(symbol))]
    while stack:
        item = stack.pop()
        try:
            type_ = item.type if item.type is not None else _property_type(item, host)
            children = _visit(item.origin, type_, host, dependencies, seen_literals, array_detection)
        except TypeResolutionError as exc:
            if exc.is_located:
                raise
            raise exc.located(item.origin, item.context) from exc
        # Reversed so that children are popped in declaration order.
        stack.extend(reversed(children))

    dependencies.pop(entity_id(symbol), None)
    return dependencies


def _property_type(item: _Pending, host: TypeHost) -> Type:
    try:
        return host.get_type_of_symbol_at_location(item.origin, item.declaration)
    except TypezoomError:
        raise
    except Exception as exc:
        raise UnknownTypeError.for_symbol(
            item.origin, f"cannot determine type: {exc}"
        ) from exc


def _visit(
    origin: Symbol,
    type_: Type,
    host: TypeHost,
    dependencies: DependencyMap,
    seen_literals: set[tuple[str, int, int]],
    array_detection: ArrayDetection,
) -> list[_Pending]:
    """Record *type_* if needed and return the types it leads to."""
    kind = classify(type_, array_detection)
    if kind.is_leaf:
        return []
    if kind.is_advanced:
        return [_Pending(origin, type=branch) for branch in type_.types]

    symbol = type_.symbol
    if symbol is None:
        raise UnknownTypeError(f"{kind.value} type has no symbol")
    if kind is Kind.TYPE_LITERAL:
        decl = symbol_declaration(symbol)
        key = (decl.file_name, decl.pos, decl.end) if decl is not None else ("", id(symbol), 0)
        if key in seen_literals:
            return []
        seen_literals.add(key)
    elif kind is not Kind.ARRAY_OF_T:
        ident = entity_id(symbol)
        if ident in dependencies:
            return []
        dependencies[ident] = DepMapItem(
            type=type_,
            kind=kind,
            file_name=ident.file_name,
            text_range=symbol_text_range(symbol),
        )

    children = [
        _Pending(origin, type=argument, context=f"type argument of {symbol.name}")
        for argument in host.get_type_arguments(type_)
    ]
    if kind in (Kind.CLASS, Kind.TYPE_LITERAL):
        for prop in host.get_properties(type_):
            if prop.value_declaration is None:
                continue
            children.append(_Pending(prop, declaration=prop.value_declaration))
    return children
