"""Classify resolved types into the closed set of :class:`~typezoom.model.Kind`."""

from __future__ import annotations

import enum

from typezoom.errors import UnresolvedTypeError
from typezoom.model import (
    NUMBER_INDEX_MEMBER,
    Kind,
    SymbolFlags,
    Type,
    TypeFlags,
    flag_names,
    symbol_file_name,
)

ARRAY_LIB_FILE_SUFFIX = "lib.es5.d.ts"
_ARRAY_NAMES = frozenset({"Array", "ReadonlyArray"})


class ArrayDetection(enum.Enum):
    """How the built-in array type is recognised."""

    PATH = "path"
    STRUCTURAL = "structural"


def is_primitive_type(type_: Type) -> bool:
    """True for a type with no declared entity that is not a union/intersection."""
    return type_.symbol is None and not _is_advanced(type_)


def is_array_type(type_: Type, detection: ArrayDetection = ArrayDetection.PATH) -> bool:
    symbol = type_.symbol
    if symbol is None:
        return False
    if detection is ArrayDetection.STRUCTURAL:
        if not symbol.flags & (SymbolFlags.CLASS | SymbolFlags.INTERFACE):
            return False
        return "length" in symbol.members and NUMBER_INDEX_MEMBER in symbol.members
    file_name = symbol_file_name(symbol)
    return (
        symbol.name in _ARRAY_NAMES
        and file_name is not None
        and file_name.endswith(ARRAY_LIB_FILE_SUFFIX)
    )


def classify(type_: Type, array_detection: ArrayDetection = ArrayDetection.PATH) -> Kind:
    """Return the :class:`Kind` of *type_*.

    Raises :class:`UnresolvedTypeError` for erroneous types so that a broken
    reference never passes as an unsupported leaf.
    """
    if type_.flags & TypeFlags.ERROR:
        raise UnresolvedTypeError(
            f'cannot resolve type "{type_.name}" (flags: {flag_names(type_.flags)})'
        )

    symbol = type_.symbol
    if symbol is None:
        if _is_advanced(type_):
            return Kind.UNION if type_.flags & TypeFlags.UNION else Kind.INTERSECTION
        return Kind.PRIMITIVE

    if not symbol.declarations and symbol.value_declaration is None:
        return Kind.UNSUPPORTED

    # Array is itself declared as a generic interface; test it first.
    if is_array_type(type_, array_detection):
        return Kind.ARRAY_OF_T

    flags = symbol.flags
    if flags & SymbolFlags.METHOD:
        return Kind.METHOD
    if flags & (SymbolFlags.CLASS | SymbolFlags.INTERFACE):
        return Kind.CLASS
    if flags & SymbolFlags.REGULAR_ENUM:
        return Kind.REGULAR_ENUM
    if flags & SymbolFlags.TYPE_LITERAL:
        return Kind.TYPE_LITERAL
    return Kind.UNSUPPORTED


def _is_advanced(type_: Type) -> bool:
    return bool(type_.flags & (TypeFlags.UNION | TypeFlags.INTERSECTION)) and len(type_.types) >= 2
