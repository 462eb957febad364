"""Turn collected entities into portable records."""

from __future__ import annotations

from typing import Any, Callable

from typezoom.classifier import ArrayDetection, is_array_type, is_primitive_type
from typezoom.errors import UnknownTypeError
from typezoom.host.base import TypeHost
from typezoom.model import (
    DecoratorRecord,
    DepMapItem,
    EnumMemberRecord,
    Kind,
    SerializedEntity,
    SerializedMember,
    SerializedSymbol,
    Symbol,
    Type,
    flag_names,
)

# Serializes one raw decorator node, or returns None to leave it out.
DecoratorSerializer = Callable[[Any], "DecoratorRecord | None"]


class EntitySerializer:
    """Serialize entities and their members against a :class:`TypeHost`.

    Serialization never traverses: it describes exactly the symbol it is
    given.  Symbols without a value declaration keep ``type`` and ``text``
    as ``None`` instead of being dropped.
    """

    def __init__(
        self,
        host: TypeHost,
        decorator_serializer: DecoratorSerializer | None = None,
        array_detection: ArrayDetection = ArrayDetection.PATH,
    ) -> None:
        self.host = host
        self.decorator_serializer = decorator_serializer
        self.array_detection = array_detection

    def serialize_dependency(self, item: DepMapItem) -> SerializedEntity:
        symbol = item.type.symbol
        if symbol is None:
            raise UnknownTypeError(f"dependency {item.file_name} has no symbol")
        if item.kind is Kind.REGULAR_ENUM:
            return self.serialize_enum(symbol)
        return self.serialize_class(symbol)

    def serialize_class(self, symbol: Symbol) -> SerializedEntity:
        """Describe *symbol* and every one of its own members, in order."""
        members: list[SerializedMember | EnumMemberRecord] = [
            self.serialize_member(member) for member in symbol.members.values()
        ]
        return SerializedEntity(
            **self._describe(symbol, self._type_at_declaration(symbol)),
            kind=Kind.CLASS.value,
            members=members,
        )

    def serialize_enum(self, symbol: Symbol) -> SerializedEntity:
        """Describe enum *symbol* with the runtime value of every member."""
        enum_type = self.host.get_declared_type_of_symbol(symbol)
        members: list[SerializedMember | EnumMemberRecord] = []
        for literal in enum_type.types:
            if literal.symbol is None:
                continue
            members.append(
                EnumMemberRecord(
                    symbol=SerializedSymbol(**self._describe(literal.symbol, literal)),
                    value=literal.value,
                )
            )
        return SerializedEntity(
            **self._describe(symbol, self._type_at_declaration(symbol)),
            kind=Kind.REGULAR_ENUM.value,
            members=members,
        )

    def serialize_member(self, symbol: Symbol) -> SerializedMember:
        type_ = self._type_at_declaration(symbol)
        type_arguments = None
        is_array = False
        if type_ is not None:
            type_arguments = [
                self.host.type_to_string(arg) for arg in self.host.get_type_arguments(type_)
            ] or None
            is_array = is_array_type(type_, self.array_detection)
        return SerializedMember(
            **self._describe(symbol, type_),
            type_arguments=type_arguments,
            is_array=is_array,
        )

    def _type_at_declaration(self, symbol: Symbol) -> Type | None:
        if symbol.value_declaration is None:
            return None
        return self.host.get_type_of_symbol_at_location(symbol, symbol.value_declaration)

    def _describe(self, symbol: Symbol, type_: Type | None) -> dict[str, Any]:
        decl = symbol.value_declaration
        return {
            "name": symbol.name,
            "type": self.host.type_to_string(type_) if type_ is not None else None,
            "is_primitive": type_ is not None and is_primitive_type(type_),
            "text": decl.text if decl is not None else None,
            "symbol_type": flag_names(symbol.flags),
            "decorators": self._decorators(symbol),
        }

    def _decorators(self, symbol: Symbol) -> list[DecoratorRecord]:
        decl = symbol.value_declaration
        if self.decorator_serializer is None or decl is None:
            return []
        records = []
        for node in decl.decorators:
            record = self.decorator_serializer(node)
            if record is not None:
                records.append(record)
        return records
