"""Language-agnostic data model for type dependency graphs."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, NamedTuple

# Member names used for index signatures; they never collide with real
# property names because they are not valid identifiers in the source.
NUMBER_INDEX_MEMBER = "__numberIndex"
STRING_INDEX_MEMBER = "__stringIndex"
CONSTRUCTOR_MEMBER = "__constructor"
TYPE_LITERAL_NAME = "__type"


class SymbolFlags(enum.IntFlag):
    """What a declared name stands for."""

    NONE = 0
    PROPERTY = 1 << 0
    ENUM_MEMBER = 1 << 1
    METHOD = 1 << 2
    CONSTRUCTOR = 1 << 3
    CLASS = 1 << 4
    INTERFACE = 1 << 5
    REGULAR_ENUM = 1 << 6
    TYPE_LITERAL = 1 << 7
    TYPE_PARAMETER = 1 << 8
    TYPE_ALIAS = 1 << 9
    INDEX_SIGNATURE = 1 << 10


class TypeFlags(enum.IntFlag):
    """Shape of a resolved type."""

    NONE = 0
    ANY = 1 << 0
    PRIMITIVE = 1 << 1
    LITERAL = 1 << 2
    ENUM = 1 << 3
    ENUM_LITERAL = 1 << 4
    OBJECT = 1 << 5
    UNION = 1 << 6
    INTERSECTION = 1 << 7
    TYPE_PARAMETER = 1 << 8
    ERROR = 1 << 9


def flag_names(flags: enum.IntFlag) -> str:
    """Return ``"A|B"`` for the single-bit members set in *flags*."""
    names = [
        member.name
        for member in type(flags)
        if member.value and member.name and (flags & member) == member
    ]
    return "|".join(names) or "NONE"


@dataclass(eq=False)
class Declaration:
    """A syntactic declaration of a symbol in some source file."""

    kind: str  # "class", "interface", "enum", "type_alias", "property", ...
    name: str | None
    file_name: str
    pos: int
    end: int
    text: str
    node: Any = field(default=None, repr=False)  # raw syntax node
    decorators: list[Any] = field(default_factory=list, repr=False)
    parent: Declaration | None = field(default=None, repr=False)


@dataclass(eq=False)
class Symbol:
    """A named entity: class, enum, property, method, type literal, ..."""

    name: str
    flags: SymbolFlags
    declarations: list[Declaration] = field(default_factory=list, repr=False)
    value_declaration: Declaration | None = field(default=None, repr=False)
    members: dict[str, Symbol] = field(default_factory=dict, repr=False)
    parent: Symbol | None = field(default=None, repr=False)


@dataclass(eq=False)
class Type:
    """A resolved type occurrence."""

    flags: TypeFlags
    symbol: Symbol | None = None
    name: str = ""  # display name for intrinsic, literal and opaque types
    types: list[Type] = field(default_factory=list, repr=False)
    type_arguments: list[Type] | None = field(default=None, repr=False)
    target: Type | None = field(default=None, repr=False)
    value: str | int | float | None = None  # runtime value of literal types


@dataclass
class SourceFile:
    """A parsed source file and its top-level declarations."""

    file_name: str
    is_declaration_file: bool
    declarations: list[Declaration] = field(default_factory=list)


class EntityId(NamedTuple):
    """Identity of an entity: the file declaring it and its name."""

    file_name: str
    name: str

    def __str__(self) -> str:
        return f"{self.file_name}-{self.name}"


class TextRange(NamedTuple):
    pos: int
    end: int


def symbol_declaration(symbol: Symbol) -> Declaration | None:
    """Return the value declaration of *symbol*, else its first declaration."""
    if symbol.value_declaration is not None:
        return symbol.value_declaration
    if symbol.declarations:
        return symbol.declarations[0]
    return None


def symbol_file_name(symbol: Symbol) -> str | None:
    decl = symbol_declaration(symbol)
    return decl.file_name if decl is not None else None


def symbol_text_range(symbol: Symbol) -> TextRange | None:
    decl = symbol_declaration(symbol)
    return TextRange(decl.pos, decl.end) if decl is not None else None


def entity_id(symbol: Symbol) -> EntityId:
    """Dedup key of *symbol* in a dependency map."""
    return EntityId(symbol_file_name(symbol) or "", symbol.name)


class Kind(enum.Enum):
    """Closed classification of a type for traversal and recording."""

    PRIMITIVE = "primitive"
    CLASS = "class"
    REGULAR_ENUM = "enum"
    TYPE_LITERAL = "type_literal"
    ARRAY_OF_T = "array"
    METHOD = "method"
    UNION = "union"
    INTERSECTION = "intersection"
    UNSUPPORTED = "unsupported"

    @property
    def is_advanced(self) -> bool:
        return self in (Kind.UNION, Kind.INTERSECTION)

    @property
    def is_leaf(self) -> bool:
        return self in (Kind.PRIMITIVE, Kind.METHOD, Kind.UNSUPPORTED)


@dataclass
class DepMapItem:
    """One recorded dependency."""

    type: Type
    kind: Kind
    file_name: str
    text_range: TextRange | None


DependencyMap = dict[EntityId, DepMapItem]


# ---------------------------------------------------------------------------
# Serialized output
# ---------------------------------------------------------------------------


@dataclass
class DecoratorArgument:
    """One decorator argument, tagged by *type*."""

    type: str  # "string literal", "numeric literal", "boolean", ...
    value: Any = None


@dataclass
class DecoratorRecord:
    name: str
    args: list[DecoratorArgument] = field(default_factory=list)


@dataclass
class SerializedSymbol:
    """Descriptor shared by entities and members.

    ``type`` and ``text`` are ``None`` when the symbol has no value
    declaration.
    """

    name: str
    type: str | None
    is_primitive: bool
    text: str | None
    symbol_type: str
    decorators: list[DecoratorRecord] = field(default_factory=list)


@dataclass
class SerializedMember(SerializedSymbol):
    type_arguments: list[str] | None = None
    is_array: bool = False


@dataclass
class EnumMemberRecord:
    symbol: SerializedSymbol
    value: str | int | float | None


@dataclass
class SerializedEntity(SerializedSymbol):
    kind: str = Kind.CLASS.value
    members: list[SerializedMember | EnumMemberRecord] = field(default_factory=list)


@dataclass
class EntryResult:
    root: SerializedEntity
    dependencies: list[SerializedEntity] = field(default_factory=list)


@dataclass
class FileResult:
    file_name: str
    results: list[EntryResult] = field(default_factory=list)
