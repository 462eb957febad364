"""Type host protocol: every source of type information conforms to this."""

from __future__ import annotations

from typing import Callable, Protocol

from typezoom.model import Declaration, SourceFile, Symbol, Type

# Returns the text of *file_name*, or None to fall back to the file system.
SourceProvider = Callable[[str], "str | None"]


class TypeHost(Protocol):
    """Read-only view of a fully loaded, typed program."""

    def get_source_files(self) -> list[SourceFile]:
        """Return every source file of the program in load order."""
        ...

    def get_symbol_of_declaration(self, declaration: Declaration) -> Symbol | None:
        ...

    def get_properties(self, type_: Type) -> list[Symbol]:
        """Return the properties and methods of *type_*, inherited ones included."""
        ...

    def get_declared_type_of_symbol(self, symbol: Symbol) -> Type:
        ...

    def get_type_of_symbol_at_location(
        self, symbol: Symbol, declaration: Declaration
    ) -> Type:
        ...

    def get_type_arguments(self, type_: Type) -> list[Type]:
        ...

    def type_to_string(self, type_: Type) -> str:
        ...
