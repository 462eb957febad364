"""Exceptions raised by typezoom."""

from __future__ import annotations

from typezoom.model import Symbol, TextRange, symbol_file_name, symbol_text_range


class TypezoomError(Exception):
    """Base class for all typezoom failures."""


class ConfigError(TypezoomError):
    """Invalid configuration value."""


class TypeResolutionError(TypezoomError):
    """A type could not be turned into dependency information.

    Carries the offending symbol's name, declaring file and text range once
    the failure has been attributed to a declaration.
    """

    def __init__(
        self,
        message: str,
        *,
        symbol_name: str | None = None,
        file_name: str | None = None,
        text_range: TextRange | None = None,
    ) -> None:
        self.reason = message
        self.symbol_name = symbol_name
        self.file_name = file_name
        self.text_range = text_range
        if symbol_name is not None:
            span = f":{text_range.pos}:{text_range.end}" if text_range else ""
            message = (
                f'Error during parsing type of identifier "{symbol_name}" '
                f'in file "{file_name}"{span}: {message}'
            )
        super().__init__(message)

    @property
    def is_located(self) -> bool:
        return self.symbol_name is not None

    @classmethod
    def for_symbol(cls, symbol: Symbol, message: str) -> TypeResolutionError:
        return cls(
            message,
            symbol_name=symbol.name,
            file_name=symbol_file_name(symbol),
            text_range=symbol_text_range(symbol),
        )

    def located(self, symbol: Symbol, context: str | None = None) -> TypeResolutionError:
        """Return a copy of this error attributed to *symbol*."""
        reason = f"{self.reason} (in {context})" if context else self.reason
        return type(self).for_symbol(symbol, reason)


class UnresolvedTypeError(TypeResolutionError):
    """A type reference resolved to an error type (e.g. a broken import)."""


class UnknownTypeError(TypeResolutionError):
    """A property's type could not be determined or classified."""
