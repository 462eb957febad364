"""Type hosts: sources of symbol and type information."""

from __future__ import annotations

from typezoom.host.base import SourceProvider, TypeHost

__all__ = ["SourceProvider", "TypeHost"]
