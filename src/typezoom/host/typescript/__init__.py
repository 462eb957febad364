"""Type host for TypeScript sources, built on tree-sitter."""

from __future__ import annotations

from typezoom.host.typescript.lib import LIB_FILE_NAME
from typezoom.host.typescript.program import TypeScriptProgram, create_program

__all__ = ["LIB_FILE_NAME", "TypeScriptProgram", "create_program"]
