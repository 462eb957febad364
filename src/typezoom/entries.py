"""Pick entry entities out of a source file."""

from __future__ import annotations

from typezoom.filters import EntryFilter
from typezoom.model import Declaration, SourceFile

_ENTRY_KINDS = frozenset({"class"})


def select_entries(
    source_file: SourceFile, entry_filter: EntryFilter | None = None
) -> list[Declaration]:
    """Return the named class declarations of *source_file* accepted by *entry_filter*.

    Declaration files never contribute entries, and without a filter
    nothing is selected.  The filter sees the whole :class:`Declaration`,
    raw syntax node and decorators included.
    """
    if source_file.is_declaration_file or entry_filter is None:
        return []
    return [
        decl
        for decl in source_file.declarations
        if decl.kind in _ENTRY_KINDS and decl.name and entry_filter(decl)
    ]
