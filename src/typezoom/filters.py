"""Ready-made entry filters."""

from __future__ import annotations

from typing import Callable

from typezoom.decorators import decorator_name
from typezoom.model import Declaration

EntryFilter = Callable[[Declaration], bool]


def is_decorated_by(*names: str) -> EntryFilter:
    """Select class declarations carrying a decorator named one of *names*."""
    wanted = frozenset(names)

    def _filter(declaration: Declaration) -> bool:
        return any(decorator_name(node) in wanted for node in declaration.decorators)

    return _filter
