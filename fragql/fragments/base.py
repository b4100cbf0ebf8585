"""The fragment capability shared by every SQL node.

A fragment renders itself to SQL text with :meth:`Sql.to_sql` and reports the
values bound to the placeholders in that text with
:meth:`Sql.get_replacements`.  Passing a fragment anywhere the
:class:`~fragql.compile.builder.QueryBuilder` accepts a value makes the
builder use the fragment's own serialization instead of its default
interpretation for that position.

Fragments are immutable once constructed: both methods may be called any
number of times and always return the same result.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Sql(ABC):
    """Abstract base for all SQL fragments."""

    @abstractmethod
    def to_sql(self) -> str:
        """Return the SQL text for this fragment, with ``:name`` placeholders."""

    def get_replacements(self) -> dict[str, Any]:
        """Return a fresh mapping from placeholder name to bound value."""
        return {}

    def __str__(self) -> str:
        return self.to_sql()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_sql()!r})"
