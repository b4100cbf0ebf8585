"""Logical connectives: ``And`` and ``Or``."""
from __future__ import annotations

from typing import Any, ClassVar

from fragql.fragments.base import Sql
from fragql.fragments.merge import (
    concat_possible_sql_list,
    render_item,
    sql_list_to_replacements,
)


class Joinder(Sql):
    """Base for a group of conditions joined by one logical keyword.

    A single condition renders alone, without brackets.  Two or more render
    bracketed and joined by :attr:`term`, e.g. ``(a AND b AND c)``.
    Conditions may be fragments or raw SQL strings.
    """

    term: ClassVar[str] = ""

    def __init__(self, *conditions: Sql | str) -> None:
        self._conditions = conditions

    def to_sql(self) -> str:
        if not self._conditions:
            return ""
        if len(self._conditions) == 1:
            return render_item(self._conditions[0])
        return f"({concat_possible_sql_list(self._conditions, f' {self.term} ')})"

    def get_replacements(self) -> dict[str, Any]:
        return sql_list_to_replacements(self._conditions)

    def __len__(self) -> int:
        return len(self._conditions)


class And(Joinder):
    term = "AND"


class Or(Joinder):
    term = "OR"
