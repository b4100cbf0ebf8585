"""``CASE`` expressions built from ``When`` and ``Else`` branches."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from fragql.errors import FragmentTypeError
from fragql.fragments.base import Sql
from fragql.fragments.basic import Column
from fragql.fragments.clauses import Where
from fragql.fragments.merge import concat_possible_sql_list, merge_replacements
from fragql.fragments.relational import SubSelect


class When(Sql):
    """``WHEN <condition> THEN (<sub-select>)``.

    Raises:
        FragmentTypeError: Unless built from a :class:`Where` and a
            :class:`SubSelect`.
    """

    def __init__(self, condition: Where, select: SubSelect) -> None:
        if not isinstance(condition, Where) or not isinstance(select, SubSelect):
            raise FragmentTypeError(
                "When clause must be constructed from a WHERE and a SUBSELECT clause.",
                fragment="When",
            )
        self._condition = condition
        self._select = select
        self._replacements = merge_replacements(
            condition.get_replacements(), select.get_replacements()
        )

    def to_sql(self) -> str:
        return f"WHEN {self._condition.to_sql()} THEN {self._select.to_sql()}"

    def get_replacements(self) -> dict[str, Any]:
        return dict(self._replacements)


class Else(Sql):
    """``ELSE (<sub-select>)``.

    Raises:
        FragmentTypeError: Unless built from a :class:`SubSelect`.
    """

    def __init__(self, select: SubSelect) -> None:
        if not isinstance(select, SubSelect):
            raise FragmentTypeError(
                "Else clause must be constructed from a SUBSELECT clause.",
                fragment="Else",
            )
        self._select = select

    def to_sql(self) -> str:
        return f"ELSE {self._select.to_sql()}"

    def get_replacements(self) -> dict[str, Any]:
        return self._select.get_replacements()


class Case(Sql):
    """``CASE <when>... [<else>] END AS "<name>"``.

    Args:
        name: Name of the resulting column.
        when_branches: :class:`When` branches, rendered in order.
        else_branch: Optional :class:`Else` branch.

    Raises:
        FragmentTypeError: If a branch has the wrong type.
    """

    When = When
    Else = Else

    def __init__(
        self,
        name: str,
        when_branches: Iterable[When],
        else_branch: Else | None = None,
    ) -> None:
        self._whens = list(when_branches)
        if not all(isinstance(branch, When) for branch in self._whens):
            raise FragmentTypeError(
                "Case branches must be When clauses.", fragment="Case"
            )
        if not (else_branch is None or isinstance(else_branch, Else)):
            raise FragmentTypeError(
                "Case else branch must be an Else clause.", fragment="Case"
            )
        self._name = Column(name)
        self._else = else_branch
        self._replacements = merge_replacements(
            *(branch.get_replacements() for branch in self._whens),
            else_branch.get_replacements() if else_branch is not None else None,
        )

    def to_sql(self) -> str:
        buffer = ["CASE", concat_possible_sql_list(self._whens, " ")]
        if self._else is not None:
            buffer.append(self._else.to_sql())
        buffer += ["END AS", self._name.to_sql()]
        return " ".join(part for part in buffer if part)

    def get_replacements(self) -> dict[str, Any]:
        return dict(self._replacements)
