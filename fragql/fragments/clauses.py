"""Query-level fragments: filter conditions and projected columns."""
from __future__ import annotations

from typing import Any

from fragql.fragments.base import Sql
from fragql.fragments.basic import as_column
from fragql.fragments.merge import merge_replacements
from fragql.fragments.naming import WHERE_TAG, new_placeholder, placeholder_token


class Where(Sql):
    """A filter condition for a ``WHERE`` (or ``ON`` / ``WHEN``) clause.

    The default shape compares a column against a static value that is bound
    through a placeholder.  The left side may also be any fragment, and
    leaving out the right side lets a fragment stand as the whole condition,
    e.g. ``WHERE my_func(...)``.

    Args:
        left: A column name (quoted as a :class:`~fragql.fragments.basic.Column`)
            or a fragment rendered as-is.
        right: The value to compare against.  A plain value is bound through a
            new placeholder, a fragment is rendered as-is, and ``None`` leaves
            the right side out.  Use :class:`~fragql.fragments.basic.Null` to
            compare against SQL ``NULL``.
        operator: Any SQL operator yielding a boolean for the operands
            (``=``, ``<``, ``IS NOT``, ``&&``, ...).  ``None`` leaves the
            operator out.  The operator is only rendered when there is a right
            side.  With ``None`` and a right side, the two sides are joined
            by a single space, so a right-hand fragment can carry its own
            operator: ``Where("price", Raw("BETWEEN 1 AND 5"), None)``
            renders ``"price" BETWEEN 1 AND 5``.  A bare right value still
            gets its placeholder, giving ``"price" :where1a2b3c4d``.
        prefix: Optional keyword rendered before the condition (e.g. ``NOT``).
        suffix: Optional text rendered after the condition.
    """

    def __init__(
        self,
        left: Sql | str,
        right: Any = None,
        operator: str | None = "=",
        *,
        prefix: str = "",
        suffix: str = "",
    ) -> None:
        self._prefix = prefix
        self._suffix = suffix
        self._left = as_column(left)
        self._right: Sql | str | None = None
        right_replacements: dict[str, Any] = {}

        if isinstance(right, Sql):
            self._right = right
            right_replacements = right.get_replacements()
        elif right is not None:
            ident = new_placeholder(WHERE_TAG)
            right_replacements = {ident: right}
            self._right = placeholder_token(ident)

        self._operator = operator
        self._replacements = merge_replacements(
            self._left.get_replacements(), right_replacements
        )

    def to_sql(self) -> str:
        buffer = [self._prefix, self._left.to_sql()]
        if self._right is not None:
            if self._operator is not None:
                buffer.append(self._operator)
            buffer.append(
                self._right.to_sql() if isinstance(self._right, Sql) else self._right
            )
        buffer.append(self._suffix)
        return " ".join(part for part in buffer if part)

    def get_replacements(self) -> dict[str, Any]:
        return dict(self._replacements)


class Select(Sql):
    """A selected column with an optional alias: ``<column> [as <alias>]``.

    Use it instead of a bare string to alias a column, or to select any other
    fragment (function calls and aggregates get awkward default names, so an
    alias is recommended for those).
    """

    def __init__(self, column: Sql | str, alias: str | None = None) -> None:
        self._column = as_column(column)
        self._alias = alias

    def to_sql(self) -> str:
        if self._alias is None:
            return self._column.to_sql()
        return f"{self._column.to_sql()} as {self._alias}"

    def get_replacements(self) -> dict[str, Any]:
        return self._column.get_replacements()
