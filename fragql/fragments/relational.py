"""Relational fragments: nested statements, set operations and joins.

``SubSelect`` and ``Union`` embed whole statements.  Each one hands a fresh
:class:`~fragql.compile.builder.QueryBuilder` to a caller-supplied function,
which must return the rendered statement string (usually the result of
``builder.select(...)``).  The string and the nested builder's bound values
are captured before the constructor returns, so nothing about the nested
builder outlives construction.

Join variants
-------------
Every join direction is the same :class:`Join` fragment with a different
:class:`JoinKind`, i.e. a different pair of keywords placed around ``JOIN``:

=====================  ==============  ===========
Class                  Prefix          Suffix
=====================  ==============  ===========
``Join``               –               –
``InnerJoin``          ``INNER``       –
``OuterJoin``          ``OUTER``       –
``LeftOuterJoin``      ``LEFT OUTER``  –
``FullOuterJoin``      ``FULL OUTER``  –
``LateralCrossJoin``   ``CROSS``       ``LATERAL``
``LateralLeftJoin``    ``LEFT``        ``LATERAL``
=====================  ==============  ===========
"""
from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum
from typing import TYPE_CHECKING, Any

from fragql.errors import FragmentTypeError
from fragql.fragments.base import Sql
from fragql.fragments.basic import Column, as_column
from fragql.fragments.merge import merge_replacements

if TYPE_CHECKING:
    from fragql.compile.builder import QueryBuilder
    from fragql.config import BuilderOptions

#: A function that fills in a fresh builder and returns the statement string.
BuilderFn = Callable[["QueryBuilder"], str]


def _run_builder_fn(
    builder_fn: BuilderFn,
    options: BuilderOptions | None,
    fragment: str,
) -> tuple[str, dict[str, Any]]:
    """Run ``builder_fn`` against a fresh builder.

    Returns:
        The statement string and the nested builder's bound values.

    Raises:
        FragmentTypeError: If ``builder_fn`` does not return a string.
    """
    from fragql.compile.builder import QueryBuilder  # avoid circular import

    sub_builder = QueryBuilder(options)
    sql = builder_fn(sub_builder)
    if not isinstance(sql, str):
        raise FragmentTypeError(
            f"Nested select function must return select string, got {type(sql).__name__}.",
            fragment=fragment,
        )
    return sql, sub_builder.get_replacements()


class SubSelect(Sql):
    """A nested statement: ``(<sql>) [AS "<name>"]``.

    Args:
        builder_fn: Receives a fresh builder and returns the statement string.
        name: Optional alias, quoted like a column name.
        options: Options for the fresh builder; defaults when omitted.

    Raises:
        FragmentTypeError: If ``builder_fn`` does not return a string.
    """

    def __init__(
        self,
        builder_fn: BuilderFn,
        name: str | None = None,
        *,
        options: BuilderOptions | None = None,
    ) -> None:
        self._name = None if name is None else Column(name)
        self._sql, self._replacements = _run_builder_fn(builder_fn, options, "SubSelect")

    def to_sql(self) -> str:
        if self._name is None:
            return f"({self._sql})"
        return f"({self._sql}) AS {self._name.to_sql()}"

    def get_replacements(self) -> dict[str, Any]:
        return dict(self._replacements)


class Union(Sql):
    """Statements combined with ``UNION`` (or ``UNION <modifier>``).

    Each function in ``builder_fns`` gets its own fresh builder.  Member
    statements are emitted as returned, without brackets.

    Args:
        builder_fns: One function per member statement, in output order.
        modifier: ``"ALL"`` for ``UNION ALL``; ``None`` for the default
            (distinct) union.
        options: Options for the fresh builders; defaults when omitted.

    Raises:
        FragmentTypeError: If any function does not return a string.
    """

    def __init__(
        self,
        builder_fns: Iterable[BuilderFn],
        modifier: str | None = None,
        *,
        options: BuilderOptions | None = None,
    ) -> None:
        self._modifier = modifier
        self._subs: list[str] = []
        member_replacements: list[dict[str, Any]] = []
        for builder_fn in builder_fns:
            sql, replacements = _run_builder_fn(builder_fn, options, "Union")
            self._subs.append(sql)
            member_replacements.append(replacements)
        self._replacements = merge_replacements(*member_replacements)

    @property
    def keyword(self) -> str:
        return " ".join(filter(None, ["UNION", self._modifier]))

    def to_sql(self) -> str:
        return f" {self.keyword} ".join(self._subs)

    def get_replacements(self) -> dict[str, Any]:
        return dict(self._replacements)


# ---------------------------------------------------------------------------
# Joins
# ---------------------------------------------------------------------------


class JoinKind(Enum):
    """Keyword pair rendered around ``JOIN`` for each join direction."""

    PLAIN = ("", "")
    INNER = ("INNER", "")
    OUTER = ("OUTER", "")
    LEFT_OUTER = ("LEFT OUTER", "")
    FULL_OUTER = ("FULL OUTER", "")
    LATERAL_CROSS = ("CROSS", "LATERAL")
    LATERAL_LEFT = ("LEFT", "LATERAL")

    @property
    def prefix(self) -> str:
        return self.value[0]

    @property
    def suffix(self) -> str:
        return self.value[1]


class Join(Sql):
    """A join clause: ``[prefix] JOIN [suffix] <table> [<alias>] [ON <condition>]``.

    Args:
        table: Table name (quoted as a column name) or a fragment, typically a
            :class:`SubSelect` for lateral joins.
        condition: Optional join condition; must be a fragment, usually a
            :class:`~fragql.fragments.clauses.Where`.
        table_alias: Optional alias for the joined table.
        kind: Join direction.  The named subclasses fix this for you.

    Raises:
        FragmentTypeError: If ``condition`` is neither ``None`` nor a fragment.
    """

    default_kind = JoinKind.PLAIN

    def __init__(
        self,
        table: Sql | str,
        condition: Sql | None = None,
        table_alias: str | None = None,
        *,
        kind: JoinKind | None = None,
    ) -> None:
        if not (condition is None or isinstance(condition, Sql)):
            raise FragmentTypeError(
                "Must provide a valid WHERE clause for join condition.",
                fragment=type(self).__name__,
            )
        self._kind = kind or self.default_kind
        self._table = as_column(table)
        self._alias = None if table_alias is None else Column(table_alias)
        self._condition = condition
        self._replacements = merge_replacements(
            self._table.get_replacements(),
            condition.get_replacements() if condition is not None else None,
        )

    @property
    def kind(self) -> JoinKind:
        return self._kind

    def to_sql(self) -> str:
        buffer = [
            self._kind.prefix,
            "JOIN",
            self._kind.suffix,
            self._table.to_sql(),
            self._alias.to_sql() if self._alias is not None else "",
        ]
        if self._condition is not None:
            buffer += ["ON", self._condition.to_sql()]
        return " ".join(part for part in buffer if part)

    def get_replacements(self) -> dict[str, Any]:
        return dict(self._replacements)


class InnerJoin(Join):
    default_kind = JoinKind.INNER


class OuterJoin(Join):
    default_kind = JoinKind.OUTER


class LeftOuterJoin(Join):
    default_kind = JoinKind.LEFT_OUTER


class FullOuterJoin(Join):
    default_kind = JoinKind.FULL_OUTER


class LateralCrossJoin(Join):
    default_kind = JoinKind.LATERAL_CROSS


class LateralLeftJoin(Join):
    default_kind = JoinKind.LATERAL_LEFT
