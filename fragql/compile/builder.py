"""Statement assembly: fragments → SQL text plus bound values.

``QueryBuilder`` collects fragments into clause slots and renders them in a
fixed order.  Rendering only reads the slots, so a builder can be rendered,
extended and rendered again; nothing is ever removed from a slot.

Clause order
------------
``SELECT <fields> [FROM] [JOIN...] [WHERE] [GROUP BY] [ORDER BY] [LIMIT] [OFFSET]``

``DELETE [FROM] WHERE``.  A delete without at least one filter is refused.

Filters
-------
Every ``where`` call adds one condition; the ``WHERE`` clause is a single
implicit :class:`~fragql.fragments.logic.And` over all of them, so two or more
filters are bracketed: ``WHERE ("id" = :where1a2b3c4d AND "deleted_at" IS NULL)``.

Shortcuts
---------
Fragment classes are reachable from the builder class, which keeps nested
call sites short::

    QB = QueryBuilder
    sql = (
        QueryBuilder()
        .table("apartments")
        .join(QB.Join("apartment_types", QB.Where("at.id", QB.Column("apartments.type_id")), "at"))
        .where(QB.Fn("model_is_available", "foo", "bar"), None, None)
        .select("apartments.*")
    )
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from fragql.compile.base import CompiledSQL
from fragql.config import DEFAULT_OPTIONS, BuilderOptions
from fragql.errors import FragmentTypeError, UsageError
from fragql.fragments import (
    And,
    Case,
    Cast,
    Column,
    Else,
    Fn,
    FullOuterJoin,
    InnerJoin,
    Join,
    LateralCrossJoin,
    LateralLeftJoin,
    LeftOuterJoin,
    Literal,
    Null,
    Or,
    OuterJoin,
    Raw,
    Select,
    Sql,
    SubSelect,
    Union,
    When,
    Where,
    as_column,
)
from fragql.fragments.merge import (
    concat_possible_sql_list,
    merge_replacements,
    sql_list_to_replacements,
)
from fragql.fragments.relational import BuilderFn

logger = logging.getLogger("fragql.compile")

#: Key marking a mapping as a pre-built function call in ``fields``.
FN_CALL_KEY = "fn_call"


class QueryBuilder:
    """Mutable accumulator that renders one SELECT or DELETE statement.

    Args:
        options: Builder options; :data:`~fragql.config.DEFAULT_OPTIONS` when
            omitted.
    """

    # Fragment shortcuts: QueryBuilder.Where(...), QueryBuilder.Fn(...), ...
    Where = Where
    Column = Column
    Literal = Literal
    Raw = Raw
    Select = Select
    SubSelect = SubSelect
    Fn = Fn
    Null = Null
    Cast = Cast
    And = And
    Or = Or
    Case = Case
    When = When
    Else = Else
    Join = Join
    InnerJoin = InnerJoin
    OuterJoin = OuterJoin
    LeftOuterJoin = LeftOuterJoin
    FullOuterJoin = FullOuterJoin
    LateralCrossJoin = LateralCrossJoin
    LateralLeftJoin = LateralLeftJoin
    Union = Union

    @staticmethod
    def UnionAll(*builder_fns: BuilderFn) -> Union:  # noqa: N802
        return Union(builder_fns, "ALL")

    @staticmethod
    def UnionDistinct(*builder_fns: BuilderFn) -> Union:  # noqa: N802
        return Union(builder_fns)

    def __init__(self, options: BuilderOptions | None = None) -> None:
        self._options = options if options is not None else DEFAULT_OPTIONS
        self._from: Sql | None = None
        self._select: list[Any] = []
        self._where: list[Where] = []
        self._join: list[Join] = []
        self._order: list[Any] = []
        self._group_by: list[Any] = []
        self._limit: int | None = None
        self._offset: int | None = None
        self._replacements: dict[str, Any] = {}

    @property
    def options(self) -> BuilderOptions:
        return self._options

    # ------------------------------------------------------------------
    # Slot mutators (all chainable)
    # ------------------------------------------------------------------

    def table(self, name: Sql | str) -> QueryBuilder:
        """Set the ``FROM`` target: a table name or a fragment."""
        self._from = as_column(name)
        return self

    def fields(self, *fields: Any) -> QueryBuilder:
        """Append columns to the select list.

        Each field may be a column name, a fragment, a
        ``{"fn_call": <fragment>, "replacements": {...}}`` mapping, or
        ``None`` (skipped).  Anything else is rendered with ``str()``.
        """
        for field in fields:
            processed = self._process_selected_field(field)
            if processed is not None:
                self._select.append(processed)
        return self

    def where(
        self,
        left: Where | Sql | str,
        right: Any = None,
        operator: str | None = "=",
    ) -> QueryBuilder:
        """Add a filter.

        A ready-made :class:`~fragql.fragments.clauses.Where` is added as-is
        and the other arguments are ignored.  Otherwise the arguments build a
        new ``Where``; see that class for their meaning.
        """
        if isinstance(left, Where):
            self._where.append(left)
        else:
            self._where.append(Where(left, right, operator))
        return self

    def join(self, *args: Any) -> QueryBuilder:
        """Add a join clause.

        Called with one argument, it must be a :class:`~fragql.fragments.relational.Join`
        (any direction).  Called with more, the arguments build a plain
        ``Join(table, condition, table_alias)``.

        Raises:
            FragmentTypeError: If no argument or a single non-join argument
                is given.
        """
        if not args:
            raise FragmentTypeError(
                "Cannot create JOIN without a join or a table.", fragment="Join"
            )
        if len(args) == 1:
            (join,) = args
            if not isinstance(join, Join):
                raise FragmentTypeError(
                    "Cannot use non-join object to directly create JOIN.",
                    fragment="Join",
                )
            self._join.append(join)
        else:
            self._join.append(Join(*args))
        return self

    def limit(self, number: int) -> QueryBuilder:
        """Set the row limit, clamped to ``options.max_limit`` when set."""
        clamped = self._options.clamp_limit(number)
        if clamped != number:
            logger.info("LIMIT %d clamped to max_limit %d", number, clamped)
        self._limit = clamped
        return self

    def offset(self, number: int) -> QueryBuilder:
        self._offset = number
        return self

    def order(self, *clauses: Sql | str) -> QueryBuilder:
        """Append ORDER BY clauses; strings are emitted verbatim (``"id DESC"``)."""
        self._order.extend(clauses)
        return self

    def group_by(self, *clauses: Sql | str) -> QueryBuilder:
        """Append GROUP BY clauses; strings are emitted verbatim."""
        self._group_by.extend(clauses)
        return self

    def paranoid(self, field_name: str | None = None) -> QueryBuilder:
        """Exclude soft-deleted rows: ``<field_name> IS NULL``.

        Paranoid tables mark a row deleted by setting a timestamp rather than
        removing it.

        Args:
            field_name: The timestamp column; ``options.paranoid_column``
                (``deleted_at`` by default) when omitted.
        """
        if field_name is None:
            field_name = self._options.paranoid_column
        return self.where(field_name, Null(), "IS")

    # ------------------------------------------------------------------
    # Nested statements sharing this builder's options
    # ------------------------------------------------------------------

    def sub_select(self, builder_fn: BuilderFn, name: str | None = None) -> SubSelect:
        """Build a :class:`~fragql.fragments.relational.SubSelect` with these options."""
        return SubSelect(builder_fn, name, options=self._options)

    def union(
        self, builder_fns: Iterable[BuilderFn], modifier: str | None = None
    ) -> Union:
        """Build a :class:`~fragql.fragments.relational.Union` with these options."""
        return Union(builder_fns, modifier, options=self._options)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def select(self, *fields: Any) -> str:
        """Append ``fields`` (see :meth:`fields`) and render the SELECT statement.

        Returns:
            The SQL string.  Bound values are available from
            :meth:`get_replacements`.
        """
        self.fields(*fields)
        limit = self._limit if self._limit is not None else self._options.default_limit
        parts = [
            "SELECT",
            concat_possible_sql_list(self._select) if self._select else "*",
            self._generate_from(),
            concat_possible_sql_list(self._join, " "),
            self._generate_where(),
            self._generate_list("GROUP BY", self._group_by),
            self._generate_list("ORDER BY", self._order),
            "" if limit is None else f"LIMIT {limit}",
            "" if self._offset is None else f"OFFSET {self._offset}",
        ]
        sql = " ".join(part for part in parts if part).strip()
        self._log_rendered("SELECT")
        return sql

    def delete(self) -> str:
        """Render the DELETE statement.

        Raises:
            UsageError: If no filter has been added.  An unfiltered delete
                would empty the whole table.
        """
        if not self._where:
            logger.warning("Refusing to render DELETE without a condition")
            raise UsageError(
                "Can not create delete statement without at least one condition.",
                statement="DELETE",
            )
        parts = ["DELETE", self._generate_from(), self._generate_where()]
        sql = " ".join(part for part in parts if part).strip()
        self._log_rendered("DELETE")
        return sql

    def compile_select(self, *fields: Any) -> CompiledSQL:
        """Like :meth:`select`, returning text and bound values together."""
        sql = self.select(*fields)
        return CompiledSQL(sql=sql, params=self.get_replacements())

    def compile_delete(self) -> CompiledSQL:
        """Like :meth:`delete`, returning text and bound values together."""
        sql = self.delete()
        return CompiledSQL(sql=sql, params=self.get_replacements())

    def get_replacements(self) -> dict[str, Any]:
        """Return every bound value of every fragment added to this builder.

        Merge order: values from ``fn_call`` mappings, FROM target, fields,
        joins, filters, ORDER BY, GROUP BY.
        """
        return merge_replacements(
            self._replacements,
            self._from.get_replacements() if self._from is not None else None,
            sql_list_to_replacements(self._select),
            sql_list_to_replacements(self._join),
            sql_list_to_replacements(self._where),
            sql_list_to_replacements(self._order),
            sql_list_to_replacements(self._group_by),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _process_selected_field(self, field: Any) -> Sql | str | None:
        if field is None:
            return None
        if isinstance(field, str):
            return Column(field)
        if isinstance(field, Mapping) and FN_CALL_KEY in field:
            self._replacements.update(field.get("replacements") or {})
            return field[FN_CALL_KEY]
        if isinstance(field, Sql):
            return field
        return str(field)

    def _log_rendered(self, statement: str) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Rendered %s with %d bound value(s)", statement, len(self.get_replacements())
            )

    def _generate_from(self) -> str:
        if self._from is None:
            return ""
        return f"FROM {self._from.to_sql()}"

    def _generate_where(self) -> str:
        if not self._where:
            return ""
        return f"WHERE {And(*self._where).to_sql()}"

    @staticmethod
    def _generate_list(keyword: str, items: list[Any]) -> str:
        if not items:
            return ""
        return f"{keyword} {concat_possible_sql_list(items)}"
