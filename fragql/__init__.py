"""fragQL – composable, parameterized SQL fragments.

Build Queries. Don't Concatenate Them.

Public API
----------
``QueryBuilder``
    Collects fragments into clause slots and renders a SELECT or DELETE
    statement with ``:name`` placeholders.  ``get_replacements()`` returns
    the values to bind.

Fragments
---------
``Column``, ``Literal``, ``Null``, ``Raw``, ``Cast``, ``Fn``, ``And``, ``Or``,
``Where``, ``Select``, ``SubSelect``, ``Union``, ``Join`` (and its direction
variants), ``Case``, ``When`` and ``Else``.

Example::

    from fragql import QueryBuilder

    compiled = (
        QueryBuilder()
        .table("users")
        .where("id", user_id)
        .paranoid()
        .compile_select("id", "email")
    )
    # SELECT "id", "email" FROM "users" WHERE ("id" = :where3fa9c01b AND "deleted_at" IS NULL)
    rows = conn.execute(compiled.to_text(), compiled.params).all()
"""

from __future__ import annotations

from fragql.compile.base import CompiledSQL
from fragql.compile.builder import QueryBuilder
from fragql.config import DEFAULT_OPTIONS, BuilderOptions
from fragql.errors import ConfigError, FragmentTypeError, FragQLError, UsageError
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
    JoinKind,
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
)

__all__ = [
    # Builder
    "QueryBuilder",
    "CompiledSQL",
    # Configuration
    "BuilderOptions",
    "DEFAULT_OPTIONS",
    # Fragments
    "Sql",
    "Column",
    "Literal",
    "Null",
    "Raw",
    "Cast",
    "Fn",
    "And",
    "Or",
    "Where",
    "Select",
    "SubSelect",
    "Union",
    "JoinKind",
    "Join",
    "InnerJoin",
    "OuterJoin",
    "LeftOuterJoin",
    "FullOuterJoin",
    "LateralCrossJoin",
    "LateralLeftJoin",
    "Case",
    "When",
    "Else",
    # Errors
    "FragQLError",
    "UsageError",
    "FragmentTypeError",
    "ConfigError",
]
