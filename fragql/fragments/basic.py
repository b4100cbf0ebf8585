"""Leaf and simple composite fragments.

``Column``
    A quoted, optionally namespaced identifier.
``Literal``
    A single bound value behind a generated placeholder.
``Null``
    The SQL ``NULL`` keyword, usable as an explicit operand.
``Raw``
    Unprocessed SQL parts joined by spaces.
``Cast``
    ``<expr>::<type>``.
``Fn``
    ``name(arg, ...)`` with bare arguments bound as placeholders.

Bare values
-----------
Identifier positions (the left side of a ``Where``, the target of a ``Cast``,
``Select`` or ``Join``, a table name) go through :func:`as_column`: a bare
string names a schema object and becomes a :class:`Column`.  Data positions
(``Fn`` arguments, the right side of a ``Where``) bind every bare value,
strings included, through a fresh placeholder.  Wrap a value in
:class:`Literal` to bind it anywhere else.
"""
from __future__ import annotations

from typing import Any

from fragql.fragments.base import Sql
from fragql.fragments.merge import concat_possible_sql_list, sql_list_to_replacements
from fragql.fragments.naming import (
    FUNCTION_TAG,
    LITERAL_TAG,
    new_placeholder,
    placeholder_token,
)

WILDCARD = "*"


class Raw(Sql):
    """Raw SQL that is not processed beyond joining its parts with spaces.

    Use it for query parts no other fragment expresses.  Fragment parts are
    rendered and contribute their bound values; string parts are emitted
    verbatim, so never pass untrusted input as a string part.
    """

    def __init__(self, *parts: Any) -> None:
        self._parts = parts

    def to_sql(self) -> str:
        return concat_possible_sql_list(self._parts, " ")

    def get_replacements(self) -> dict[str, Any]:
        return sql_list_to_replacements(self._parts)


class Column(Sql):
    """A column (or table) name.

    Each dot-separated segment is double-quoted separately, so
    ``apartments.id`` renders as ``"apartments"."id"``.  The ``*`` segment is
    never quoted, which keeps ``*`` and ``apartments.*`` usable.
    """

    def __init__(self, name: str) -> None:
        if name == WILDCARD:
            self._name = name
            return
        self._name = ".".join(
            segment if segment == WILDCARD else f'"{segment}"'
            for segment in name.split(".")
        )

    def to_sql(self) -> str:
        return self._name


class Literal(Sql):
    """A literal value bound through a freshly generated placeholder."""

    def __init__(self, value: Any) -> None:
        self._ident = new_placeholder(LITERAL_TAG)
        self._replacements = {self._ident: value}

    @property
    def ident(self) -> str:
        """The generated placeholder name (without the colon)."""
        return self._ident

    def to_sql(self) -> str:
        return placeholder_token(self._ident)

    def get_replacements(self) -> dict[str, Any]:
        return dict(self._replacements)


class Null(Sql):
    """The literal ``NULL``.

    Distinct from Python ``None``, which means "no value" to every fragment
    (e.g. a ``Where`` with ``right=None`` has no right side at all).  Use
    ``Null()`` for ``IS NULL`` / ``IS NOT NULL`` predicates.
    """

    def to_sql(self) -> str:
        return "NULL"


class Cast(Sql):
    """A cast of ``statement`` to ``type_name``: ``<statement>::<type_name>``.

    No check is made that the value is compatible with the target type.
    """

    def __init__(self, statement: Sql | str, type_name: str) -> None:
        self._statement = as_column(statement)
        self._type = type_name

    def to_sql(self) -> str:
        return f"{self._statement.to_sql()}::{self._type}"

    def get_replacements(self) -> dict[str, Any]:
        return self._statement.get_replacements()


class Fn(Sql):
    """A function call.

    Fragment arguments are rendered as-is and their bound values forwarded.
    Every other argument, strings included, is treated as data and bound
    through its own placeholder.  Argument order is preserved.
    """

    def __init__(self, name: str, *args: Any) -> None:
        self._name = name
        self._replacements: dict[str, Any] = {}
        self._args: list[Sql | str] = []
        for arg in args:
            if isinstance(arg, Sql):
                self._replacements.update(arg.get_replacements())
                self._args.append(arg)
            else:
                ident = new_placeholder(FUNCTION_TAG)
                self._replacements[ident] = arg
                self._args.append(placeholder_token(ident))

    def to_sql(self) -> str:
        return f"{self._name}({concat_possible_sql_list(self._args)})"

    def get_replacements(self) -> dict[str, Any]:
        return dict(self._replacements)


# ---------------------------------------------------------------------------
# Identifier positions
# ---------------------------------------------------------------------------


def as_column(value: Sql | str) -> Sql:
    """Return ``value`` if it is a fragment, else wrap the name in a Column."""
    if isinstance(value, Sql):
        return value
    return Column(value)
