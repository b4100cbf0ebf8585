"""The result of rendering a statement: SQL text plus its bound values."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqlalchemy import TextClause


@dataclass
class CompiledSQL:
    """A rendered statement ready to hand to a database driver.

    Attributes:
        sql: The SQL string with ``:name`` placeholders.
        params: Values for every placeholder generated while building the
            statement.  Values are exactly as supplied; binding and escaping
            are the driver's job.
    """

    sql: str
    params: dict[str, Any] = field(default_factory=dict)

    def merge_runtime_params(self, runtime: dict[str, Any]) -> dict[str, Any]:
        """Return a merged param dict ready for query execution.

        Args:
            runtime: Extra values for placeholders written by hand, e.g. in a
                :class:`~fragql.fragments.basic.Raw` fragment.

        Returns:
            A single dict combining compiled params and ``runtime`` params.
        """
        return {**self.params, **runtime}

    def to_text(self) -> TextClause:
        """Return the statement as a SQLAlchemy :func:`~sqlalchemy.text` construct.

        SQLAlchemy's ``text()`` uses the same ``:name`` bind syntax, so the
        result can be executed directly::

            with engine.connect() as conn:
                rows = conn.execute(compiled.to_text(), compiled.params).all()
        """
        from sqlalchemy import text

        return text(self.sql)
