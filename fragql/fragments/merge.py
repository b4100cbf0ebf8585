"""Helpers for rendering and merging lists that mix fragments and plain values.

Clause slots such as ORDER BY and GROUP BY, logical connectives and raw
passthroughs all hold lists where some items are
:class:`~fragql.fragments.base.Sql` fragments and others are plain strings.
These helpers are the one place that decides how such lists render and how
their bound values are merged.

Merge rule: mappings are unioned in list order and, on a key collision, the
later mapping wins.  Collisions do not happen in practice because every
placeholder name is freshly generated.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from fragql.fragments.base import Sql


def merge_replacements(*mappings: Mapping[str, Any] | None) -> dict[str, Any]:
    """Union ``mappings`` left to right into a new dict; ``None`` is skipped."""
    merged: dict[str, Any] = {}
    for mapping in mappings:
        if mapping:
            merged.update(mapping)
    return merged


def sql_list_to_replacements(items: Iterable[Any]) -> dict[str, Any]:
    """Merge the bound values of every fragment in ``items``.

    Items that are not fragments contribute nothing.
    """
    return merge_replacements(
        *(item.get_replacements() for item in items if isinstance(item, Sql))
    )


def render_item(item: Any) -> str:
    """Render a fragment with ``to_sql()``; pass anything else through ``str``."""
    if isinstance(item, Sql):
        return item.to_sql()
    return str(item)


def concat_possible_sql_list(items: Iterable[Any], concat_by: str = ", ") -> str:
    """Render each item of ``items`` and join the results with ``concat_by``."""
    return concat_by.join(render_item(item) for item in items)
