"""Test fixtures: sample schema DDL, seed rows and placeholder helpers."""

from __future__ import annotations

import re
from pathlib import Path

_FIXTURES_DIR = Path(__file__).parent

#: Matches any generated placeholder name.
PLACEHOLDER_RE = re.compile(r"^(lit|func|where)[0-9a-f]{8}$")


def load_ddl() -> list[str]:
    """Return the sample SQLite DDL and seed statements, one per list item."""
    script = (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()
    return [stmt.strip() for stmt in script.split(";") if stmt.strip()]


def only_key(mapping: dict) -> str:
    """Return the single key of ``mapping``, failing if there is not exactly one."""
    assert len(mapping) == 1, mapping
    return next(iter(mapping))
