"""Shared pytest fixtures for fragQL unit and integration tests."""
from __future__ import annotations

import pytest

from fragql import BuilderOptions, QueryBuilder


@pytest.fixture()
def qb() -> QueryBuilder:
    """A fresh builder with default options."""
    return QueryBuilder()


@pytest.fixture()
def limited_qb() -> QueryBuilder:
    """A builder with default and maximum LIMIT policies."""
    return QueryBuilder(BuilderOptions(default_limit=50, max_limit=100))
