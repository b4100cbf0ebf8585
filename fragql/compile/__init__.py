"""fragQL compilation layer: fragments → parameterized SQL."""
from fragql.compile.base import CompiledSQL
from fragql.compile.builder import QueryBuilder

__all__ = [
    "CompiledSQL",
    "QueryBuilder",
]
