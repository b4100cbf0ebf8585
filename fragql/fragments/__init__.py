"""fragQL fragments: the SQL expression nodes composed into statements."""
from fragql.fragments.base import Sql
from fragql.fragments.basic import Cast, Column, Fn, Literal, Null, Raw, as_column
from fragql.fragments.clauses import Select, Where
from fragql.fragments.conditional import Case, Else, When
from fragql.fragments.logic import And, Joinder, Or
from fragql.fragments.relational import (
    FullOuterJoin,
    InnerJoin,
    Join,
    JoinKind,
    LateralCrossJoin,
    LateralLeftJoin,
    LeftOuterJoin,
    OuterJoin,
    SubSelect,
    Union,
)

__all__ = [
    "Sql",
    "Raw",
    "Column",
    "Literal",
    "Null",
    "Cast",
    "Fn",
    "as_column",
    "Joinder",
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
    "When",
    "Else",
    "Case",
]
