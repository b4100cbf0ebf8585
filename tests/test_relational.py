"""Unit tests for nested statements, unions, joins and CASE expressions."""

from __future__ import annotations

import pytest

from fragql import BuilderOptions, FragmentTypeError, QueryBuilder
from fragql.fragments import (
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
    Null,
    OuterJoin,
    SubSelect,
    Union,
    When,
    Where,
)
from tests.fixtures import only_key


def _price_lookup(builder: QueryBuilder) -> str:
    return builder.table("price_data").where("model_id", "foo").limit(1).select("id")


# ---------------------------------------------------------------------------
# SubSelect
# ---------------------------------------------------------------------------


class TestSubSelect:
    def test_renders_bracketed_statement(self):
        sub = SubSelect(_price_lookup)
        key = only_key(sub.get_replacements())
        assert sub.to_sql() == f'(SELECT "id" FROM "price_data" WHERE "model_id" = :{key} LIMIT 1)'
        assert sub.get_replacements()[key] == "foo"

    def test_named(self):
        sub = SubSelect(lambda b: b.table("t").select("id"), "lookup")
        assert sub.to_sql() == '(SELECT "id" FROM "t") AS "lookup"'

    def test_captures_nested_builder_replacements(self):
        captured = {}

        def build(builder):
            captured["builder"] = builder
            return (
                builder.table("t")
                .where("a", 1)
                .where(Fn("available", 2), None, None)
                .select("*")
            )

        sub = SubSelect(build)
        assert sub.get_replacements() == captured["builder"].get_replacements()
        assert sorted(sub.get_replacements().values()) == [1, 2]

    def test_snapshot_taken_at_construction(self):
        captured = {}

        def build(builder):
            captured["builder"] = builder
            return builder.table("t").where("a", 1).select("*")

        sub = SubSelect(build)
        before = sub.to_sql()
        captured["builder"].where("b", 2)

        assert sub.to_sql() == before
        assert len(sub.get_replacements()) == 1

    @pytest.mark.parametrize("result", [None, 42, Column("id")])
    def test_non_string_result_rejected(self, result):
        with pytest.raises(FragmentTypeError) as exc_info:
            SubSelect(lambda b: result)
        assert exc_info.value.fragment == "SubSelect"

    def test_rejection_is_a_type_error(self):
        with pytest.raises(TypeError):
            SubSelect(lambda b: b)

    def test_options_reach_nested_builder(self):
        options = BuilderOptions(default_limit=5)
        sub = SubSelect(lambda b: b.table("t").select("id"), options=options)
        assert sub.to_sql() == '(SELECT "id" FROM "t" LIMIT 5)'


# ---------------------------------------------------------------------------
# Union
# ---------------------------------------------------------------------------


class TestUnion:
    def test_default_union(self):
        union = Union(
            [
                lambda b: b.table("a").select("id"),
                lambda b: b.table("b").select("id"),
            ]
        )
        assert union.keyword == "UNION"
        assert union.to_sql() == 'SELECT "id" FROM "a" UNION SELECT "id" FROM "b"'

    def test_union_all(self):
        union = QueryBuilder.UnionAll(
            lambda b: b.table("a").select("id"),
            lambda b: b.table("b").select("id"),
        )
        assert union.to_sql() == 'SELECT "id" FROM "a" UNION ALL SELECT "id" FROM "b"'

    def test_union_distinct(self):
        union = QueryBuilder.UnionDistinct(
            lambda b: b.table("a").select("id"),
            lambda b: b.table("b").select("id"),
        )
        assert union.to_sql() == 'SELECT "id" FROM "a" UNION SELECT "id" FROM "b"'

    def test_members_contribute_replacements(self):
        union = Union(
            [
                lambda b: b.table("a").where("x", 1).select("id"),
                lambda b: b.table("b").where("y", 2).select("id"),
            ]
        )
        assert sorted(union.get_replacements().values()) == [1, 2]
        for key in union.get_replacements():
            assert f":{key}" in union.to_sql()

    def test_accepts_any_iterable(self):
        tables = ["a", "b", "c"]
        union = Union(
            (lambda b, t=t: b.table(t).select("id")) for t in tables
        )
        assert union.to_sql().count(" UNION ") == 2

    def test_non_string_member_rejected(self):
        with pytest.raises(FragmentTypeError) as exc_info:
            Union([lambda b: b.table("a").select("id"), lambda b: None])
        assert exc_info.value.fragment == "Union"


# ---------------------------------------------------------------------------
# Join
# ---------------------------------------------------------------------------


class TestJoin:
    def test_plain_join_with_alias_and_condition(self):
        join = Join(
            "apartment_types",
            Where("at.id", Column("apartments.apartment_type_id")),
            "at",
        )
        assert join.to_sql() == (
            'JOIN "apartment_types" "at" ON "at"."id" = "apartments"."apartment_type_id"'
        )
        assert join.kind is JoinKind.PLAIN

    @pytest.mark.parametrize(
        ("join_cls", "expected"),
        [
            (InnerJoin, 'INNER JOIN "t"'),
            (OuterJoin, 'OUTER JOIN "t"'),
            (LeftOuterJoin, 'LEFT OUTER JOIN "t"'),
            (FullOuterJoin, 'FULL OUTER JOIN "t"'),
            (LateralCrossJoin, 'CROSS JOIN LATERAL "t"'),
            (LateralLeftJoin, 'LEFT JOIN LATERAL "t"'),
        ],
    )
    def test_direction_keywords(self, join_cls, expected):
        assert join_cls("t").to_sql() == expected

    def test_explicit_kind_overrides_default(self):
        assert Join("t", kind=JoinKind.INNER).to_sql() == 'INNER JOIN "t"'

    def test_lateral_sub_select(self):
        join = LateralCrossJoin(SubSelect(lambda b: "SELECT 1"), None, "pricelist")
        assert join.to_sql() == 'CROSS JOIN LATERAL (SELECT 1) "pricelist"'

    def test_replacements_from_table_and_condition(self):
        sub = SubSelect(lambda b: b.table("p").where("active", True).select("id"))
        join = LeftOuterJoin(sub, Where("p.score", 10, ">"), "p")
        assert sorted(join.get_replacements().values(), key=str) == [10, True]

    def test_string_condition_rejected(self):
        with pytest.raises(FragmentTypeError) as exc_info:
            InnerJoin("t", "t.id = other.id")
        assert exc_info.value.fragment == "InnerJoin"


# ---------------------------------------------------------------------------
# Case / When / Else
# ---------------------------------------------------------------------------


def _pricing_case() -> Case:
    return Case(
        "pricing",
        [
            When(
                Where(Fn("has_price", Column("a.id")), True),
                SubSelect(lambda b: b.select(Fn("price_for", Column("a.id"), 30))),
            )
        ],
        Else(SubSelect(lambda b: b.select(Cast(Null(), "INTEGER")))),
    )


class TestCase:
    def test_renders_branches_in_order(self):
        case = _pricing_case()
        replacements = case.get_replacements()
        where_key = next(k for k in replacements if k.startswith("where"))
        func_key = next(k for k in replacements if k.startswith("func"))

        assert case.to_sql() == (
            f'CASE WHEN has_price("a"."id") = :{where_key} '
            f'THEN (SELECT price_for("a"."id", :{func_key})) '
            'ELSE (SELECT NULL::INTEGER) END AS "pricing"'
        )
        assert replacements[where_key] is True
        assert replacements[func_key] == 30

    def test_without_else(self):
        when = When(Where("kind", Null(), "IS"), SubSelect(lambda b: "SELECT 0"))
        case = Case("kind_or_zero", [when])
        assert case.to_sql() == 'CASE WHEN "kind" IS NULL THEN (SELECT 0) END AS "kind_or_zero"'

    def test_branch_shortcuts(self):
        assert Case.When is When
        assert Case.Else is Else

    def test_when_requires_where(self):
        with pytest.raises(FragmentTypeError):
            When("kind IS NULL", SubSelect(lambda b: "SELECT 0"))

    def test_when_requires_sub_select(self):
        with pytest.raises(FragmentTypeError):
            When(Where("kind", Null(), "IS"), "SELECT 0")

    def test_else_requires_sub_select(self):
        with pytest.raises(FragmentTypeError) as exc_info:
            Else(Where("kind", Null(), "IS"))
        assert exc_info.value.fragment == "Else"

    def test_case_rejects_non_when_branch(self):
        with pytest.raises(FragmentTypeError):
            Case("n", ["WHEN 1 = 1 THEN 1"])

    def test_case_rejects_non_else_branch(self):
        when = When(Where("kind", Null(), "IS"), SubSelect(lambda b: "SELECT 0"))
        with pytest.raises(FragmentTypeError):
            Case("n", [when], "ELSE 1")
