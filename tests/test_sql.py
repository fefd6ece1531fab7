import pytest

from camp_registration_api.app.core.tables import CAMPITES, CAMPS, DISTRICTS, dump_json
from camp_registration_api.app.query.sql import QueryError, compile_order_by, compile_where


def test_empty_filter_matches_everything():
    assert compile_where({}, CAMPS) == ("1 = 1", [])


def test_equality_and_range():
    sql, params = compile_where({"year": {"gte": 2024, "lt": 2026}, "title": "Summer"}, CAMPS)
    assert sql == '("camps"."year" >= ?) AND ("camps"."year" < ?) AND ("camps"."title" = ?)'
    assert params == [2024, 2026, "Summer"]


def test_null_and_list_equality():
    sql, params = compile_where({"district_id": None, "id": [1, 2]}, CAMPITES)
    assert sql == '("campites"."district_id" IS NULL) AND ("campites"."id" IN (?, ?))'
    assert params == [1, 2]


def test_empty_in_and_not_in():
    assert compile_where({"id": {"in": []}}, CAMPS) == ("(1 = 0)", [])
    assert compile_where({"id": {"notIn": []}}, CAMPS) == ("(1 = 1)", [])


def test_insensitive_contains():
    sql, params = compile_where(
        {"firstname": {"contains": "JO", "mode": "insensitive"}}, CAMPITES
    )
    assert sql == '(INSTR(LOWER("campites"."firstname"), LOWER(?)) > 0)'
    assert params == ["JO"]


def test_to_one_relation():
    sql, params = compile_where({"camp": {"year": 2025}}, CAMPITES)
    assert sql == (
        '("campites"."camp_id" IN (SELECT "camps"."id" FROM "camps" '
        'WHERE ("camps"."year" = ?)))'
    )
    assert params == [2025]


def test_to_many_relation():
    sql, params = compile_where({"campites": {"some": {"gender": "female"}}}, DISTRICTS)
    assert sql.startswith("(EXISTS (SELECT 1 FROM \"campites\"")
    assert '"campites"."district_id" = "districts"."id"' in sql
    assert params == ["female"]


def test_ends_with():
    sql, params = compile_where({"name": {"endsWith": "ba"}}, DISTRICTS)
    assert sql == (
        '(SUBSTR("districts"."name", LENGTH("districts"."name") - LENGTH(?) + 1) = ?)'
    )
    assert params == ["ba", "ba"]


def test_not_in_with_values():
    sql, params = compile_where({"id": {"notIn": [1, 2]}}, CAMPS)
    assert sql == '("camps"."id" NOT IN (?, ?))'
    assert params == [1, 2]


def test_insensitive_equals():
    sql, params = compile_where(
        {"email": {"equals": "John@Example.com", "mode": "insensitive"}}, CAMPITES
    )
    assert sql == '(LOWER("campites"."email") = LOWER(?))'
    assert params == ["John@Example.com"]


def test_json_column_equality_uses_stored_format():
    sql, params = compile_where({"zones": ["Zone A", "Zone B"]}, DISTRICTS)
    assert sql == '("districts"."zones" = ?)'
    assert params == [dump_json(["Zone A", "Zone B"])]


def test_every_rejects_null_comparisons():
    sql, params = compile_where({"campites": {"every": {"amount": {"gt": 100}}}}, CAMPS)
    assert sql.startswith("(NOT EXISTS (SELECT 1 FROM \"campites\"")
    assert sql.endswith('AND (("campites"."amount" > ?)) IS NOT 1))')
    assert params == [100]


@pytest.mark.parametrize(
    "where",
    [
        {"nickname": "x"},
        {"year": {"near": 2025}},
        {"title": {"contains": "a", "mode": "loud"}},
        {"campites": {"gender": "male"}},
        {"camp": "Summer"},
        {"year": {"gte": [1, 2]}},
        {"year": {"some": {"gt": 1}}},
    ],
)
def test_invalid_filters_raise(where):
    table = CAMPITES if "camp" in where else CAMPS
    with pytest.raises(QueryError):
        compile_where(where, table)


def test_order_by_drops_unknown_fields():
    assert compile_order_by([{"year": "desc"}, {"bogus": "asc"}], CAMPS) == '"camps"."year" DESC'


def test_order_by_defaults_to_id():
    assert compile_order_by([], CAMPS) == '"camps"."id" ASC'
