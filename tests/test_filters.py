import math

import pytest

from camp_registration_api.app.query.filters import (
    coerce_value,
    collect_query_params,
    query_params_to_where,
    query_string_to_where,
    split_query_string,
    tokenize_key,
)


@pytest.mark.parametrize(
    "key, expected",
    [
        ("[user][name][contains]", ["user", "name", "contains"]),
        ("[email]", ["email"]),
        ("email", ["email"]),
        ("[tags][]", ["tags"]),
        ("[]", ["[]"]),
    ],
)
def test_tokenize_key(key, expected):
    assert tokenize_key(key) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("123", 123),
        ("-7", -7),
        ("1.5", 1.5),
        ("1e3", 1000),
        ("0x1A", 26),
        (" 42 ", 42),
        ("123abc", "123abc"),
        ("true", True),
        ("false", False),
        ("null", None),
        ("True", "True"),
        ('["a","b"]', ["a", "b"]),
        ('{"gte": 18}', {"gte": 18}),
        ("not json[", "not json["),
        ("[not json", "[not json"),
        ("", ""),
        ("john", "john"),
    ],
)
def test_coerce_value(raw, expected):
    assert coerce_value(raw) == expected


def test_coerce_value_infinity():
    assert coerce_value("Infinity") == math.inf
    assert coerce_value("-Infinity") == -math.inf


def test_quoted_values_stay_strings():
    assert coerce_value('"123"') == "123"
    assert coerce_value("'0801'") == "0801"
    assert coerce_value('"true"') == "true"


def test_coerce_value_list():
    assert coerce_value(["1", "a", "null"]) == [1, "a", None]


def test_bracketed_and_bare_keys_are_equivalent():
    assert query_params_to_where({"[f]": "v"}) == query_params_to_where({"f": "v"}) == {"f": "v"}


def test_operators_merge_into_one_mapping():
    where = query_params_to_where(
        {"[email][contains]": "example.com", "[email][mode]": "insensitive"}
    )
    assert where == {"email": {"contains": "example.com", "mode": "insensitive"}}


def test_nested_relation_path():
    where = query_params_to_where({"[campites][some][gender]": "female"})
    assert where == {"campites": {"some": {"gender": "female"}}}


def test_range_on_same_field():
    where = query_params_to_where({"[age][gte]": "18", "[age][lte]": "65"})
    assert where == {"age": {"gte": 18, "lte": 65}}


def test_later_plain_value_replaces_mapping():
    where = query_params_to_where({"[year][gte]": "2024", "[year]": "2025"})
    assert where == {"year": 2025}


def test_nested_path_replaces_plain_value():
    where = query_params_to_where({"[year]": "2025", "[year][gte]": "2024"})
    assert where == {"year": {"gte": 2024}}


def test_repeated_keys_become_list():
    assert query_string_to_where("[id]=1&[id]=2") == {"id": [1, 2]}


def test_query_string_to_where_decodes_and_strips_question_mark():
    where = query_string_to_where("?%5Bfirstname%5D%5Bcontains%5D=john&%5Bage%5D%5Bgte%5D=18")
    assert where == {"firstname": {"contains": "john"}, "age": {"gte": 18}}


def test_query_string_to_where_empty():
    assert query_string_to_where("") == {}
    assert query_string_to_where(None) == {}


def test_collect_query_params_keeps_first_seen_order():
    params = collect_query_params([("b", "1"), ("a", "2"), ("b", "3")])
    assert list(params) == ["b", "a"]
    assert params["b"] == ["1", "3"]


def test_split_query_string_keeps_blank_values():
    assert split_query_string("[name]=&page=1") == [("[name]", ""), ("page", "1")]
