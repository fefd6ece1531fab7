import pytest

from camp_registration_api.app.core.config import settings
from camp_registration_api.app.query.pagination import (
    PaginationConfig,
    build_list_response,
    get_pagination,
    parse_list_query,
)


@pytest.fixture(autouse=True)
def default_limits(monkeypatch):
    monkeypatch.setattr(settings, "default_page_size", 25)
    monkeypatch.setattr(settings, "max_page_size", 1000)


def test_page_zero_disables_paging():
    request = get_pagination(page=0, filter={"[year]": "2025"})
    assert request.fetch_all
    assert request.to_dict() == {"where": {"year": 2025}, "orderBy": []}


def test_second_page_offsets_by_page_size():
    request = get_pagination(page=2, per_page=25)
    assert (request.skip, request.take) == (25, 25)
    assert request.to_dict()["skip"] == 25


def test_per_page_is_capped_silently():
    assert get_pagination(page=1, per_page=5000).take == 1000


def test_endpoint_ceiling_is_capped_by_global_ceiling(monkeypatch):
    monkeypatch.setattr(settings, "max_page_size", 50)
    config = PaginationConfig(page_size=20, max_page_size=500)
    assert get_pagination(page=1, per_page=200, config=config).take == 50


def test_endpoint_defaults():
    config = PaginationConfig(page_size=100)
    request = get_pagination(config=config)
    assert (request.page, request.skip, request.take) == (1, 0, 100)


def test_out_of_range_values_are_clamped():
    request = get_pagination(page=-3, per_page=0)
    assert (request.page, request.per_page, request.skip) == (1, 1, 0)


def test_filter_may_be_a_query_string():
    request = get_pagination(filter="[name][contains]=ya", order_by="[name]=asc")
    assert request.where == {"name": {"contains": "ya"}}
    assert request.order_by == [{"name": "asc"}]


def test_parse_list_query_full_example():
    request = parse_list_query(
        "[title][contains]=Summer&[year][gte]=2024&orderBy=[year]=desc&page=1&per_page=10"
    )
    assert request.where == {"title": {"contains": "Summer"}, "year": {"gte": 2024}}
    assert request.order_by == [{"year": "desc"}]
    assert (request.skip, request.take) == (0, 10)


def test_parse_list_query_accepts_pairs():
    request = parse_list_query([("page", "0"), ("[id]", "1"), ("[id]", "2")])
    assert request.fetch_all
    assert request.where == {"id": [1, 2]}


def test_parse_list_query_ignores_bad_paging_values():
    request = parse_list_query("page=abc&per_page=lots")
    assert (request.page, request.per_page) == (1, 25)


def test_parse_list_query_encoded_multi_field_sort():
    request = parse_list_query("orderBy=%5Byear%5D%3Ddesc%26%5Btitle%5D%3Dasc")
    assert request.order_by == [{"year": "desc"}, {"title": "asc"}]


def test_direct_keys_override_filter_param():
    request = parse_list_query(
        "filter=%5Bname%5D%3DYaba%26%5Bzones%5D%3Dnull&%5Bname%5D=Ikeja"
    )
    assert request.where == {"name": "Ikeja", "zones": None}


def test_paginated_envelope():
    request = get_pagination(page=2, per_page=25)
    response = build_list_response(["a"], 51, request)
    assert response == {
        "success": True,
        "data": ["a"],
        "meta": {"page": 2, "per_page": 25, "total": 51, "total_pages": 3},
    }


def test_empty_result_has_zero_pages():
    response = build_list_response([], 0, get_pagination())
    assert response["meta"]["total_pages"] == 0


def test_unpaginated_envelope():
    response = build_list_response(["a", "b"], 2, get_pagination(page=0))
    assert response == {"success": True, "data": ["a", "b"], "total": 2}


@pytest.mark.parametrize("raw", ["1_0", "%D9%A3", "2.0", ""])
def test_paging_values_must_be_ascii_integers(raw):
    request = parse_list_query(f"page={raw}&per_page={raw}")
    assert (request.page, request.per_page) == (1, 25)


def test_paging_values_allow_surrounding_whitespace():
    request = parse_list_query("page=%202%20&per_page=10")
    assert (request.page, request.skip) == (2, 10)
