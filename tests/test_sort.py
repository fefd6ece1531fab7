from camp_registration_api.app.query.filters import parse_query_sort


def test_parse_query_sort():
    assert parse_query_sort("[firstname]=desc&[created_at]=asc") == [
        {"firstname": "desc"},
        {"created_at": "asc"},
    ]


def test_empty_sort():
    assert parse_query_sort("") == []
    assert parse_query_sort(None) == []


def test_single_quotes_are_ignored():
    assert parse_query_sort("[title]='desc'") == [{"title": "desc"}]


def test_invalid_segments_are_skipped():
    assert parse_query_sort("[title]=up&year=desc&[]=asc&[year]=asc") == [{"year": "asc"}]


def test_direction_is_case_sensitive():
    assert parse_query_sort("[title]=DESC") == []


def test_duplicate_fields_are_kept_in_order():
    assert parse_query_sort("[year]=desc&[year]=asc") == [{"year": "desc"}, {"year": "asc"}]
