"""Unit tests for the query builder."""

import json
from urllib.parse import parse_qs

import pytest

from placequery.filters import FieldFilter, FilterGroup
from placequery.parameters import ParameterStore
from placequery.query import Query
from placequery.shapes import Circle


def _params(query):
    return {k: v[0] for k, v in parse_qs(query.to_url_query()).items()}


def test_basic_parameters():
    q = Query().search("coffee").limit(10).offset(20).include_row_count()
    assert q.to_url_query() == "q=coffee&limit=10&offset=20&include_count=true"


def test_only_and_sort():
    q = Query().only("name", "tel", "name").sort_asc("name").sort_desc("rating")
    assert str(q) == "select=name,tel&sort=name:asc,rating:desc"


def test_limit_validation():
    with pytest.raises(ValueError):
        Query().limit(-1)
    with pytest.raises(TypeError):
        Query().offset("10")
    with pytest.raises(TypeError):
        Query().limit(True)


def test_within_circle():
    q = Query().at(34.06, -118.41, 500)
    assert json.loads(_params(q)["geo"]) == {
        "$circle": {"$center": [34.06, -118.41], "$meters": 500}
    }
    assert q.to_json_object()["geo"] == Circle(
        center_lat=34.06, center_long=-118.41, meters=500
    ).to_json_object()


def test_field_filters():
    q = Query()
    q.field("region").equal("CA").field("rating").greater_than_or_equal(4)
    assert json.loads(_params(q)["filters"]) == {
        "$and": [{"region": {"$eq": "CA"}}, {"rating": {"$gte": 4}}]
    }


@pytest.mark.parametrize(
    "method,args,expected",
    [
        ("equal", ("x",), {"$eq": "x"}),
        ("not_equal", ("x",), {"$neq": "x"}),
        ("search", ("x",), {"$search": "x"}),
        ("in_list", ("a", "b"), {"$in": ["a", "b"]}),
        ("not_in_list", ("a",), {"$nin": ["a"]}),
        ("begins_with", ("x",), {"$bw": "x"}),
        ("not_begins_with", ("x",), {"$nbw": "x"}),
        ("begins_with_any", ("a", "b"), {"$bwin": ["a", "b"]}),
        ("not_begins_with_any", ("a",), {"$nbwin": ["a"]}),
        ("blank", (), {"$blank": True}),
        ("not_blank", (), {"$blank": False}),
        ("greater_than", (1,), {"$gt": 1}),
        ("less_than", (1,), {"$lt": 1}),
        ("less_than_or_equal", (1,), {"$lte": 1}),
    ],
)
def test_field_operators(method, args, expected):
    q = Query()
    result = getattr(q.field("f"), method)(*args)
    assert result is q
    assert q.to_json_object()["filters"] == {"f": expected}


def test_or_same_query():
    q = Query()
    q.or_(q.field("name").begins_with("Star"), q.field("category").equal("cafe"))
    # newest filter is popped first
    assert q.to_json_object()["filters"] == {
        "$or": [{"category": {"$eq": "cafe"}}, {"name": {"$bw": "Star"}}]
    }


def test_and_across_queries():
    a = Query().field("region").equal("CA").field("rating").greater_than(3)
    b = Query().field("tel").not_blank()
    combined = Query().limit(5)
    combined.and_(a, b)

    assert a.get_filter_list() == [FieldFilter("$eq", "region", "CA")]
    assert b.get_filter_list() == []
    assert combined.get_filter_list() == [
        FilterGroup(
            op="$and",
            filters=[FieldFilter("$gt", "rating", 3), FieldFilter("$blank", "tel", False)],
        )
    ]


def test_copy_is_independent():
    q = Query().search("coffee").field("region").equal("CA")
    clone = q.copy()
    clone.search("tea").field("rating").greater_than(3)
    assert q.to_url_query() != clone.to_url_query()
    assert len(q.get_filter_list()) == 1


def test_additional_parameters():
    extra = ParameterStore()
    extra.set_raw("KEY", "abc")
    assert Query().limit(1).to_url_query(extra) == "limit=1&KEY=abc"


def test_wraps_existing_store():
    params = ParameterStore()
    params.set_raw("q", "x")
    assert Query(params).limit(2).params is params
