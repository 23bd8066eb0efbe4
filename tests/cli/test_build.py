"""Tests for the build command."""

import json
from urllib.parse import parse_qs

import pytest


def _parsed(output):
    return {k: v[0] for k, v in parse_qs(output.strip()).items()}


def test_help(invoke):
    result = invoke(["--help"])
    assert result.exit_code == 0
    assert "build" in result.output
    assert "encode" in result.output


def test_version(invoke):
    result = invoke(["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_search_and_limit(invoke):
    result = invoke(["build", "-q", "coffee shop", "--limit", "10"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "q=coffee+shop&limit=10"


def test_no_encode(invoke):
    result = invoke(["build", "-q", "coffee shop", "--select", "name", "--select", "tel", "--no-encode"])
    assert result.exit_code == 0
    assert result.output.strip() == "q=coffee shop&select=name,tel"


def test_filters_implicit_and(invoke):
    result = invoke(["build", "-f", "region", "eq", "CA", "-f", "rating", "gte", "4"])
    assert result.exit_code == 0, result.output
    assert json.loads(_parsed(result.output)["filters"]) == {
        "$and": [{"region": {"$eq": "CA"}}, {"rating": {"$gte": 4}}]
    }


def test_filters_any_keeps_order(invoke):
    result = invoke(
        ["build", "-f", "name", "bw", "Star", "-f", "category", "eq", "cafe", "--any"]
    )
    assert result.exit_code == 0, result.output
    assert json.loads(_parsed(result.output)["filters"]) == {
        "$or": [{"name": {"$bw": "Star"}}, {"category": {"$eq": "cafe"}}]
    }


def test_list_operator(invoke):
    result = invoke(["build", "-f", "region", "in", "CA,NY", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"filters": {"region": {"$in": ["CA", "NY"]}}}


def test_within_and_sort_json(invoke):
    result = invoke(
        ["build", "--within", "34.06,-118.41,500", "--sort", "rating:desc", "--include-count", "--json"]
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "sort": "rating:desc",
        "geo": {"$circle": {"$center": [34.06, -118.41], "$meters": 500}},
        "include_count": "true",
    }


def test_table_with_base_url(invoke, monkeypatch):
    monkeypatch.setenv("PLACEQUERY_BASE_URL", "https://api.example.com/")
    result = invoke(["build", "--table", "places", "--limit", "1"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "https://api.example.com/t/places?limit=1"


def test_table_without_base_url(invoke):
    result = invoke(["build", "--table", "places"])
    assert result.exit_code == 1
    assert "base_url" in result.output


def test_url_encode_setting(invoke, tmp_path):
    (tmp_path / "placequery.json").write_text(json.dumps({"url_encode": False}))
    result = invoke(["build", "-q", "a b"])
    assert result.exit_code == 0
    assert result.output.strip() == "q=a b"


@pytest.mark.parametrize(
    "args,message",
    [
        (["-f", "name", "like", "x"], "Unknown operator"),
        (["--within", "1,2"], "LAT,LONG,METERS"),
        (["--within", "95,0,10"], "Error"),
        (["--sort", "name:sideways"], "asc or desc"),
    ],
)
def test_bad_input(invoke, args, message):
    result = invoke(["build", *args])
    assert result.exit_code == 1
    assert message in result.output


def test_bad_config_file(invoke, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{")
    result = invoke(["--config", str(path), "build"])
    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_unreadable_config_file(invoke, tmp_path):
    (tmp_path / "placequery.json").write_bytes(b"\xff\xfe{}")
    result = invoke(["build", "-q", "coffee"])
    assert result.exit_code == 1
    assert "Cannot read config file" in result.output
