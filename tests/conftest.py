"""Pytest configuration and shared fixtures."""

import pytest
from click.testing import CliRunner

from placequery import config
from placequery.cli.main import cli
from placequery.filters import FieldFilter


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate every test from user settings.

    Clears PLACEQUERY_* environment variables, runs from an empty
    directory so no placequery.json is picked up, and resets the cached
    settings before and after the test.
    """
    for name in ("PATH", "URL_ENCODE", "BASE_URL", "LOG_LEVEL"):
        monkeypatch.delenv(f"PLACEQUERY_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    config.reset()
    yield
    config.reset()


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args.

    Usage:
        result = invoke(["build", "-q", "coffee"])
        result = invoke(["encode", "limit=5"])
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke


@pytest.fixture
def make_filter():
    """Build an equality filter on ``field``."""

    def _make(field, value="x"):
        return FieldFilter("$eq", field, value)

    return _make
