"""Tests for the recipebox command-line interface."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from recipebox import cli
from tests.fakes import FakeProxy

runner = CliRunner()


@pytest.fixture()
def proxy(monkeypatch) -> FakeProxy:
    fake = FakeProxy()
    monkeypatch.setattr(cli, "_http_client", fake.client)
    return fake


def test_search_lists_results_and_marks_favorites(proxy):
    assert runner.invoke(cli.app, ["favorite", "103"]).exit_code == 0

    result = runner.invoke(cli.app, ["search", "pasta", "--cuisine", "italian", "-n", "6"])

    assert result.exit_code == 0, result.output
    lines = result.output.rstrip("\n").splitlines()
    assert lines == ["  101\tCreamy Garlic Pasta", "* 103\tPasta Primavera"]
    params = proxy.calls("/api/search")[0].url.params
    assert params["q"] == "pasta"
    assert params["number"] == "6"
    assert params["cuisine"] == "italian"


def test_search_json_output(proxy):
    result = runner.invoke(cli.app, ["search", "soup", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [
        {"id": 105, "title": "Tomato Soup", "image": "https://img.test/105.jpg"}
    ]


def test_search_without_matches(proxy):
    result = runner.invoke(cli.app, ["search", "zzzqqqnonexistent"])

    assert result.exit_code == 0
    assert 'No recipes found for "zzzqqqnonexistent"' in result.output


def test_recipe_prints_details(proxy):
    result = runner.invoke(cli.app, ["recipe", "101"])

    assert result.exit_code == 0, result.output
    assert "Recipe 101" in result.output
    assert "Ready in: 25 min" in result.output
    assert "  - 200 g spaghetti" in result.output
    assert "  2. Toss with garlic." in result.output


def test_recipe_failure_exits_non_zero(proxy):
    proxy.failing_ids = {9}

    result = runner.invoke(cli.app, ["recipe", "9"])

    assert result.exit_code == 1
    assert "Recipe 9 not found" in result.output


def test_favorite_toggle_and_listing():
    first = runner.invoke(cli.app, ["favorite", "12"])
    runner.invoke(cli.app, ["favorite", "34"])
    listed = runner.invoke(cli.app, ["favorites"])
    removed = runner.invoke(cli.app, ["favorite", "12"])
    after = runner.invoke(cli.app, ["favorites"])

    assert "Added 12 to favorites (1 total)." in first.output
    assert listed.output.split() == ["12", "34"]
    assert "Removed 12 from favorites (1 total)." in removed.output
    assert after.output.split() == ["34"]


def test_favorites_empty_hint():
    result = runner.invoke(cli.app, ["favorites"])

    assert result.exit_code == 0
    assert "No favorites yet!" in result.output


def test_serve_delegates_to_uvicorn_runner(monkeypatch):
    calls = []
    monkeypatch.setattr(cli, "run_server", lambda host, port, reload=False: calls.append((host, port, reload)))

    result = runner.invoke(cli.app, ["serve", "--port", "9001"])

    assert result.exit_code == 0, result.output
    assert calls == [("127.0.0.1", 9001, False)]


def test_recipe_without_steps_falls_back_to_summary(proxy):
    proxy.minimal_ids = {55, 56}
    proxy.summaries = {55: "A <b>quick</b> dish."}

    with_summary = runner.invoke(cli.app, ["recipe", "55"])
    bare = runner.invoke(cli.app, ["recipe", "56"])

    assert with_summary.exit_code == 0, with_summary.output
    assert "  A quick dish." in with_summary.output
    assert "Instructions unavailable" not in with_summary.output
    assert "  Instructions unavailable" in bare.output
