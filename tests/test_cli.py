"""Tests for the command line interface."""

from click.testing import CliRunner

from prouve_search.cli import cli


def _run(*args):
    return CliRunner().invoke(cli, list(args))


def test_search_command():
    result = _run("search", "热带")
    assert result.exit_code == 0
    assert "Search Results" in result.output


def test_search_without_results():
    result = _run("search", "zzzz-no-such-term")
    assert result.exit_code == 0
    assert "No results" in result.output


def test_search_rejects_unknown_type():
    result = _run("search", "热带", "--type", "video")
    assert result.exit_code != 0


def test_suggest_command():
    result = _run("suggest", "大学")
    assert result.exit_code == 0
    assert "大学城学生宿舍 (Cité Universitaire)" in result.output


def test_suggest_short_input():
    result = _run("suggest", "x")
    assert "No suggestions." in result.output


def test_recommend_command():
    result = _run("recommend", "work", "maison-tropicale", "-n", "3")
    assert result.exit_code == 0
    assert "Related to work: maison-tropicale" in result.output


def test_recommend_unknown_id():
    result = _run("recommend", "scholar", "nobody")
    assert result.exit_code == 0
    assert "No recommendations for scholar 'nobody'." in result.output


def test_facets_command():
    result = _run("facets")
    assert result.exit_code == 0
    assert "Year range: 1948 – 1954" in result.output


def test_missing_config_file_fails():
    result = _run("--config", "/nonexistent/config.yaml", "facets")
    assert result.exit_code != 0
