import json

import pytest
from typer.testing import CliRunner

from sheldon_client import cli

HOST = "http://sheldon.host"

runner = CliRunner()


@pytest.fixture(autouse=True)
def use_fake_client(monkeypatch, sheldon):
    monkeypatch.setattr(cli, "build_client", lambda: sheldon)


def test_search_prints_matches(fake_sheldon):
    fake_sheldon.stub(
        "GET",
        f"{HOST}/search/nodes/genres?name=Action&type=fulltext",
        body=[{"type": "Genre", "id": "321", "payload": {"name": "Action"}}],
    )
    result = runner.invoke(cli.app, ["search", "genres", "name=Action", "--fulltext"])
    assert result.exit_code == 0, result.output
    assert "321" in result.output
    assert "Genre" in result.output


def test_search_rejects_malformed_options():
    result = runner.invoke(cli.app, ["search", "genres", "Action"])
    assert result.exit_code != 0


def test_missing_node_exits_with_error(fake_sheldon):
    fake_sheldon.stub("GET", f"{HOST}/nodes/42", status=404)
    result = runner.invoke(cli.app, ["node", "42"])
    assert result.exit_code == 1
    assert "Node 42 not found" in result.output


def test_types_lists_edge_types(fake_sheldon):
    fake_sheldon.stub(
        "GET",
        f"{HOST}/status",
        body={"schema": {"Movie": {"properties": []}, "Acting": {"source_class": [], "target_class": []}}},
    )
    result = runner.invoke(cli.app, ["types", "--edges"])
    assert result.exit_code == 0, result.output
    assert "Acting" in result.output
    assert "Movie" not in result.output


def test_highscores_dump_json(fake_sheldon):
    scores = [{"id": 5, "from": 6, "to": 10, "payload": {"weight": 5}}]
    fake_sheldon.stub("GET", f"{HOST}/high_scores/users/13/tracked", body=scores)
    result = runner.invoke(cli.app, ["highscores", "13", "--tracked"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == scores


def test_delete_node_reports_failure(fake_sheldon):
    fake_sheldon.stub("DELETE", f"{HOST}/nodes/122", status=404)
    result = runner.invoke(cli.app, ["delete-node", "122"])
    assert result.exit_code == 1
    assert "Could not delete node 122" in result.output


def test_reindex_node(fake_sheldon):
    fake_sheldon.stub("PUT", f"{HOST}/nodes/1337/reindex")
    result = runner.invoke(cli.app, ["reindex-node", "1337"])
    assert result.exit_code == 0, result.output
    assert "Reindexed node 1337" in result.output
