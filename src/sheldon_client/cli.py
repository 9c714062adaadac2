"""
Typer-powered CLI for poking at a Sheldon instance.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Iterable, List, Optional

import typer
from rich import print
from rich.markup import escape
from rich.table import Table

from .client import SheldonClient
from .config import Settings
from .models import Edge, SearchIndex

app = typer.Typer(add_completion=False, help="Sheldon graph service CLI")
state = {"host": None, "verbose": False}


def build_client() -> SheldonClient:
    settings = Settings()
    if state["host"]:
        settings.host = state["host"]
    return SheldonClient(settings)


def _fail(message: str) -> None:
    print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)


def _payload(record: Any) -> str:
    return escape(json.dumps(record.payload, ensure_ascii=False))


def _records_table(records: Iterable[Any]) -> Table:
    table = Table("ID", "Type", "From", "To", "Payload")
    for record in records:
        if isinstance(record, Edge):
            table.add_row(str(record.id), record.type or "", str(record.from_), str(record.to), _payload(record))
        else:
            table.add_row(str(record.id), record.type, "", "", _payload(record))
    return table


def _parse_options(pairs: List[str]) -> dict:
    options = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {pair!r}")
        options[key] = value
    return options


@app.callback()
def main(
    host: Optional[str] = typer.Option(None, help="Sheldon host, overrides SHELDON_HOST"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request"),
):
    state["host"] = host
    state["verbose"] = verbose
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(message)s")


def _client() -> SheldonClient:
    client = build_client()
    if state["verbose"]:
        client.log = True
    return client


@app.command()
def search(
    node_type: str = typer.Argument(..., help="Plural node type, e.g. movies"),
    options: List[str] = typer.Argument(None, help="Search options as KEY=VALUE"),
    fulltext: bool = typer.Option(False, help="Use the fulltext index"),
):
    """
    Search nodes of a type.
    """
    index = SearchIndex.FULLTEXT if fulltext else SearchIndex.EXACT
    with _client() as client:
        results = client.search(node_type, _parse_options(options or []), index)
    print(_records_table(results))


@app.command()
def node(node_id: str):
    """
    Show a single node.
    """
    with _client() as client:
        result = client.node(node_id)
    if result is None:
        _fail(f"Node {node_id} not found")
    print(_records_table([result]))


@app.command()
def edge(edge_id: str):
    """
    Show a single edge.
    """
    with _client() as client:
        result = client.edge(edge_id)
    if result is None:
        _fail(f"Edge {edge_id} not found")
    print(_records_table([result]))


@app.command()
def neighbours(node_id: str, edge_type: str):
    """
    List the nodes connected to a node via edges of a type.
    """
    with _client() as client:
        results = client.fetch_neighbours(node_id, edge_type)
    print(_records_table(results))


@app.command()
def types(edges: bool = typer.Option(False, "--edges", help="List edge types instead of node types")):
    """
    List the node (or edge) types in the Sheldon schema.
    """
    with _client() as client:
        names = client.edge_types() if edges else client.node_types()
    table = Table("Edge type" if edges else "Node type")
    for name in names:
        table.add_row(name)
    print(table)


@app.command()
def highscores(
    user_id: str,
    tracked: bool = typer.Option(False, "--tracked"),
    untracked: bool = typer.Option(False, "--untracked"),
):
    """
    Dump the high score edges of a user.
    """
    if tracked and untracked:
        raise typer.BadParameter("--tracked and --untracked are mutually exclusive")
    kind = "tracked" if tracked else "untracked" if untracked else None
    with _client() as client:
        scores = client.get_highscores(user_id, kind)
    if scores is None:
        _fail(f"No high scores for user {user_id}")
    typer.echo(json.dumps(scores, indent=2))


@app.command()
def recommendations(user_id: str):
    """
    Dump the container recommendations of a user.
    """
    with _client() as client:
        result = client.get_recommendations(user_id)
    if result is None:
        _fail(f"No recommendations for user {user_id}")
    typer.echo(json.dumps(result, indent=2))


def _report(done: bool, success: str, failure: str) -> None:
    if not done:
        _fail(failure)
    print(f"[green]{success}[/green]")


@app.command("delete-node")
def delete_node(node_id: str):
    with _client() as client:
        _report(client.delete_node(node_id), f"Deleted node {node_id}", f"Could not delete node {node_id}")


@app.command("delete-edge")
def delete_edge(edge_id: str):
    with _client() as client:
        _report(client.delete_edge(edge_id), f"Deleted edge {edge_id}", f"Could not delete edge {edge_id}")


@app.command("reindex-node")
def reindex_node(node_id: str):
    with _client() as client:
        _report(client.reindex_node(node_id), f"Reindexed node {node_id}", f"Could not reindex node {node_id}")


if __name__ == "__main__":
    app()
