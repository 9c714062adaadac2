"""
Response decoding into Node and Edge records.
"""
from __future__ import annotations

import json
from typing import Annotated, Any, List, Union

from pydantic import Discriminator, Tag, TypeAdapter

from .models import Edge, Node


def record_kind(value: Any) -> str:
    """
    Decide whether a decoded search element is an edge or a node.

    Elements carrying both ``from`` and ``to`` are edges; everything else is
    treated as a node.
    """
    if isinstance(value, dict):
        return "edge" if "from" in value and "to" in value else "node"
    return "edge" if isinstance(value, Edge) else "node"


SearchRecord = Annotated[
    Union[Annotated[Node, Tag("node")], Annotated[Edge, Tag("edge")]],
    Discriminator(record_kind),
]

_search_result = TypeAdapter(List[SearchRecord])


def parse_json(body: Union[str, bytes]) -> Any:
    return json.loads(body)


def parse_node(body: Union[str, bytes]) -> Node:
    return Node.model_validate(parse_json(body))


def parse_edge(body: Union[str, bytes]) -> Edge:
    return Edge.model_validate(parse_json(body))


def parse_search_result(body: Union[str, bytes, None]) -> List[Union[Node, Edge]]:
    """
    Decode a JSON array of nodes and edges. A missing body or ``null`` yields ``[]``.
    """
    if not body or not body.strip():
        return []
    data = parse_json(body)
    if data is None:
        return []
    return _search_result.validate_python(data)
