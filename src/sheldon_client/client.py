"""
Client facade for the Sheldon graph service.
"""
from __future__ import annotations

import logging
import warnings
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Union

import httpx

from . import urls
from .config import Settings
from .exceptions import NeighbourNotFoundError, UnexpectedStatusError
from .models import Edge, Node, SearchIndex, identify
from .parsing import parse_edge, parse_json, parse_node, parse_search_result
from .transport import Transport

logger = logging.getLogger(__name__)

SearchResult = List[Union[Node, Edge]]


class SheldonClient:
    """
    Typed access to the nodes and edges stored in Sheldon.

    Every operation sends one request and maps the exact status code it
    expects to a result; any other status yields ``None``, ``False`` or an
    empty list. Network and decoding errors are not caught.

    Example::

        with SheldonClient() as sheldon:
            matrix = sheldon.search("movies", {"title": "The Matrix"})[0]
            action = sheldon.search("genres", {"name": "Action"})[0]
            sheldon.create_edge(matrix, action, "genre_taggings", {"weight": 1.0})
    """

    def __init__(self, settings: Optional[Settings] = None, http: Optional[httpx.Client] = None) -> None:
        self.settings = settings or Settings()
        self.transport = Transport(self.settings, http)
        self._temp_host: Optional[str] = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @property
    def host(self) -> str:
        return self._temp_host or self.settings.host

    @host.setter
    def host(self, value: str) -> None:
        self.settings.host = value

    @property
    def log(self) -> bool:
        return self.settings.log

    @log.setter
    def log(self, value: bool) -> None:
        self.settings.log = value

    @contextmanager
    def with_host(self, host: str) -> Iterator["SheldonClient"]:
        """
        Talk to a different Sheldon instance for the duration of the block.

            with sheldon.with_host("http://localhost:3000"):
                sheldon.node(1234)
        """
        self._temp_host = host.rstrip("/")
        try:
            yield self
        finally:
            self._temp_host = None

    def send_request(self, method: str, uri: Union[httpx.URL, str], body: Any = None) -> httpx.Response:
        return self.transport.send_request(method, uri, body)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "SheldonClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Searching and collections
    # ------------------------------------------------------------------
    def search(
        self,
        node_type: str,
        options: Optional[Dict[str, Any]] = None,
        index: Union[SearchIndex, str] = SearchIndex.EXACT,
    ) -> SearchResult:
        """
        Search for nodes of a type (plural, e.g. ``"movies"``).

        The options are forwarded to the service's lucene index, e.g.
        ``{"title": "Fist*"}`` for movies or ``{"name": "Action"}`` for genres.
        """
        uri = urls.build_search_url(self.host, node_type, options, index)
        return self._fetch_records(uri)

    def fetch_edges(self, node: Any, edge_type: str) -> SearchResult:
        """
        Fetch all edges of ``edge_type`` leaving a node (or node id).
        """
        uri = urls.build_edge_search_url(self.host, node, edge_type)
        return self._fetch_records(uri)

    def fetch_neighbours(self, node: Any, edge_type: str) -> List[Node]:
        """
        Fetch the nodes at the far end of every ``edge_type`` edge of a node.

        Raises NeighbourNotFoundError when one of the neighbours cannot be
        fetched.
        """
        neighbours = []
        for edge in self.fetch_edges(identify(node), edge_type):
            neighbour = self.fetch_node(edge.to)
            if neighbour is None:
                raise NeighbourNotFoundError(edge.to, edge.id)
            neighbours.append(neighbour)
        return neighbours

    def fetch_collection(self, path: str) -> SearchResult:
        """
        Fetch nodes or edges from a path relative to the host, e.g.
        ``/high_scores/users/13/untracked``.
        """
        return self._fetch_records(urls.build_url(self.host, path))

    def fetch_edge_collection(self, path: str) -> SearchResult:
        return self.fetch_collection(path)

    def facebook_item(self, fbid: Any) -> SearchResult:
        """
        Look up whatever node carries the given facebook id; the answer is
        usually the first element.
        """
        return self._fetch_records(urls.build_facebook_id_search_url(self.host, fbid))

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------
    def fetch_node(self, node_id: Any) -> Optional[Node]:
        response = self.send_request("get", urls.build_node_url(self.host, node_id))
        return parse_node(response.content) if response.status_code == 200 else None

    def node(self, node_id: Any) -> Optional[Node]:
        """
        Fetch a single node, e.g. ``sheldon.node(17007)``.
        """
        return self.fetch_node(node_id)

    def create_node(self, node_type: str, payload: Dict[str, Any]) -> Optional[Node]:
        response = self.send_request("post", urls.create_node_url(self.host, node_type), payload)
        return parse_node(response.content) if response.status_code == 201 else None

    def update_node(self, node_id: Any, payload: Dict[str, Any]) -> bool:
        """
        Replace the payload of an existing node. Nothing is sent when the node
        cannot be fetched first.
        """
        node = self.node(node_id)
        if node is None:
            return False
        response = self.send_request("put", urls.build_node_url(self.host, node.id), payload)
        return response.status_code == 200

    def delete_node(self, node_id: Any) -> bool:
        response = self.send_request("delete", urls.build_node_url(self.host, node_id))
        return response.status_code == 200

    def reindex_node(self, node_id: Any) -> bool:
        response = self.send_request("put", urls.build_reindex_node_url(self.host, node_id))
        return response.status_code == 200

    def get_node_ids_of_type(self, node_type: str) -> Optional[List[Any]]:
        """
        All ids of a node type, e.g. ``get_node_ids_of_type("movies")``.
        """
        return self._fetch_json(urls.build_node_ids_of_type_url(self.host, node_type))

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------
    def edge(self, edge_id: Any) -> Optional[Edge]:
        response = self.send_request("get", urls.build_edge_url(self.host, edge_id))
        return parse_edge(response.content) if response.status_code == 200 else None

    def edge_between(self, from_node: Any, to_node: Any, edge_type: str) -> Optional[Edge]:
        """
        Fetch the ``edge_type`` edge from one node to another, if it exists.
        """
        response = self.send_request("get", urls.build_fetch_edge_url(self.host, from_node, to_node, edge_type))
        return parse_edge(response.content) if response.status_code == 200 else None

    def create_edge(
        self,
        from_node: Any,
        to_node: Any,
        edge_type: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Connect two nodes (or node ids) with an edge of ``edge_type``.
        """
        uri = urls.create_edge_url(self.host, from_node, to_node, edge_type)
        response = self.send_request("put", uri, payload)
        return response.status_code == 200

    def update_edge(self, from_node: Any, to_node: Any, edge_type: str, payload: Dict[str, Any]) -> bool:
        uri = urls.build_fetch_edge_url(self.host, from_node, to_node, edge_type)
        response = self.send_request("put", uri, payload)
        return response.status_code == 200

    def delete_edge(self, edge_id: Any) -> bool:
        response = self.send_request("delete", urls.build_edge_url(self.host, edge_id))
        return response.status_code == 200

    def reindex_edge(self, edge_id: Any) -> bool:
        response = self.send_request("put", urls.build_reindex_edge_url(self.host, edge_id))
        return response.status_code == 200

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------
    def node_types(self) -> List[str]:
        """
        Names of the node types Sheldon knows about, e.g. ``["Movie", "Person"]``.
        """
        return self._schema_types(edges=False)

    def edge_types(self) -> List[str]:
        """
        Names of the edge types Sheldon knows about, e.g. ``["Acting", "Like"]``.
        """
        return self._schema_types(edges=True)

    def get_node_types(self) -> List[str]:
        warnings.warn(
            "SheldonClient.get_node_types is deprecated, use SheldonClient.node_types",
            DeprecationWarning,
            stacklevel=2,
        )
        return self._schema_types(edges=False)

    def get_edge_types(self) -> List[str]:
        warnings.warn(
            "SheldonClient.get_edge_types is deprecated, use SheldonClient.edge_types",
            DeprecationWarning,
            stacklevel=2,
        )
        return self._schema_types(edges=True)

    def _schema_types(self, edges: bool) -> List[str]:
        uri = urls.build_status_url(self.host)
        response = self.send_request("get", uri)
        if response.status_code != 200:
            raise UnexpectedStatusError(response.status_code, str(uri))
        schema = parse_json(response.content).get("schema", {})
        types = []
        for name, definition in schema.items():
            is_edge = "source_class" in definition and "target_class" in definition
            is_node = "source_class" not in definition and "target_class" not in definition
            if (edges and is_edge) or (not edges and is_node):
                types.append(name)
        return types

    # ------------------------------------------------------------------
    # High scores and recommendations
    # ------------------------------------------------------------------
    def get_highscores(self, user_id: Any, kind: Optional[str] = None) -> Any:
        """
        High score edges of a user node, returned as decoded JSON:
        ``[{"id": 5, "from": 6, "to": 1, "payload": {"weight": 5}}]``.
        """
        return self._fetch_json(urls.build_high_score_url(self.host, user_id, kind))

    def get_highscores_tracked(self, user_id: Any) -> Any:
        return self.get_highscores(user_id, "tracked")

    def get_highscores_untracked(self, user_id: Any) -> Any:
        return self.get_highscores(user_id, "untracked")

    def get_recommendations(self, user_id: Any) -> Any:
        return self._fetch_json(urls.build_recommendation_url(self.host, user_id))

    # ------------------------------------------------------------------
    def _fetch_records(self, uri: httpx.URL) -> SearchResult:
        response = self.send_request("get", uri)
        if response.status_code != 200:
            logger.debug("GET %s answered %s, returning no results", uri, response.status_code)
            return []
        return parse_search_result(response.content)

    def _fetch_json(self, uri: httpx.URL) -> Any:
        response = self.send_request("get", uri)
        return parse_json(response.content) if response.status_code == 200 else None
