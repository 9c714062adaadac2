"""
Request URL builders for the Sheldon REST API.

Every builder is a pure function of the host and its arguments and returns an
``httpx.URL``. Node references may be passed either as raw ids or as
:class:`~sheldon_client.models.Node` values.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import quote

import httpx

from .models import SearchIndex, identify


def _segment(value: Any) -> str:
    return quote(str(identify(value)), safe="")


def _url(host: str, *segments: Any, params: Optional[List[Tuple[str, Any]]] = None) -> httpx.URL:
    path = "/".join(_segment(segment) for segment in segments)
    if params:
        return httpx.URL(f"{host}/{path}", params=params)
    return httpx.URL(f"{host}/{path}")


def build_url(host: str, path: str) -> httpx.URL:
    """
    Append a caller supplied path (and optional query string) to the host verbatim.
    """
    return httpx.URL(f"{host}{path}")


def build_search_url(
    host: str,
    node_type: str,
    options: Optional[Dict[str, Any]] = None,
    index: Union[SearchIndex, str] = SearchIndex.EXACT,
) -> httpx.URL:
    params = [(key, value) for key, value in sorted((options or {}).items()) if value is not None]
    index = index.value if isinstance(index, SearchIndex) else str(index)
    if index != SearchIndex.EXACT.value:
        params.append(("type", index))
    return _url(host, "search", "nodes", node_type, params=params)


def build_node_url(host: str, node_id: Any) -> httpx.URL:
    return _url(host, "nodes", node_id)


def build_node_ids_of_type_url(host: str, node_type: str) -> httpx.URL:
    return _url(host, "nodes", node_type, "ids")


def build_edge_url(host: str, edge_id: Any) -> httpx.URL:
    return _url(host, "connections", edge_id)


def build_fetch_edge_url(host: str, from_node: Any, to_node: Any, edge_type: str) -> httpx.URL:
    return _url(host, "nodes", from_node, "connections", edge_type, to_node)


def build_edge_search_url(host: str, node: Any, edge_type: str) -> httpx.URL:
    return _url(host, "nodes", node, "connections", edge_type)


def create_node_url(host: str, node_type: str) -> httpx.URL:
    return _url(host, "nodes", node_type)


def create_edge_url(host: str, from_node: Any, to_node: Any, edge_type: str) -> httpx.URL:
    return build_fetch_edge_url(host, from_node, to_node, edge_type)


def build_reindex_node_url(host: str, node_id: Any) -> httpx.URL:
    return _url(host, "nodes", node_id, "reindex")


def build_reindex_edge_url(host: str, edge_id: Any) -> httpx.URL:
    return _url(host, "connections", edge_id, "reindex")


def build_status_url(host: str) -> httpx.URL:
    return _url(host, "status")


def build_high_score_url(host: str, user_id: Any, kind: Optional[str] = None) -> httpx.URL:
    """
    ``kind`` is ``None`` for all high scores, or ``"tracked"`` / ``"untracked"``.
    """
    if kind:
        return _url(host, "high_scores", "users", user_id, kind)
    return _url(host, "high_scores", "users", user_id)


def build_recommendation_url(host: str, user_id: Any) -> httpx.URL:
    return _url(host, "recommendations", "user", user_id, "containers")


def build_facebook_id_search_url(host: str, fbid: Any) -> httpx.URL:
    return _url(host, "search", params=[("q", str(fbid))])
