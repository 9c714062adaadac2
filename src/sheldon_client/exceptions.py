"""Exception hierarchy for the Sheldon client."""

from __future__ import annotations


class SheldonClientError(Exception):
    """Base error raised by the client for failures it cannot map to a return value."""

    code: str = "sheldon_client_error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.message = message


class UnexpectedStatusError(SheldonClientError):
    code = "unexpected_status"

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"Sheldon answered {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class NeighbourNotFoundError(SheldonClientError):
    code = "neighbour_not_found"

    def __init__(self, node_id: object, edge_id: object) -> None:
        super().__init__(f"Node {node_id} referenced by edge {edge_id} could not be fetched")
        self.node_id = node_id
        self.edge_id = edge_id
