"""
HTTP transport: one JSON request per call, with optional request timing logs.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Optional

import httpx

from .config import Settings

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("sheldon_client.requests")

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class Transport:
    def __init__(self, settings: Settings, http: Optional[httpx.Client] = None) -> None:
        self.settings = settings
        self._owns_http = http is None
        self.http = http or httpx.Client(timeout=settings.timeout)

    def send_request(self, method: str, uri: httpx.URL | str, body: Any = None) -> httpx.Response:
        """
        Send a single request and return the raw response, whatever its status.

        ``body`` is serialized as JSON when given. Network failures surface as
        ``httpx.HTTPError``; nothing is retried.
        """
        content = json.dumps(body) if body is not None else None
        started = time.perf_counter()
        response = self.http.request(method.upper(), uri, content=content, headers=JSON_HEADERS)
        if self.settings.log:
            self.log_request(method, uri, response.status_code, time.perf_counter() - started)
        return response

    def log_request(self, method: str, uri: httpx.URL | str, status_code: int, elapsed: float) -> None:
        try:
            level = logging.WARNING if elapsed >= self.settings.slow_request_threshold else logging.INFO
            request_logger.log(
                level,
                "%s %s -> %s in %.1fms",
                method.upper(),
                uri,
                status_code,
                elapsed * 1000,
                extra={"method": method.upper(), "uri": str(uri), "status_code": status_code, "elapsed": elapsed},
            )
        except Exception:
            logger.debug("Could not record request %s %s", method, uri, exc_info=True)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
