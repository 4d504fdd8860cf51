"""
clients/http_client.py
----------------------

HTTP client wrapper with connection pooling and timeouts.  One
instance is created per process in the FastAPI lifespan event and
shared by the APEX client and the WhatsApp gateway transport.  It uses
``httpx`` under the hood and honours :mod:`wabot.core.config`.

Requests are sent exactly once.  Network-level failures propagate as
``httpx`` exceptions and callers decide how to surface them; HTTP error
statuses are returned as ordinary responses.
"""

from __future__ import annotations

import json
import time
from typing import Any, Optional

import httpx

from wabot.core.config import Settings, get_settings
from wabot.logging_config import log_http_request, logger


class HTTPClient:
    """Pooled synchronous HTTP client with request logging."""

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.BaseTransport] = None) -> None:
        settings = settings or get_settings()
        self.timeout = settings.http_timeout
        self._client = httpx.Client(timeout=self.timeout, transport=transport)

    def close(self) -> None:
        """Close the underlying HTTPX client and release resources."""
        self._client.close()

    def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Perform a single HTTP request.

        Keyword arguments are passed to :meth:`httpx.Client.request`, so a
        per-call ``timeout`` overrides the client default.
        """
        method = method.upper()
        start_time = time.time()
        log_http_request(method, url, json_body=kwargs.get("json"))
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error(json.dumps({
                "event": "http_error",
                "method": method,
                "url": url,
                "detail": str(exc) or exc.__class__.__name__,
            }))
            raise
        log_http_request(method, url, status=response.status_code,
                         duration_ms=(time.time() - start_time) * 1000)
        return response

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", url, **kwargs)
