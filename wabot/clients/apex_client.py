"""
clients/apex_client.py
----------------------

Client for the external APEX REST service, which owns customer data,
discounts and the login decision.  The client only shapes requests and
decodes responses; interpreting the ``success`` flags is left to the
services.
"""

from __future__ import annotations

from typing import Any, Tuple

import httpx

from wabot.clients.http_client import HTTPClient
from wabot.core.config import Settings


class ApexError(Exception):
    """APEX could not be reached or answered something unreadable."""


class ApexHTTPError(ApexError):
    """APEX answered with a server error status (5xx)."""

    def __init__(self, status_code: int, body: Any) -> None:
        message = body.get("message") if isinstance(body, dict) else None
        super().__init__(message or f"APEX respondió {status_code}")
        self.status_code = status_code
        self.body = body


def _read_body(response: httpx.Response) -> Any:
    """Return the decoded JSON body, or the raw text when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


class ApexClient:
    def __init__(self, http_client: HTTPClient, settings: Settings) -> None:
        self.http_client = http_client
        self.base_url = settings.apex_api_url.rstrip("/")
        self.login_url = settings.apex_login_url
        self.auth_timeout = settings.auth_timeout

    def consultar_cliente(self, telefono: str) -> Any:
        """Look up a customer by phone number.

        :raises ApexError: on network failure or a non-JSON body
        """
        url = f"{self.base_url}/clientes/{telefono}"
        try:
            response = self.http_client.get(url)
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ApexError(str(exc) or exc.__class__.__name__) from exc

    def actualizar_descuento(self, telefono: str, descuento: float) -> Any:
        """Set the discount percentage of the customer owning ``telefono``.

        :raises ApexError: on network failure or a non-JSON body
        """
        url = f"{self.base_url}/clientes/descuento"
        try:
            response = self.http_client.post(url, json={"telefono": telefono, "descuento": descuento})
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ApexError(str(exc) or exc.__class__.__name__) from exc

    def login(self, username: str, password: str) -> Tuple[int, Any]:
        """Forward credentials to the APEX login endpoint.

        Statuses below 500 are returned with their body (decoded JSON, or
        raw text) so the caller can inspect the ``success`` flag.  Network
        failures propagate as ``httpx`` exceptions, so a timeout can be
        told apart from a refused connection.

        :raises ApexHTTPError: when APEX answers with a 5xx status
        :return: ``(status_code, body)``
        """
        response = self.http_client.post(
            self.login_url,
            json={"username": username, "password": password},
            headers={"Content-Type": "application/json"},
            timeout=self.auth_timeout,
        )
        body = _read_body(response)
        if response.status_code >= 500:
            raise ApexHTTPError(response.status_code, body)
        return response.status_code, body

