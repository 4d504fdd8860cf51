"""
session/transport.py
---------------------

Boundary to the WhatsApp session.

The session itself (browser automation, pairing, encryption) runs in an
external WhatsApp Web gateway process.  :class:`SessionTransport` is the
small surface this service needs from it: subscribe to ``qr``,
``ready``, ``message`` and ``disconnected`` notifications, and send a
text to a chat id.  :class:`GatewayTransport` speaks HTTP to the
gateway; notifications come back through the ``/api/whatsapp/events``
webhook, which hands them to :meth:`SessionTransport.emit`.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Callable, DefaultDict, List, Optional

import httpx

from wabot.clients.http_client import HTTPClient
from wabot.core.config import Settings
from wabot.logging_config import logger

EVENTS = ("qr", "ready", "message", "disconnected")

Handler = Callable[[Any], None]


class TransportError(Exception):
    """The gateway refused or failed to deliver an outbound message."""


class SessionTransport(ABC):
    """Event source and outbound channel for one WhatsApp session."""

    def __init__(self) -> None:
        self._handlers: DefaultDict[str, List[Handler]] = defaultdict(list)

    def on(self, event: str, handler: Handler) -> None:
        if event not in EVENTS:
            raise ValueError(f"Evento desconocido: {event}")
        self._handlers[event].append(handler)

    def emit(self, event: str, payload: Any = None) -> None:
        """Deliver a notification to every subscriber of ``event``.

        A failing subscriber is logged and does not prevent the others
        from running.
        """
        for handler in list(self._handlers[event]):
            try:
                handler(payload)
            except Exception as exc:
                logger.error(json.dumps({
                    "event": "transport_handler_error",
                    "whatsapp_event": event,
                    "handler": getattr(handler, "__name__", repr(handler)),
                    "detalle": str(exc),
                }), exc_info=True)

    @abstractmethod
    def send_message(self, chat_id: str, text: str) -> None:
        """Send ``text`` to ``chat_id``.

        :raises TransportError: if the message could not be handed over
        """

    def initialize(self) -> None:
        """Start the session; pairing and readiness are reported via events."""

    def close(self) -> None:
        """Release transport resources."""


class GatewayTransport(SessionTransport):
    """Transport backed by an HTTP WhatsApp Web gateway."""

    def __init__(self, http_client: HTTPClient, settings: Settings) -> None:
        super().__init__()
        self.http_client = http_client
        self.base_url = settings.gateway_url.rstrip("/")

    def initialize(self) -> None:
        try:
            response = self.http_client.post(f"{self.base_url}/session/start")
        except httpx.HTTPError as exc:
            logger.warning(json.dumps({
                "event": "gateway_start_failed",
                "gateway": self.base_url,
                "detalle": str(exc) or exc.__class__.__name__,
            }))
            return
        logger.info(json.dumps({
            "event": "gateway_start",
            "gateway": self.base_url,
            "status": response.status_code,
        }))

    def send_message(self, chat_id: str, text: str) -> None:
        try:
            response = self.http_client.post(
                f"{self.base_url}/send",
                json={"chatId": chat_id, "message": text},
            )
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or exc.__class__.__name__) from exc
        if response.is_error:
            raise TransportError(_error_detail(response))


def _error_detail(response: httpx.Response) -> str:
    detail: Optional[str] = None
    try:
        body = response.json()
        if isinstance(body, dict):
            detail = body.get("error") or body.get("message")
    except ValueError:
        pass
    return detail or f"Gateway respondió {response.status_code}"
