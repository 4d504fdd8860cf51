"""
services/messaging_service.py
-----------------------------

Manual message sending from the admin page.  Shares the single
session transport with the chat command handler; no ordering is
enforced between the two.
"""

from __future__ import annotations

import json

from wabot.core.errors import ApiError
from wabot.logging_config import logger, log_call
from wabot.schemas.messages import SendMessageRequest, SendMessageResponse
from wabot.session.state import SessionState
from wabot.session.transport import SessionTransport, TransportError


def to_chat_id(phone: str, suffix: str = "@c.us") -> str:
    return phone if suffix in phone else f"{phone}{suffix}"


@log_call
def send_manual_message(data: SendMessageRequest, state: SessionState,
                        transport: SessionTransport, suffix: str = "@c.us") -> SendMessageResponse:
    """Send ``data.message`` to ``data.phone`` through the WhatsApp session.

    :raises ApiError: 400 while the session is not connected, 500 when the
        transport fails
    """
    if not state.connected:
        raise ApiError(400, {"error": "WhatsApp no está conectado"})
    chat_id = to_chat_id(data.phone, suffix)
    try:
        transport.send_message(chat_id, data.message)
    except TransportError as exc:
        logger.error(json.dumps({
            "event": "send_message_error",
            "chat_id": chat_id,
            "detalle": str(exc),
        }))
        raise ApiError(500, {"error": "Error al enviar mensaje", "details": str(exc)}) from exc
    logger.info(json.dumps({"event": "send_message_ok", "chat_id": chat_id}))
    return SendMessageResponse(success=True, message="Mensaje enviado")
