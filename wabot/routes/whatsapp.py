"""
routes/whatsapp.py
-------------------

Webhook receiving session notifications from the WhatsApp Web gateway.

Pairing, ready and disconnect notifications are applied before the
response is sent.  Inbound chat messages are handled in a background
task, so each one runs its own APEX round trip without holding up the
gateway or other messages.
"""

from __future__ import annotations

import json
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException
from pydantic import ValidationError

from wabot.core.config import Settings
from wabot.core.deps import get_settings_dep, get_transport
from wabot.logging_config import logger
from wabot.schemas.whatsapp import GatewayEvent, IncomingMessage
from wabot.session.transport import SessionTransport

router = APIRouter(prefix="/api/whatsapp", tags=["WhatsApp"])


@router.post("/events")
def post_gateway_event(
    payload: GatewayEvent,
    background_tasks: BackgroundTasks,
    transport: SessionTransport = Depends(get_transport),
    settings: Settings = Depends(get_settings_dep),
    x_gateway_token: Optional[str] = Header(None),
):
    if settings.gateway_token and x_gateway_token != settings.gateway_token:
        raise HTTPException(status_code=401, detail="Gateway no autorizado")

    if payload.event == "message":
        try:
            message = IncomingMessage.model_validate(payload.data)
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail="Mensaje inválido") from exc
        background_tasks.add_task(transport.emit, "message", message)
    elif payload.event == "qr":
        code = payload.data.get("qr")
        if not code:
            raise HTTPException(status_code=422, detail="Falta el código QR")
        transport.emit("qr", code)
    elif payload.event == "ready":
        transport.emit("ready")
    else:
        transport.emit("disconnected", payload.data.get("reason"))

    logger.debug(json.dumps({"event": "gateway_event", "tipo": payload.event}))
    return {"status": "received"}
