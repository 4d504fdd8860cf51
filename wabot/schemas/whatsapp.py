"""
schemas/whatsapp.py
--------------------

Notifications posted by the WhatsApp Web gateway to
``/api/whatsapp/events``.  ``data`` depends on the event: ``qr`` carries
``{"qr": "<code>"}``, ``message`` carries ``{"from": "<chat id>",
"body": "<text>"}``, ``disconnected`` may carry ``{"reason": ...}`` and
``ready`` carries nothing.
"""

from __future__ import annotations

from typing import Any, Dict, Literal
from pydantic import BaseModel, ConfigDict, Field


class GatewayEvent(BaseModel):
    event: Literal["qr", "ready", "message", "disconnected"]
    data: Dict[str, Any] = Field(default_factory=dict)


class IncomingMessage(BaseModel):
    chat_id: str = Field(alias="from")
    body: str = ""

    model_config = ConfigDict(populate_by_name=True)
