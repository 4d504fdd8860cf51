"""
routes/messages.py
-------------------

Manual sending through the WhatsApp session and the message list
placeholder.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from wabot.core.config import Settings
from wabot.core.deps import get_session_state, get_settings_dep, get_transport
from wabot.core.security import require_auth
from wabot.schemas.messages import MessagesResponse, SendMessageRequest, SendMessageResponse
from wabot.services.messaging_service import send_manual_message
from wabot.session.state import SessionState
from wabot.session.transport import SessionTransport

router = APIRouter(prefix="/api", tags=["WhatsApp"])


@router.post("/send-message", response_model=SendMessageResponse)
def post_send_message(
    data: SendMessageRequest,
    claims: Dict[str, Any] = Depends(require_auth),
    state: SessionState = Depends(get_session_state),
    transport: SessionTransport = Depends(get_transport),
    settings: Settings = Depends(get_settings_dep),
):
    """Envía un mensaje manual desde el panel."""
    return send_manual_message(data, state, transport, settings.chat_suffix)


@router.get("/messages", response_model=MessagesResponse)
def get_messages():
    # no message history is stored
    return MessagesResponse(messages=[])
