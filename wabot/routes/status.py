"""
routes/status.py
-----------------

Public connection status polled by the admin page.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from wabot.core.deps import get_session_state
from wabot.schemas.status import StatusResponse
from wabot.session.state import SessionState

router = APIRouter(prefix="/api", tags=["WhatsApp"])


@router.get("/status", response_model=StatusResponse)
def get_status(state: SessionState = Depends(get_session_state)):
    connected, qr_code = state.snapshot()
    return StatusResponse(connected=connected, qrCode=qr_code)
