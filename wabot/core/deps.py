"""
core/deps.py
-------------

FastAPI dependencies that hand the per-process objects created in the
lifespan event (settings, HTTP/APEX clients, WhatsApp session) to the
routes.
"""

from __future__ import annotations

from fastapi import Request

from wabot.clients.apex_client import ApexClient
from wabot.core.config import Settings
from wabot.session.state import SessionState
from wabot.session.transport import SessionTransport


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_apex_client(request: Request) -> ApexClient:
    return request.app.state.apex_client


def get_session_state(request: Request) -> SessionState:
    return request.app.state.session_state


def get_transport(request: Request) -> SessionTransport:
    return request.app.state.transport
