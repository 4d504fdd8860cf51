# main.py
from __future__ import annotations

import json
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

# Import logging utilities early so that the logger configuration is
# applied before any other modules emit log messages.
from wabot.logging_config import logger

from wabot.clients.apex_client import ApexClient
from wabot.clients.http_client import HTTPClient
from wabot.core.config import Settings, get_settings
from wabot.core.errors import ApiError, api_error_handler
from wabot.routes.auth import router as auth_router
from wabot.routes.clientes import router as clientes_router
from wabot.routes.messages import router as messages_router
from wabot.routes.status import router as status_router
from wabot.routes.whatsapp import router as whatsapp_router
from wabot.services.command_service import make_message_handler
from wabot.session.state import SessionState
from wabot.session.transport import GatewayTransport, SessionTransport


def wire_session(transport: SessionTransport, state: SessionState, apex: ApexClient, suffix: str) -> None:
    """Subscribe the status tracker and the command handler to the transport."""
    transport.on("qr", state.on_qr)
    transport.on("ready", lambda _payload: state.on_ready())
    transport.on("disconnected", state.on_disconnected)
    transport.on("message", make_message_handler(transport, apex, suffix))


def create_app(settings: Optional[Settings] = None,
               transport: Optional[SessionTransport] = None,
               apex_client: Optional[ApexClient] = None) -> FastAPI:
    """Build the application.

    ``transport`` and ``apex_client`` default to the HTTP gateway and the
    real APEX client; tests pass their own.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # crear y compartir el cliente HTTP
        http_client = HTTPClient(settings)
        apex = apex_client or ApexClient(http_client, settings)
        session_transport = transport or GatewayTransport(http_client, settings)
        state = SessionState()
        wire_session(session_transport, state, apex, settings.chat_suffix)

        app.state.http_client = http_client
        app.state.apex_client = apex
        app.state.transport = session_transport
        app.state.session_state = state
        session_transport.initialize()
        logger.info(json.dumps({"event": "startup", "gateway": settings.gateway_url}))
        try:
            yield
        finally:
            session_transport.close()
            http_client.close()

    app = FastAPI(title="WhatsApp APEX Bot", default_response_class=ORJSONResponse, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ApiError, api_error_handler)

    app.include_router(auth_router)
    app.include_router(status_router)
    app.include_router(messages_router)
    app.include_router(clientes_router)
    app.include_router(whatsapp_router)

    # -----------------------------------------------------------------
    # Middleware de logging de requests
    # -----------------------------------------------------------------
    @app.middleware("http")  # type: ignore[misc]
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000
        logger.info(json.dumps({
            "event": "http_request",
            "path": request.url.path,
            "method": request.method,
            "status": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }))
        return response

    return app


app = create_app()
