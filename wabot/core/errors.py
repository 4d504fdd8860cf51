"""
core/errors.py
---------------

Errors whose JSON body shape is part of the public contract.

``HTTPException`` always renders ``{"detail": ...}``; the login and
messaging endpoints instead answer with ``{"success": false, "message":
...}`` or ``{"error": ..., "details": ...}``.  Services raise
:class:`ApiError` with the exact body and :func:`api_error_handler`
renders it verbatim.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import Request
from fastapi.responses import ORJSONResponse


class ApiError(Exception):
    """An error carrying its HTTP status and the JSON body to return."""

    def __init__(self, status_code: int, content: Dict[str, Any]) -> None:
        super().__init__(content.get("message") or content.get("error"))
        self.status_code = status_code
        self.content = content

    @classmethod
    def failure(cls, status_code: int, message: str) -> "ApiError":
        return cls(status_code, {"success": False, "message": message})


async def api_error_handler(request: Request, exc: ApiError) -> ORJSONResponse:
    return ORJSONResponse(status_code=exc.status_code, content=exc.content)
