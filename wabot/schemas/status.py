"""
schemas/status.py
------------------

Connection status shown by the admin page while it polls the backend.
``qrCode`` keeps the camelCase name the frontend reads.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel


class StatusResponse(BaseModel):
    connected: bool
    qrCode: Optional[str] = None
