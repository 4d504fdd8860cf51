"""
schemas/auth.py
----------------

Pydantic models for the login proxy.  Both credential fields are
optional at the schema level so that a missing value is answered with
the service's own 400 message instead of a validation error.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from pydantic import BaseModel


class LoginData(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    success: bool
    message: str
    token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None
