"""
schemas/messages.py
--------------------

Request and response bodies for the manual send endpoint and the
message list placeholder.
"""

from __future__ import annotations

from typing import Any, List
from pydantic import BaseModel


class SendMessageRequest(BaseModel):
    phone: str
    message: str


class SendMessageResponse(BaseModel):
    success: bool
    message: str


class MessagesResponse(BaseModel):
    messages: List[Any] = []
