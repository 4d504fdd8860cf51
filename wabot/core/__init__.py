"""
Core helpers package for the WhatsApp/APEX bridge.

Settings, token signing and the request authorization guard live here,
apart from the routes and services that use them, so tests can swap
configuration without touching business logic.
"""

__all__ = []
