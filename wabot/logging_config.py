"""
logging_config.py
------------------

Shared logging configuration for the WhatsApp/APEX bridge.  All modules
log through the ``wabot`` logger using Python's built-in ``logging``
module, and every message is a JSON-serialised dict with an ``event``
key so the output can be shipped as-is to a log collector.

Import ``logger`` instead of calling ``logging.info`` directly.  The
``log_call`` decorator records entry and exit of service functions at
DEBUG level with credentials (passwords, tokens, secrets) stripped.
"""

from __future__ import annotations

import inspect
import json
import logging
import sys
from functools import wraps
from typing import Any, Callable, Dict

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger("wabot")

_SENSITIVE_KEYS = ("token", "password", "secret", "authorization")


def _sanitize(obj: Any) -> Any:
    """Recursively sanitise objects for logging.

    Dictionary keys containing 'token', 'password', 'secret' or
    'authorization' are dropped, byte strings are replaced by a length
    marker and Pydantic models are logged through their dict form.

    Parameters
    ----------
    obj : Any
        Arbitrary Python object to sanitise.

    Returns
    -------
    Any
        A representation of the input that is safe to JSON-serialise.
    """
    if isinstance(obj, (bytes, bytearray)):
        return f"<binary {len(obj)} bytes>"
    if isinstance(obj, dict):
        clean: Dict[str, Any] = {}
        for k, v in obj.items():
            if any(keyword in str(k).lower() for keyword in _SENSITIVE_KEYS):
                continue
            clean[k] = _sanitize(v)
        return clean
    if isinstance(obj, (list, tuple)):
        return [_sanitize(i) for i in obj]
    if hasattr(obj, "model_dump"):
        try:
            return _sanitize(obj.model_dump())
        except Exception:
            return str(obj)
    try:
        return json.loads(json.dumps(obj))
    except (TypeError, ValueError):
        return str(obj)


def log_call(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to log entry and exit of functions at DEBUG level.

    Arguments and return values pass through :func:`_sanitize` so that
    credentials never reach the log.  Exceptions raised by the wrapped
    function propagate unchanged.

    Examples
    --------

    >>> @log_call
    ... def add(a, b):
    ...     return a + b
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger.debug(json.dumps({
            "event": "call_start",
            "function": func.__name__,
            "args": _sanitize(args),
            "kwargs": _sanitize(kwargs),
        }, default=str))
        result = func(*args, **kwargs)
        logger.debug(json.dumps({
            "event": "call_end",
            "function": func.__name__,
            "result": _sanitize(result),
        }, default=str))
        return result

    # FastAPI inspects the signature when the decorator wraps a route
    wrapper.__signature__ = inspect.signature(func)  # type: ignore[attr-defined]
    return wrapper


def log_http_request(method: str, url: str, *, json_body: Dict[str, Any] | None = None,
                     status: int | None = None, duration_ms: float | None = None) -> None:
    """Log an outbound HTTP request at DEBUG level.

    Called by :class:`wabot.clients.http_client.HTTPClient` before and
    after each request.  Only the method, URL, sanitised body, status and
    duration are recorded; headers are never logged.
    """
    data: Dict[str, Any] = {
        "event": "http_request",
        "method": method,
        "url": url,
    }
    if json_body:
        data["json"] = _sanitize(json_body)
    if status is not None:
        data["status"] = status
    if duration_ms is not None:
        data["duration_ms"] = round(duration_ms, 2)
    logger.debug(json.dumps(data, default=str))
