"""
core/config.py
----------------

Application configuration module.

Defines strongly-typed settings loaded from the environment using
``pydantic-settings``.  These settings hold the APEX endpoints, the
WhatsApp gateway location, HTTP timeouts and the JWT signing
parameters.  Every value can be overridden through an environment
variable prefixed with ``WABOT_`` (for example ``WABOT_JWT_SECRET``).
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    The structure is flat; each field maps to ``WABOT_<FIELD_NAME>``.
    See :class:`pydantic_settings.BaseSettings` for details on how
    environment variables are mapped onto fields.
    """

    # Session tokens
    jwt_secret: str = Field("dev_secret_change_me", description="HMAC secret used to sign session tokens.")
    jwt_algorithm: str = Field("HS256", description="JWT signing algorithm.")
    jwt_expires_hours: int = Field(24, ge=1, description="Lifetime of an issued session token in hours.")

    # APEX
    apex_login_url: str = Field(
        "https://oracleapex.com/ords/josegalvez/login/auth/login",
        description="External login endpoint that validates username/password.",
    )
    apex_api_url: str = Field(
        "http://tu-apex-url.com/ords/apex/api",
        description="Base URL of the APEX customer REST API (no trailing slash).",
    )
    auth_timeout: float = Field(12.0, description="Timeout in seconds for the APEX login call.")
    http_timeout: float = Field(10.0, description="Default timeout in seconds for other outbound requests.")

    # WhatsApp gateway
    gateway_url: str = Field("http://localhost:3002", description="Base URL of the WhatsApp Web gateway.")
    gateway_token: Optional[str] = Field(None, description="Shared secret expected in the X-Gateway-Token header.")
    chat_suffix: str = Field("@c.us", description="Suffix that turns a phone number into a chat id.")

    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Origins allowed by CORS.")

    model_config = SettingsConfigDict(env_prefix="WABOT_", env_file=".env", extra="ignore", case_sensitive=False)


@lru_cache()
def get_settings() -> Settings:
    """Return a cached instance of the application settings.

    Using a cache prevents parsing the environment on every call.  Tests
    that change the environment must call ``get_settings.cache_clear()``.
    """
    return Settings()
