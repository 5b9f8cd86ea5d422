"""
freshcart.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for process entrypoints.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

FIREBASE_JWKS_URL = (
    "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com"
)


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `FRESHCART_`).

    Auth posture is explicit: `auth_development_mode` disables token checks entirely,
    and `auth_init_policy` decides what happens when the verifier cannot be built.
    """

    model_config = SettingsConfigDict(env_prefix="FRESHCART_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "fresh-cart-api"
    service_display_name: str = "Fresh Cart API"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth gate
    auth_development_mode: bool = False
    auth_init_policy: Literal["strict", "resilient"] = "strict"
    auth_verifier: Literal["firebase", "local"] = "firebase"
    auth_public_paths: list[str] = Field(
        default_factory=lambda: ["/api/auth/status", "/api/health", "/actuator/**"]
    )
    # Identity handed to protected handlers when the gate runs in development-only mode.
    auth_dev_user_id: str = "dev-user"

    # Firebase verifier
    firebase_credentials_file: str = "firebase-service-account.json"
    firebase_project_id: str | None = None
    firebase_jwks_url: str = FIREBASE_JWKS_URL
    firebase_http_timeout_seconds: int = 30

    # Local verifier (dev/test HS256 tokens)
    jwt_alg: str = "HS256"
    jwt_issuer: str = "fresh-cart-api"
    jwt_audience: str = "fresh-cart"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # CORS
    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "https://www.fresh-cart.live"]
    )
    cors_allowed_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    cors_allowed_headers: list[str] = Field(
        default_factory=lambda: [
            "Authorization",
            "Content-Type",
            "Origin",
            "Accept",
            "X-Requested-With",
        ]
    )
    cors_allow_credentials: bool = True
    cors_max_age: int = 3600

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./freshcart.db"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each caller.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# List-valued settings are read from the environment as JSON, e.g.
# FRESHCART_AUTH_PUBLIC_PATHS='["/api/health", "/actuator/**"]'.
