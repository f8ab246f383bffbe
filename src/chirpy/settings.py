"""
chirpy.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "dev-secret-change-me"


class Settings(BaseSettings):
    """
    Process configuration. Read once at startup and treated as immutable;
    derived objects (JwtConfig, ContentPolicy) are built from it and injected.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHIRPY_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment controls toggle behavior like auto-init DB tables and /admin/reset.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "chirpy"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "chirpy"
    jwt_secret: str = Field(default=DEV_JWT_SECRET, repr=False)
    jwt_max_ttl_seconds: int = Field(default=3600, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./chirpy.db"

    # Files served under /app
    static_dir: str = "public"

    @model_validator(mode="after")
    def _no_dev_secret_in_prod(self) -> Settings:
        if self.env == "prod" and self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError("CHIRPY_JWT_SECRET must be set in prod")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The signing secret is only ever read from here; rotating it invalidates every
# token issued under the previous value.
