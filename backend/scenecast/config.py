import json
from functools import lru_cache
from typing import Literal

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True
    )

    # Application
    app_name: str = "SceneCast API"
    app_version: str = "0.1.0"
    git_hash: str = "unknown"  # Set via GIT_HASH env var at build time
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: str = "INFO"

    # CORS - stored as string, parsed via computed property
    cors_origins_raw: str = "http://localhost:5173,http://localhost:3000"

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from pipe/comma-separated string or JSON array."""
        v = self.cors_origins_raw
        if v.startswith("["):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Pipe-separated (for Cloud Run compatibility)
        if "|" in v:
            return [origin.strip() for origin in v.split("|") if origin.strip()]
        return [origin.strip() for origin in v.split(",") if origin.strip()]

    # Render engine
    # "stage" is the watermarked sandbox, "v1" the paid production environment
    render_env: Literal["stage", "v1"] = "stage"
    render_sandbox_api_key: str = ""
    render_production_api_key: str = ""
    render_api_base_url: str = "https://api.shotstack.io/edit"
    render_request_timeout_s: float = 10.0
    render_callback_url: str | None = None

    # Output defaults
    render_fps: int = 30
    render_quality: Literal["low", "medium", "high"] = "high"

    @computed_field
    @property
    def render_api_key(self) -> str:
        """Credential for the configured engine environment."""
        if self.render_env == "v1":
            return self.render_production_api_key
        return self.render_sandbox_api_key

    @computed_field
    @property
    def render_base_url(self) -> str:
        return f"{self.render_api_base_url.rstrip('/')}/{self.render_env}"

    @property
    def expose_upstream_errors(self) -> bool:
        """Upstream engine messages are only surfaced outside production."""
        return self.environment != "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
