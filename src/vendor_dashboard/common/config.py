"""Vendor-Dashboard configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_REQUIRED = ("storage_url", "privileged_key", "token_signing_secret")


class VendorSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VENDOR_")

    environment: str = "development"

    # External storage project (identity provider + edge functions).
    # These three have no defaults: the process refuses to start without them.
    storage_url: str
    privileged_key: str
    token_signing_secret: str
    anon_key: str = ""

    # Bearer tokens
    token_audience: str = "authenticated"
    token_algorithms: list[str] = ["HS256"]
    token_leeway_seconds: int = 0

    # Database
    db_url: str = "sqlite+aiosqlite:///./data/vendor_dashboard.db"

    # Edge functions
    upload_function: str = "upload-post-image"
    delete_function: str = "delete-post"
    http_timeout: float = 30.0

    # Post lifecycle
    post_ttl_days: int = 30
    edit_token_ttl_days: int = 30

    # API
    api_title: str = "Vendor-Dashboard"
    api_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 8080
    api_prefix: str = ""
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    @property
    def functions_url(self) -> str:
        return f"{self.storage_url.rstrip('/')}/functions/v1"

    @property
    def auth_url(self) -> str:
        return f"{self.storage_url.rstrip('/')}/auth/v1"

    @property
    def public_key(self) -> str:
        """Key sent as ``apikey`` to the identity provider."""
        return self.anon_key or self.privileged_key

    def validate_required(self) -> None:
        """Raise if any required option is blank."""
        missing = [field for field in _REQUIRED if not getattr(self, field).strip()]
        if missing:
            env_vars = ", ".join(f"VENDOR_{f.upper()}" for f in missing)
            raise RuntimeError(
                f"Missing required configuration: {env_vars}. "
                "Set these environment variables before starting the service."
            )


@lru_cache
def get_settings() -> VendorSettings:
    settings = VendorSettings()
    settings.validate_required()
    return settings
