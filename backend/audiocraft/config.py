"""
AudioCraft Backend: Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before the app serves traffic.

There is deliberately no usable default for JWT_SECRET. The lifespan in
main.py calls `validate_required()` and refuses to start without it.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

INSECURE_SECRETS = {"secret", "secret-key", "changeme", "devsecret"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Everything except JWT_SECRET has a development default. Production
    deployments must also narrow CORS_ORIGINS.
    """

    # ── Authentication ────────────────────────────────────────────────────
    # HMAC key for bearer tokens. Loaded once, never rotated at runtime.
    jwt_secret: str = Field(default="", description="Bearer token signing key")
    jwt_algorithm: str = Field(default="HS256")
    token_ttl_days: int = Field(default=7, ge=1, le=365)

    # ── Accounts ──────────────────────────────────────────────────────────
    # Free processing credits granted at signup
    free_tracks: int = Field(default=3, ge=0, le=1000)

    # ── Uploads ───────────────────────────────────────────────────────────
    # Temporary storage for audio uploads; files live for one request only
    upload_dir: str = Field(default="./uploads")

    # 100MB = 100 * 1024 * 1024
    max_upload_size: int = Field(default=104_857_600, ge=1_048_576)

    # ── Payments ──────────────────────────────────────────────────────────
    checkout_base_url: str = Field(default="https://checkout.stripe.com/pay")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: comma-separated URLs, or "*" (accepted but flagged at startup)
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    environment: str = Field(default="development")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def allows_any_origin(self) -> bool:
        return "*" in self.cors_origins_list

    def validate_required(self) -> None:
        """
        What:  Validates that settings without safe defaults are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every problem, then raises one ValueError listing them.
        """
        errors = []
        if not self.jwt_secret:
            errors.append("JWT_SECRET is not set. Generate one with `openssl rand -hex 32`.")
        elif self.jwt_secret.lower() in INSECURE_SECRETS:
            errors.append("JWT_SECRET is a well-known placeholder value. Use a random secret.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
