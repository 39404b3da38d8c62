"""
MoodLog Backend — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Read by the composition root (app.dependencies) and the app factory.
When:  Loaded once at module import time; validated before app starts.

Provider credentials:
    Firestore uses Application Default Credentials, so the service account is
    supplied through GOOGLE_APPLICATION_CREDENTIALS (or FIRESTORE_EMULATOR_HOST
    for the local emulator) rather than through this module. Firebase
    Authentication and Gemini are reached over REST with API keys carried as
    query parameters; both keys are configured here.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Production deployments MUST set FIREBASE_API_KEY and GEMINI_API_KEY.
    """

    # ── Firebase / Firestore ──────────────────────────────────────────────
    # What: Google Cloud project hosting Firestore; empty = ADC default project
    firebase_project_id: str = Field(default="")

    # What: Firebase web API key used for Identity Toolkit sign-up / sign-in
    # How to obtain: Firebase console → Project settings → Web API Key
    firebase_api_key: str = Field(default="")

    identity_base_url: str = Field(default="https://identitytoolkit.googleapis.com/v1")

    # What: Which document store backend to use
    # firestore: managed Firestore (production)
    # memory:    in-process store, data is lost on restart (local development)
    store_backend: str = Field(default="firestore")

    moods_collection: str = Field(default="moods")
    journal_collection: str = Field(default="journal")

    @field_validator("store_backend")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        """Ensures the store backend is one we know how to build."""
        valid = {"firestore", "memory"}
        lower = v.lower()
        if lower not in valid:
            raise ValueError(f"Invalid store_backend '{v}'. Must be one of: {valid}")
        return lower

    # ── Google Gemini ─────────────────────────────────────────────────────
    gemini_api_key: str = Field(default="")
    gemini_model: str = Field(default="gemini-2.0-flash")
    gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta")

    # What: Per-request timeout (seconds) for identity and Gemini calls
    # Unset means wait indefinitely; a host-level timeout is expected instead
    provider_timeout: Optional[float] = Field(default=None, gt=0)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: "*" or comma-separated URLs
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

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
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that provider credentials are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every missing value and raises one ValueError.
        """
        errors = []
        if not self.firebase_api_key:
            errors.append(
                "FIREBASE_API_KEY is not set. /register and /login will fail."
            )
        if not self.gemini_api_key or self.gemini_api_key == "your_gemini_api_key_here":
            errors.append(
                "GEMINI_API_KEY is not set. "
                "Get a key at https://aistudio.google.com/app/apikey"
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
