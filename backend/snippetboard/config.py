"""
SnippetBoard Backend — Application Configuration
==================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads environment variables (or a .env file),
       validates types and ranges, and exposes a singleton `settings` object.
Who:   Imported by the application factory; tests build their own Settings.
When:  Loaded once at module import time.

Complex values (the author list) are read from the environment as JSON:
    AUTHORS='[{"id": "0", "name": "christian scott"}, {"id": "7", "name": "ada"}]'
"""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent


class AuthorSeed(BaseModel):
    """One entry of the configured author directory."""

    id: str
    name: str


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field has a development default, so the service starts with no
    configuration at all and serves the single seeded author and snippet.
    """

    # ── Server ────────────────────────────────────────────────────────────
    app_name: str = Field(default="SnippetBoard")
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8080, ge=1024, le=65535)

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

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs
    cors_origins: str = Field(default="http://localhost:8080")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Authors ───────────────────────────────────────────────────────────
    # Registered once at startup; the directory never changes afterwards.
    authors: List[AuthorSeed] = Field(
        default_factory=lambda: [AuthorSeed(id="0", name="christian scott")],
        description="Known authors, in registration order",
    )

    # Identity used for posts that do not name a registered author
    default_author_id: str = Field(default="1")
    default_author_name: str = Field(default="Someone New")

    # Posted by the first registered author at startup; empty disables seeding
    seed_snippet_body: str = Field(default="I worked on this snippets tool")

    # ── Snippet Store ─────────────────────────────────────────────────────
    # None keeps the store unbounded; a number turns on the bounded variant
    max_snippets: Optional[int] = Field(default=None, ge=1)

    # ── Posting Throttle ──────────────────────────────────────────────────
    # Per-IP sliding window, applied to POST requests only
    post_rate_limit_requests: int = Field(default=30, ge=1, le=10000)
    post_rate_limit_window: int = Field(default=60, ge=1, le=86400)  # seconds

    # ── Rendering ─────────────────────────────────────────────────────────
    templates_dir: Optional[str] = Field(
        default=None,
        description="Jinja2 templates directory (defaults to the bundled templates)",
    )

    @property
    def templates_path(self) -> Path:
        if self.templates_dir:
            return Path(self.templates_dir)
        return PACKAGE_DIR / "templates"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


settings = Settings()
