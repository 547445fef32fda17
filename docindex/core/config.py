"""Configuration from environment variables and .env (pydantic-settings).

Cross-field rules (storage backend, retry budget,
taxonomy fallbacks) are validated at load time.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docindex.domain.taxonomy import (
    DEFAULT_PROJECTS,
    DEFAULT_TEAMS,
    DEFAULT_TOPICS,
    Taxonomy,
    ValidationPolicy,
)


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Everything has a default so the app (and tests) can start without a
    database or an API key. Database-backed routes answer 503 until
    DATABASE_URL is set; categorization degrades to the fallback result
    until GEMINI_API_KEY is set.
    """

    # App
    app_name: str = "docindex"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (PostgreSQL via asyncpg; schema managed by Alembic)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_command_timeout: int = 60

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Storage
    storage_backend: str = "local"
    storage_root: str = "/var/docindex/storage"
    storage_base_url: str | None = None
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    max_upload_size: int = 50 * 1024 * 1024  # 50MB

    # Inference endpoint (Gemini generateContent)
    gemini_api_key: SecretStr = SecretStr("")
    gemini_model: str = "gemini-2.0-flash-preview-09-2025"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    llm_timeout_seconds: float = 30.0
    # Size for the host's concurrent-upload volume; one shared pool for all calls.
    llm_max_connections: int = 20

    # Categorization
    categorization_max_content_chars: int = 4000
    categorization_max_attempts: int = 3
    categorization_backoff_base_seconds: float = 1.0
    categorization_backoff_multiplier: float = 2.0
    categorization_validation_policy: ValidationPolicy = ValidationPolicy.PERMISSIVE

    # Taxonomy (JSON lists in env, e.g. TAXONOMY_TOPICS='["A", "B"]')
    taxonomy_topics: list[str] = Field(default_factory=lambda: list(DEFAULT_TOPICS))
    taxonomy_projects: list[str] = Field(default_factory=lambda: list(DEFAULT_PROJECTS))
    taxonomy_teams: list[str] = Field(default_factory=lambda: list(DEFAULT_TEAMS))
    taxonomy_topic_fallback: str = "Uncategorized"
    taxonomy_project_fallback: str = "N/A"
    taxonomy_team_fallback: str = "Operations"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_storage_and_categorization(self) -> "Settings":
        """Validate storage backend and categorization retry settings.

        - Storage: 'local' or 's3'; S3 requires S3_BUCKET.
        - Categorization: at least one attempt, non-negative backoff,
          positive truncation bound.
        """
        backend = self.storage_backend.lower()
        if backend not in ("local", "s3"):
            raise ValueError(f"STORAGE_BACKEND must be 'local' or 's3', got {self.storage_backend!r}")
        if backend == "s3" and not self.s3_bucket:
            raise ValueError("S3_BUCKET is required when STORAGE_BACKEND is 's3'")
        if self.categorization_max_attempts < 1:
            raise ValueError("CATEGORIZATION_MAX_ATTEMPTS must be >= 1")
        if (
            self.categorization_backoff_base_seconds < 0
            or self.categorization_backoff_multiplier < 1
        ):
            raise ValueError(
                "CATEGORIZATION_BACKOFF_BASE_SECONDS must be >= 0 and "
                "CATEGORIZATION_BACKOFF_MULTIPLIER must be >= 1"
            )
        if self.categorization_max_content_chars < 1:
            raise ValueError("CATEGORIZATION_MAX_CONTENT_CHARS must be >= 1")
        self.build_taxonomy()
        return self

    def build_taxonomy(self) -> Taxonomy:
        """Return the configured Taxonomy. Raises ValueError if lists or fallbacks are inconsistent."""
        return Taxonomy(
            topics=tuple(self.taxonomy_topics),
            projects=tuple(self.taxonomy_projects),
            teams=tuple(self.taxonomy_teams),
            topic_fallback=self.taxonomy_topic_fallback,
            project_fallback=self.taxonomy_project_fallback,
            team_fallback=self.taxonomy_team_fallback,
        )

    @property
    def sql_configured(self) -> bool:
        return bool(self.database_url)

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Process-wide Settings, loaded and validated on first call.

    Tests that change the environment call get_settings.cache_clear() first.
    """
    return Settings()
