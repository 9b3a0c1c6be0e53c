from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _normalise_db_url(url: str) -> str:
    """Ensure the DATABASE_URL uses an async driver prefix.

    Hosted Postgres providers emit plain ``postgresql://`` connection
    strings and a bare ``sqlite://`` URL is common in local ``.env`` files.
    SQLAlchemy's async engine requires ``postgresql+asyncpg://`` and
    ``sqlite+aiosqlite://`` respectively.
    """
    if url.startswith("postgresql://") or url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1).replace(
            "postgresql://", "postgresql+asyncpg://", 1
        )
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Analysis history is stored in a local SQLite file by default. Point
    DATABASE_URL at Postgres for a shared deployment.

    Accepted DATABASE_URL formats
    ─────────────────────────────
    • sqlite+aiosqlite:///./perfpilot.db   (default)
    • sqlite:///./perfpilot.db             (normalised to aiosqlite)
    • postgresql+asyncpg://...             (explicit driver)
    • postgresql:// / postgres://          (normalised to asyncpg)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    database_url: str = "sqlite+aiosqlite:///./perfpilot.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def normalise_database_url(cls, v: str) -> str:
        return _normalise_db_url(v)

    # LLM provider API keys. Without a key for the selected provider,
    # recommendations fall back to the rule catalog's own guidance.
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    llm_provider: str = "openai"
    llm_model: str = "gpt-4o"

    # CORS: list of allowed origins.
    # Defaults to ["*"] for local development; restrict in production.
    cors_origins: list[str] = ["*"]

    # Rate limiting: SlowAPI format, e.g. "10/minute", "100/hour".
    analyze_rate_limit: str = "30/minute"

    # Sentry: leave blank to disable error capture.
    sentry_dsn: str = ""

    # App
    debug: bool = True

    def llm_api_key(self) -> str:
        """Return the API key for the configured provider, or empty string."""
        keys = {
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
        }
        return keys.get(self.llm_provider.lower(), "")


def get_settings() -> Settings:
    return Settings()
