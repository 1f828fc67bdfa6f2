"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Either DATABASE_URL or all of DB_DATABASE/DB_USERNAME/DB_PASSWORD/DB_HOST
      must be set; otherwise Settings() raises and startup aborts

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - URL.create over string formatting: passwords with '@' or '/' are escaped
    - Health failure policy defaults to log-and-report; DB_HEALTH_FATAL=true restores
      terminate-on-failure
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database — either a complete URL or its parts
    database_url: str | None = None
    db_database: str | None = None
    db_username: str | None = None
    db_password: str | None = None
    db_host: str | None = None
    db_port: int = 5432

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @model_validator(mode="after")
    def require_connection_parameters(self):
        if self.database_url:
            return self
        missing = [
            name.upper() for name in ("db_database", "db_username", "db_password", "db_host")
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(
                f"missing database connection parameters: {', '.join(missing)}",
            )
        return self

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_pool_recycle: int = 3600

    # Health probe
    db_health_timeout_seconds: float = 1.0
    db_health_fatal: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def sqlalchemy_url(self) -> str | URL:
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.db_username,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_database,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
