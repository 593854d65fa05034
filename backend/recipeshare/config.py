"""
RecipeShare Backend - Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or the .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the Alembic environment and the entry point.
When:  Loaded once at module import time; the database handle is built from it
       at startup.

Environment keys match the ones the deployment scripts already write into
`.env` (ORACLE_USER, ORACLE_PASS, ORACLE_HOST, ORACLE_PORT, ORACLE_DBNAME, PORT).
Setting DATABASE_URL overrides the Oracle keys entirely; tests use this to
point at SQLite.
"""

from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments MUST set
    the Oracle credentials (or DATABASE_URL) and CORS_ORIGINS.
    """

    # ── Database ──────────────────────────────────────────────────────────
    oracle_user: str = Field(default="", description="Oracle username")
    oracle_pass: str = Field(default="", description="Oracle password")
    oracle_host: str = Field(default="localhost")
    oracle_port: int = Field(default=1521, ge=1, le=65535)
    oracle_dbname: str = Field(default="", description="Oracle service name")

    # Full SQLAlchemy URL; takes precedence over the ORACLE_* keys when set
    database_url_override: Optional[str] = Field(default=None, alias="database_url")

    # Pool bounds: pool_size = min, max_overflow = max - min
    db_pool_min: int = Field(default=1, ge=1, le=20)
    db_pool_max: int = Field(default=3, ge=1, le=50)
    # Seconds an acquisition may wait for a free connection before failing
    db_pool_timeout: int = Field(default=60, ge=1, le=600)
    db_pool_recycle: int = Field(default=3600, ge=60)

    # Seconds to wait for in-flight sessions before the pool is disposed
    shutdown_grace_period: float = Field(default=10.0, ge=0, le=120)

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1024, le=65535)

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

    @model_validator(mode="after")
    def validate_pool_bounds(self) -> "Settings":
        """The pool can never be configured smaller than its minimum."""
        if self.db_pool_max < self.db_pool_min:
            raise ValueError(
                f"db_pool_max ({self.db_pool_max}) must be >= db_pool_min ({self.db_pool_min})"
            )
        return self

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def database_url(self) -> str:
        """
        What:  The SQLAlchemy URL the engine connects to.
        How:   DATABASE_URL when given, otherwise an `oracle+oracledb_async` URL
               built from the ORACLE_* keys. URL.create escapes credentials.
        """
        if self.database_url_override:
            return self.database_url_override
        url = URL.create(
            "oracle+oracledb_async",
            username=self.oracle_user or None,
            password=self.oracle_pass or None,
            host=self.oracle_host,
            port=self.oracle_port,
            query={"service_name": self.oracle_dbname} if self.oracle_dbname else {},
        )
        return url.render_as_string(hide_password=False)

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the database is configured.
        When:  Called during app startup (lifespan).
        How:   Checks each required field and raises ValueError with guidance.
        """
        if self.database_url_override:
            return
        errors = []
        if not self.oracle_user:
            errors.append("ORACLE_USER is not set.")
        if not self.oracle_pass:
            errors.append("ORACLE_PASS is not set.")
        if not self.oracle_dbname:
            errors.append("ORACLE_DBNAME is not set (Oracle service name).")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, immutable after startup
settings = Settings()
