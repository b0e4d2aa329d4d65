"""
Configuration Module
====================

Application settings and configuration management using Pydantic.

Environment variable names from the first deployment (DB_USER, DB_SERVER,
DEEPSEEK_API_KEY, ...) are still accepted.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, field_validator
from sqlalchemy.engine import URL
from functools import lru_cache
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="tickets-movil-api", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port", ge=1, le=65535)

    # ========== Database ==========
    database_url: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy async URL; overrides the DB_* parts below"
    )
    db_driver: str = Field(default="mssql+aioodbc", description="SQLAlchemy async dialect+driver")
    db_user: Optional[str] = Field(default=None, description="Database user")
    db_password: Optional[str] = Field(default=None, description="Database password")
    db_server: Optional[str] = Field(default=None, description="Database host")
    db_database: Optional[str] = Field(default=None, description="Database name")
    db_odbc_driver: str = Field(
        default="ODBC Driver 18 for SQL Server",
        description="ODBC driver name (mssql only)"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)
    db_timeout_seconds: int = Field(
        default=30,
        description="Connection/checkout timeout for store operations",
        ge=1
    )
    db_create_tables: bool = Field(
        default=False,
        description="Create tables at startup (development only, the schema is not owned here)"
    )

    # ========== Priority classifier (OpenAI-compatible API) ==========
    classifier_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("classifier_api_key", "deepseek_api_key"),
        description="API key for the completion service"
    )
    classifier_base_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("classifier_base_url", "deepseek_base_url"),
        description="Base URL of the completion service (e.g. https://openrouter.ai/api/v1)"
    )
    classifier_model: str = Field(
        default="openai/gpt-oss-20b:free",
        description="Model used for priority classification"
    )
    classifier_referer: str = Field(
        default="https://api-tickets-production-1357.up.railway.app",
        description="HTTP-Referer header sent to the completion service"
    )
    classifier_app_title: str = Field(
        default="Sistema de Tickets",
        description="X-Title header sent to the completion service"
    )
    classifier_timeout_seconds: float = Field(
        default=15.0,
        description="Timeout for a classification call",
        gt=0,
        le=120
    )
    classifier_max_tokens: int = Field(default=10, description="Output cap for classification", ge=1)
    classifier_reasoning: bool = Field(
        default=True,
        description="Ask the provider to enable reasoning mode"
    )
    mock_llm: bool = Field(
        default=False,
        description="Use mock LLM responses for testing (no API calls)"
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:8100"],
        description="Allowed CORS origins (Ionic dev server by default)"
    )
    cors_trusted_suffix: Optional[str] = Field(
        default=".azurewebsites.net",
        description="Any origin whose hostname ends with this suffix is allowed"
    )

    # ========== Grafana OTLP Metrics ==========
    grafana_host: Optional[str] = Field(default=None, description="Grafana OTLP gateway URL")
    grafana_api_key: Optional[str] = Field(default=None, description="Grafana API key")
    grafana_instance_id: Optional[str] = Field(default=None, description="Grafana instance ID")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    def sqlalchemy_url(self) -> str | URL:
        """
        Resolve the async database URL.

        DATABASE_URL wins; otherwise the URL is assembled from the
        DB_USER / DB_PASSWORD / DB_SERVER / DB_DATABASE parts.
        """
        if self.database_url:
            return self.database_url

        query = {}
        if self.db_driver.startswith("mssql"):
            query = {
                "driver": self.db_odbc_driver,
                "Encrypt": "yes",
                "TrustServerCertificate": "no",
            }

        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_server,
            database=self.db_database,
            query=query,
        )


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class TicketStatus(str):
    """Ticket lifecycle statuses."""
    IN_PROGRESS = "En proceso"
    CLOSED = "Cerrado"
    CANCELLED = "Cancelado"


class Priority(str):
    """Ticket priority levels, highest first."""
    HIGH = "Alta"
    MEDIUM = "Media"
    LOW = "Baja"


class EvaluatorRole(str):
    """Who submitted an evaluation."""
    USER = "Usuario"


# ========== Lists for validation ==========

VALID_STATUSES = [TicketStatus.IN_PROGRESS, TicketStatus.CLOSED, TicketStatus.CANCELLED]
VALID_PRIORITIES = [Priority.HIGH, Priority.MEDIUM, Priority.LOW]
DEFAULT_PRIORITY = Priority.LOW
