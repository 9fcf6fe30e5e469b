"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class AuthConfig(BaseModel):
    """Token signing and password hashing configuration."""

    secret_key: str = Field(
        default="change-me-in-production", alias="JWT_SECRET_KEY", description="Secret key used to sign access tokens"
    )
    algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM", description="JWT signing algorithm")
    user_token_expire_minutes: int = Field(
        default=60 * 24 * 7, alias="USER_TOKEN_EXPIRE_MINUTES", description="Lifetime of customer tokens"
    )
    seller_token_expire_minutes: int = Field(
        default=60 * 24, alias="SELLER_TOKEN_EXPIRE_MINUTES", description="Lifetime of seller tokens"
    )
    password_hash_rounds: int = Field(
        default=12, alias="PASSWORD_HASH_ROUNDS", ge=4, le=31, description="bcrypt work factor"
    )

    model_config = {"populate_by_name": True}


class RateLimitConfig(BaseModel):
    """Request rate limiting configuration."""

    enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED", description="Enable request rate limiting")
    default: str = Field(
        default="100/15minutes", alias="RATE_LIMIT_DEFAULT", description="Default limit applied to every route"
    )
    auth: str = Field(default="5/hour", alias="RATE_LIMIT_AUTH", description="Limit for login endpoints")
    register: str = Field(default="3/day", alias="RATE_LIMIT_REGISTER", description="Limit for account registration")

    model_config = {"populate_by_name": True}


class PostgreSQLConfig(BaseModel):
    """PostgreSQL database configuration."""

    db: str = Field(default="cafeteria", alias="POSTGRES_DB", description="PostgreSQL database name")
    user: str = Field(default="cafeteria", alias="POSTGRES_USER", description="PostgreSQL database user")
    password: str = Field(default="changeme", alias="POSTGRES_PASSWORD", description="PostgreSQL database password")
    host: str = Field(default="postgres", alias="POSTGRES_HOST", description="PostgreSQL database host address")
    port: int = Field(default=5432, alias="POSTGRES_PORT", description="PostgreSQL database port number")

    model_config = {"populate_by_name": True}

    @property
    def url(self) -> str:
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db}"


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    Grouped views (auth, rate_limit, postgres, cors) are rebuilt from the flat
    aliased fields, so every grouped key is also declared here.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Cafeteria API Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Cafeteria API server host address to bind to",
        alias="CAFETERIA_API_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="Cafeteria API server port number",
        alias="CAFETERIA_API_SERVER_PORT",
    )

    # =====================================================================
    # Logging Configuration
    # =====================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="CAFETERIA_API_LOG_LEVEL",
    )
    log_format: str = Field(default="detailed", description="Log format (simple, detailed, json)", alias="LOG_FORMAT")
    log_file_dir: str = Field(default="logs", description="Directory for the log file", alias="LOG_FILE_DIR")
    enable_file_logging: bool = Field(
        default=True, description="Write logs to LOG_FILE_DIR as well", alias="ENABLE_FILE_LOGGING"
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: Optional[str] = Field(
        default=None,
        description="Async database connection URL; built from POSTGRES_* when unset",
        alias="DATABASE_URL",
    )
    auto_create_tables: bool = Field(
        default=False,
        description="Create tables and seed reference data on startup (development only)",
        alias="AUTO_CREATE_TABLES",
    )
    postgres_db: str = Field(default="cafeteria", alias="POSTGRES_DB")
    postgres_user: str = Field(default="cafeteria", alias="POSTGRES_USER")
    postgres_password: str = Field(default="changeme", alias="POSTGRES_PASSWORD")
    postgres_host: str = Field(default="postgres", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")

    # =====================================================================
    # Authentication Configuration
    # =====================================================================
    jwt_secret_key: str = Field(default="change-me-in-production", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    user_token_expire_minutes: int = Field(default=60 * 24 * 7, alias="USER_TOKEN_EXPIRE_MINUTES")
    seller_token_expire_minutes: int = Field(default=60 * 24, alias="SELLER_TOKEN_EXPIRE_MINUTES")
    password_hash_rounds: int = Field(default=12, alias="PASSWORD_HASH_ROUNDS")

    # =====================================================================
    # Rate Limiting Configuration
    # =====================================================================
    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    rate_limit_default: str = Field(default="100/15minutes", alias="RATE_LIMIT_DEFAULT")
    rate_limit_auth: str = Field(default="5/hour", alias="RATE_LIMIT_AUTH")
    rate_limit_register: str = Field(default="3/day", alias="RATE_LIMIT_REGISTER")

    # =====================================================================
    # CORS Configuration
    # =====================================================================
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def auth(self) -> AuthConfig:
        """Get token and password hashing configuration."""
        return AuthConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def rate_limit(self) -> RateLimitConfig:
        """Get rate limiting configuration."""
        return RateLimitConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def postgres(self) -> PostgreSQLConfig:
        """Get PostgreSQL configuration from environment variables."""
        return PostgreSQLConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def effective_database_url(self) -> str:
        """Database URL to connect to, falling back to the PostgreSQL settings."""
        return self.database_url or self.postgres.url


settings = Settings()
