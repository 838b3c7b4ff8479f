"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the legacy deployment

Collaborators:
  - api/main.py: reads settings for CORS, pool sizing and startup validation
  - infrastructure/db/pool.py: statement timeout per connection
  - application/usecases/password_reset: token TTL and password policy

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache for performance
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        app_env: Application environment (development/test/production)
        allowed_origins: Comma-separated CORS origins
        cors_allow_credentials: Allow cookies cross-origin (default: False)
        api_keys_config: JSON with API keys and scopes
        db_pool_min_size / db_pool_max_size: Connection pool bounds
        db_statement_timeout_ms: Per-connection statement timeout (0 disables)
        db_slow_query_seconds: Threshold for the slow-query warning
        db_healthcheck_on_acquire: Run SELECT 1 when a connection is acquired
        max_body_bytes: Max request body size (default: 1MB)
        reset_token_ttl_minutes: Lifetime of an issued reset token (default: 30)
        reset_token_bytes: Entropy of an issued reset token (default: 32)
        password_min_length: Minimum length for a new password (default: 6)
        expose_error_details: Attach store error detail to 500 bodies (never in production)
        metrics_require_auth: Require auth for /metrics (default: False)
        log_level / log_json: Logger configuration
    """

    # Required (no defaults)
    database_url: str

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False

    # Security - API Keys (JSON: {"key": ["scope1", "scope2"], ...})
    api_keys_config: str = ""

    # Security - Hardening
    max_body_bytes: int = 1024 * 1024
    metrics_require_auth: bool = False
    expose_error_details: bool = False

    # Database - Connection Pool
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 15000
    db_slow_query_seconds: float = 0.25
    db_healthcheck_on_acquire: bool = True

    # Password reset
    reset_token_ttl_minutes: int = 30
    reset_token_bytes: int = 32
    password_min_length: int = 6

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("reset_token_ttl_minutes")
    @classmethod
    def reset_token_ttl_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("reset_token_ttl_minutes must be greater than 0")
        return v

    @field_validator("reset_token_bytes")
    @classmethod
    def reset_token_bytes_minimum(cls, v: int) -> int:
        if v < 16:
            raise ValueError("reset_token_bytes must be >= 16")
        return v

    @field_validator("password_min_length")
    @classmethod
    def password_min_length_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("password_min_length must be >= 1")
        return v

    def validate_pool_params(self) -> None:
        """
        Cross-field validation: pool bounds must be coherent.
        Called explicitly after instantiation.
        """
        if self.db_pool_min_size < 0:
            raise ValueError("db_pool_min_size must be >= 0")
        if self.db_pool_max_size < max(1, self.db_pool_min_size):
            raise ValueError(
                f"db_pool_max_size ({self.db_pool_max_size}) must be >= "
                f"db_pool_min_size ({self.db_pool_min_size}) and >= 1"
            )

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        if self.expose_error_details:
            raise ValueError("EXPOSE_ERROR_DETAILS must be false in production")
        if not self.metrics_require_auth:
            raise ValueError("METRICS_REQUIRE_AUTH must be true in production")
        if not self.api_keys_config.strip():
            raise ValueError(
                "API_KEYS_CONFIG is required in production to protect card administration"
            )
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def error_details_enabled(self) -> bool:
        """Store error detail is attached only behind the explicit flag, outside production."""
        return self.expose_error_details and not self.is_production()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    settings = Settings()
    settings.validate_pool_params()
    return settings
