"""
Application configuration and environment variables.

This module unifies configuration using pydantic-settings.
Variables can come from:
1. .env file
2. System environment variables (have priority)
3. Default values

Naming convention:
- In Python code: snake_case (member_cache_ttl_seconds)
- In .env or ENV vars: UPPER_CASE (MEMBER_CACHE_TTL_SECONDS)
- Pydantic automatically converts between both
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Unified application configuration.

    All variables can be defined in:
    - .env file: VARIABLE_NAME=value
    - Environment variables: export VARIABLE_NAME=value

    Example:
        # In .env or as environment variable:
        INFRASTRUCTURE_PROVIDER=local
        MEMBER_CACHE_TTL_SECONDS=300
        LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================================
    # PROJECT SETTINGS
    # ============================================================================
    project_name: str = Field(default="LibraryMan Backend", description="Project name")
    project_description: str = Field(
        default="Member accounts and newsletter API for the LibraryMan system",
        description="Project description",
    )

    # ============================================================================
    # SERVER SETTINGS
    # ============================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")
    debug: bool = Field(default=False, description="Debug mode")
    enable_docs: bool = Field(
        default=False, description="Enable API documentation (Swagger/ReDoc)"
    )
    secret_key: str = Field(
        default="dev-secret-key-change-in-production-min-32-chars",
        description="Secret key for signing newsletter tokens (32+ chars in production)",
    )

    # ============================================================================
    # LOGGING SETTINGS
    # ============================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | trace_id={extra[trace_id]} | {name}:{function}:{line} - {message}",  # noqa: E501
        description="Log format",
    )
    logger_enqueue: bool = Field(
        default=False, description="Enqueue logs using multiprocessing"
    )

    # ============================================================================
    # CORS SETTINGS
    # ============================================================================
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Allowed origins for CORS (comma-separated)",
    )
    cors_allowed_methods: str = Field(
        default="GET,POST,PUT,DELETE,OPTIONS",
        description="Allowed HTTP methods for CORS",
    )
    cors_allowed_headers: str = Field(
        default="Content-Type,Authorization",
        description="Allowed headers for CORS",
    )

    # ============================================================================
    # INFRASTRUCTURE SETTINGS (member and obligations stores)
    # ============================================================================
    infrastructure_provider: str = Field(
        default="local",
        description="Infrastructure provider (local, aws)",
    )
    infrastructure_base_dir: str = Field(
        default="./.libraryman_data",
        description="Base directory for the local JSON stores",
    )

    # AWS Infrastructure Configuration
    aws_region: str = Field(default="eu-west-1", description="AWS region")
    aws_members_table: str = Field(
        default="libraryman-members",
        description="DynamoDB table name for member records",
    )
    aws_obligations_table: str = Field(
        default="libraryman-obligations",
        description="DynamoDB table name for borrowing and fine records",
    )
    aws_newsletter_table: str = Field(
        default="libraryman-newsletter",
        description="DynamoDB table name for newsletter subscriptions",
    )
    auto_create_resources: bool = Field(
        default=False,
        description="Auto-create the DynamoDB table if missing",
    )

    # ============================================================================
    # MEMBER LOOKUP CACHE
    # ============================================================================
    member_cache_ttl_seconds: int = Field(
        default=600,
        ge=0,
        description="Lifetime of a cached member lookup (0 disables expiry)",
    )
    member_cache_max_entries: int = Field(
        default=10_000,
        gt=0,
        description="Maximum number of cached member lookups",
    )

    # ============================================================================
    # PASSWORD HASHING
    # ============================================================================
    password_hash_iterations: int = Field(
        default=310_000,
        gt=0,
        description="PBKDF2-HMAC-SHA256 iterations for new password hashes",
    )

    # ============================================================================
    # NOTIFICATIONS
    # ============================================================================
    notification_webhook_url: str = Field(
        default="",
        description="Webhook receiving account events (empty logs them instead)",
    )
    notification_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for a single webhook delivery",
    )

    # ============================================================================
    # NEWSLETTER
    # ============================================================================
    newsletter_token_max_age_seconds: int = Field(
        default=60 * 60 * 24 * 30,
        gt=0,
        description="Validity of newsletter unsubscribe tokens",
    )

    # ============================================================================
    # HELPER METHODS
    # ============================================================================

    def get_allowed_origins(self) -> list[str]:
        """
        Get list of allowed origins for CORS.

        Returns:
            list[str]: List of allowed origin URLs.
        """
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    def get_cors_allowed_methods(self) -> list[str]:
        """
        Get list of allowed HTTP methods for CORS.

        Returns:
            list[str]: List of allowed HTTP methods. Returns ["*"] if all methods are allowed.
        """
        if self.cors_allowed_methods == "*":
            return ["*"]
        return [method.strip() for method in self.cors_allowed_methods.split(",")]

    def get_cors_allowed_headers(self) -> list[str]:
        """
        Get list of allowed headers for CORS.

        Returns:
            list[str]: List of allowed headers. Returns ["*"] if all headers are allowed.
        """
        if self.cors_allowed_headers == "*":
            return ["*"]
        return [header.strip() for header in self.cors_allowed_headers.split(",")]


# ============================================================================
# SINGLETON PATTERN - Global settings instance
# ============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings (LRU cached).

    The .env file is only read once. To refresh the configuration,
    clear the cache:
        get_settings.cache_clear()

    Returns:
        Settings: Application configuration instance.
    """
    return Settings()


settings = get_settings()
