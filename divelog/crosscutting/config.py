"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults suitable for local development

Collaborators:
  - main.py: reads settings for CORS, storage and bootstrap
  - container.py: picks the repository implementation
  - auth_users.py: JWT and password hashing parameters
  - rate_limit.py: login rate limit windows

Constraints:
  - No business logic, pure configuration
  - Singleton via lru_cache

Notes:
  - An empty DATABASE_URL selects the in-memory store
  - SECRET_SALT keys the password hash; changing it invalidates every password
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "dev-secret"
DEFAULT_SECRET_SALT = "dev-secret-salt"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: development, local, test or production
        database_url: PostgreSQL connection string (empty = in-memory store)
        jwt_secret: Secret for signing JWT access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes
        secret_salt: Key mixed into every password hash
        password_hash_*: Argon2 raw hash parameters
        password_min_length: Minimum password length for new users
        login_rate_limit_*: Per-IP login attempt limits (short and long window)
        seed_super_admin_*: Optional initial super admin created at startup
    """

    app_env: str = "development"

    # Storage
    database_url: str = ""
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000

    # CORS
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False

    # Security - JWT
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_access_ttl_minutes: int = 60

    # Security - password hashing (deterministic keyed hash)
    secret_salt: str = DEFAULT_SECRET_SALT
    password_hash_time_cost: int = 3
    password_hash_memory_cost: int = 65536  # KiB
    password_hash_parallelism: int = 1
    password_hash_length: int = 64
    password_min_length: int = 12

    # Security - login rate limiting
    login_rate_limit_short_max: int = 5
    login_rate_limit_short_window_seconds: int = 5 * 60
    login_rate_limit_long_max: int = 15
    login_rate_limit_long_window_seconds: int = 60 * 60

    # Bootstrap
    seed_super_admin_email: str = ""
    seed_super_admin_password: str = ""
    seed_super_admin_full_name: str = "Super Admin"

    @field_validator("secret_salt")
    @classmethod
    def secret_salt_min_length(cls, v: str) -> str:
        if len(v.encode("utf-8")) < 8:
            raise ValueError("secret_salt must be at least 8 bytes")
        return v

    @field_validator(
        "jwt_access_ttl_minutes",
        "password_hash_time_cost",
        "password_hash_parallelism",
        "password_min_length",
        "login_rate_limit_short_max",
        "login_rate_limit_short_window_seconds",
        "login_rate_limit_long_max",
        "login_rate_limit_long_window_seconds",
    )
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @field_validator("password_hash_length")
    @classmethod
    def hash_length_minimum(cls, v: int) -> int:
        if v < 16:
            raise ValueError("password_hash_length must be >= 16")
        return v

    @model_validator(mode="after")
    def validate_production_secrets(self):
        if not self.is_production():
            return self
        if self.jwt_secret == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set in production")
        if self.secret_salt == DEFAULT_SECRET_SALT:
            raise ValueError("SECRET_SALT must be set in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing"}

    def uses_postgres(self) -> bool:
        """R: Postgres is used only when a URL is configured outside tests."""
        return bool(self.database_url.strip()) and not self.is_test()

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
