"""Application configuration."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (local development defaults)
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "brandsite"
    POSTGRES_USER: str = "brandsite_user"
    POSTGRES_PASSWORD: str = "brandsite_dev_password"

    # Full URL override (e.g. sqlite+aiosqlite:///./brandsite.db for local runs)
    DATABASE_URL: str | None = None

    # API
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Brand Site API"
    PLATFORM_VERSION: str = "1.0.0"

    # ==========================================================================
    # Tables
    # ==========================================================================

    # Config table holds Brand, Project and Page records keyed by
    # (ProjectKey, PageKey)
    CONFIG_TABLE: str = "site_config"

    # User table is keyed by the identity provider's subject id
    USERS_TABLE: str = "site_users"
    USER_ID_KEY: str = "UserID"

    # Reserved keys
    BRAND_KEY: str = "SirSluginston"
    CONFIG_SUB_KEY: str = "Config"

    # Set to False until the display-name index has been provisioned;
    # uniqueness checks are then skipped with a warning
    DISPLAY_NAME_INDEX_ENABLED: bool = True

    # ==========================================================================
    # Authentication
    # ==========================================================================

    # Auth mode: "claims" (identity forwarded by the gateway), "none" (dev)
    AUTH_MODE: str = "claims"

    # Headers the upstream gateway uses to forward verified token claims
    CLAIMS_SUBJECT_HEADER: str = "X-Claims-Sub"
    CLAIMS_EMAIL_HEADER: str = "X-Claims-Email"
    CLAIMS_GROUPS_HEADER: str = "X-Claims-Groups"

    # Group claim that grants the admin tier
    ADMIN_GROUP: str = "Admin"

    # Identity provider identifiers, handed to the site face as-is
    IDENTITY_POOL_ID: str = ""
    IDENTITY_CLIENT_ID: str = ""

    # ==========================================================================
    # CORS
    # ==========================================================================

    CORS_ALLOW_ORIGIN: str = "*"
    CORS_ALLOW_HEADERS: str = "Content-Type,Authorization"
    CORS_ALLOW_METHODS: str = "GET,POST,PUT,DELETE,OPTIONS"

    # ==========================================================================
    # Site face
    # ==========================================================================

    SITE_API_URL: str = "http://localhost:8000"
    SITE_PROJECT_KEY: str = "SirSluginston-Site"

    # ==========================================================================
    # Users
    # ==========================================================================

    DEFAULT_TIMEZONE: str = "UTC"

    # ==========================================================================
    # Logging / Monitoring
    # ==========================================================================

    LOG_JSON: bool = False
    MONITORING_ENABLED: bool = True

    @property
    def auth_enabled(self) -> bool:
        """Whether identity claims are required (derived from AUTH_MODE)."""
        return self.AUTH_MODE != "none"

    @property
    def cors_headers(self) -> dict[str, str]:
        """Fixed CORS headers stamped on every response."""
        return {
            "Access-Control-Allow-Origin": self.CORS_ALLOW_ORIGIN,
            "Access-Control-Allow-Headers": self.CORS_ALLOW_HEADERS,
            "Access-Control-Allow-Methods": self.CORS_ALLOW_METHODS,
        }

    @property
    def database_url(self) -> str:
        """Construct the async database connection URL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
