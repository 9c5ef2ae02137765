from functools import lru_cache
import os

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config_models import BlogConfig, DatabaseConfig, LoggingConfig, SecurityConfig, ServerConfig

_DEV_SECRET_KEY = "dev-secret-key-not-for-production-use-32-chars-minimum"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseSettings):
    """Application settings assembled from environment variables and defaults."""

    # Environment
    environment: str = Field(default="development", pattern="^(development|staging|production)$")
    debug: bool = Field(default=False)

    # API
    api_title: str = Field(default="Inkblog API")
    api_version: str = Field(default="1.0.0")
    api_description: str = Field(default="A personal blog API with an admin console backend")

    server: ServerConfig = ServerConfig()
    logging: LoggingConfig = LoggingConfig()

    # Populated in validator unless passed explicitly
    database: DatabaseConfig | None = None
    security: SecurityConfig | None = None
    blog: BlogConfig | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _assemble_subconfigs(self):
        """Assemble nested configurations from environment variables."""
        if self.database is None:
            self.database = DatabaseConfig(
                path=os.getenv("DATABASE_PATH", "data/blog.db"),
                echo=self.environment == "development" and self.debug,
                busy_timeout=int(os.getenv("DB_BUSY_TIMEOUT", "5")),
            )

        if self.security is None:
            secret_key = os.getenv("SECRET_KEY")
            if not secret_key:
                if self.environment == "production":
                    raise ValueError("SECRET_KEY environment variable is required in production")
                # Development fallback (never for production)
                secret_key = _DEV_SECRET_KEY

            self.security = SecurityConfig(
                secret_key=secret_key,
                algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
                session_max_age_days=int(os.getenv("SESSION_MAX_AGE_DAYS", "7")),
                cookie_secure=_env_flag("COOKIE_SECURE", "false" if self.environment == "development" else "true"),
            )

        if self.blog is None:
            self.blog = BlogConfig(
                base_url=os.getenv("BASE_URL", "http://localhost:8000").rstrip("/"),
                comment_daily_limit=int(os.getenv("COMMENT_DAILY_LIMIT", "3")),
                login_rate_limit_per_minute=int(os.getenv("LOGIN_RATE_LIMIT_PER_MINUTE", "10")),
                default_admin_username=os.getenv("ADMIN_USERNAME", "admin"),
                default_admin_password=os.getenv("ADMIN_PASSWORD", "123456"),
            )

        # Adjust logging for environment unless explicitly configured
        explicit_level = os.getenv("LOG_LEVEL")
        if explicit_level:
            self.logging.level = explicit_level.upper()
        elif self.environment == "production":
            self.logging.level = "WARNING"
        elif self.environment == "development":
            self.logging.level = "DEBUG"

        return self


@lru_cache
def get_settings() -> "Settings":
    """Return cached settings instance."""
    return Settings()
