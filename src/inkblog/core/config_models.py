from pydantic import BaseModel, Field, field_validator


class DatabaseConfig(BaseModel):
    """Embedded SQLite database configuration."""

    path: str = Field(default="data/blog.db", description="Path to the SQLite database file")
    echo: bool = Field(default=False, description="Enable SQL query logging")
    busy_timeout: int = Field(default=5, ge=1, le=300, description="Seconds to wait on a locked database")

    @property
    def url(self) -> str:
        return f"sqlite+aiosqlite:///{self.path}"


class SecurityConfig(BaseModel):
    """Admin session token and cookie configuration."""

    secret_key: str = Field(..., min_length=32, description="Session token signing key")
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    session_max_age_days: int = Field(default=7, ge=1, le=365)
    cookie_name: str = Field(default="admin_token")
    cookie_secure: bool = Field(default=False, description="Send the session cookie over HTTPS only")

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, value: str) -> str:
        if len(value) < 32:
            raise ValueError("Secret key must be at least 32 characters long")
        return value

    @property
    def session_max_age_seconds(self) -> int:
        return self.session_max_age_days * 24 * 60 * 60


class BlogConfig(BaseModel):
    """Blog behaviour knobs that are not stored in the settings table."""

    base_url: str = Field(default="http://localhost:8000", description="Public URL used in feed links")
    comment_daily_limit: int = Field(default=3, ge=1, le=1000, description="Comments per device per day")
    login_rate_limit_per_minute: int = Field(default=10, ge=0)
    default_admin_username: str = Field(default="admin", min_length=3, max_length=50)
    default_admin_password: str = Field(default="123456", min_length=6, max_length=100)


class ServerConfig(BaseModel):
    """Server runtime configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")
    reload: bool = Field(default=False, description="Enable auto-reload in development")


class LoggingConfig(BaseModel):
    """Application logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
