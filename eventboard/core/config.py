from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings with type-safe configuration management."""

    # Database Configuration
    DATABASE_URL: str = "postgresql+asyncpg://postgres:postgres@db:5432/eventboard"

    # Session Configuration
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_HOURS: int = 24
    SESSION_COOKIE_NAME: str = "auth-token"
    COOKIE_SECURE: bool = False

    # Admin-secret panel
    ADMIN_SECRET_PASSWORD: str

    # Bootstrap data
    DEFAULT_ADMIN_EMAIL: str = "admin@escoteiros.com"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"
    DEFAULT_ADMIN_NAME: str = "Administrador"
    SEED_SAMPLE_EVENTS: bool = False

    # Organization
    ORGANIZATION_NAME: str = "Grupo Escoteiro Pirabeiraba"
    TIMEZONE: str = "America/Sao_Paulo"

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True

    # CORS Configuration
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:8000"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def allowed_origins_list(self) -> List[str]:
        """Convert comma-separated ALLOWED_ORIGINS string to list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    @property
    def default_admin_login(self) -> str:
        """DEFAULT_ADMIN_EMAIL as stored and looked up: trimmed and lower-cased."""
        return self.DEFAULT_ADMIN_EMAIL.strip().lower()

    @property
    def session_max_age(self) -> int:
        """Cookie lifetime in seconds, matching the token expiry."""
        return self.SESSION_EXPIRE_HOURS * 3600


# Create a single instance to be imported throughout the app
settings = Settings()
