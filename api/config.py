"""
Environment-aware configuration.
Every value can be overridden from the environment (or a .env file).
Token settings are read once here and handed to the TokenManager in create_app.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    APP_ENV = os.getenv("APP_ENV", "dev")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Server
    PORT = int(os.getenv("PORT", "3000"))
    API_PREFIX = os.getenv("PREFIX_API", "/api/v1")
    # Seconds; 0 disables the per-request deadline
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///webhooks.db")
    DATABASE_ECHO = _env_bool("DATABASE_ECHO")

    # JWT
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("JWT_EXPIRES_IN_SECONDS", "900")))
    REFRESH_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("REFRESH_TOKEN_EXPIRES_IN_SECONDS", "604800")))

    # CORS
    CORS_ORIGINS = os.getenv("CORS_ORIGIN", "*")
    CORS_METHODS = _env_list("CORS_METHODS", "GET,HEAD,PUT,PATCH,POST,DELETE")
    CORS_ALLOWED_HEADERS = _env_list("CORS_ALLOWED_HEADERS", "Content-Type,Authorization")
    CORS_EXPOSED_HEADERS = _env_list("CORS_EXPOSED_HEADERS", "")
    CORS_CREDENTIALS = _env_bool("CORS_CREDENTIALS")
    CORS_MAX_AGE = int(os.getenv("CORS_MAX_AGE", "3600"))

    # Rate limiting (Flask-Limiter)
    RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))
    RATE_LIMIT_MAX = int(os.getenv("RATE_LIMIT_MAX", "10"))
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    # In dev, propagate exceptions so our error handler has full context
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    """In-memory SQLite, fixed secret, no rate limiting or request deadline."""

    TESTING = True
    DEBUG = False
    DATABASE_URL = "sqlite:///:memory:"
    DATABASE_ECHO = False
    JWT_SECRET = "test-secret-not-for-production"
    ACCESS_TOKEN_EXPIRES = timedelta(minutes=15)
    REFRESH_TOKEN_EXPIRES = timedelta(days=7)
    RATELIMIT_ENABLED = False
    REQUEST_TIMEOUT = 0


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/prod/test).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
