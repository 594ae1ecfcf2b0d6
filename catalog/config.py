"""
Environment-aware configuration.
Values come from the process environment, with .env loaded first if present.
"""
import os
from dotenv import load_dotenv

load_dotenv()  # Read .env if present


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # Keep a copy of env for visibility
    APP_ENV = os.getenv("APP_ENV", "dev")
    # Any SQLAlchemy URL; SQLite file by default
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///catalog.db")
    SQL_ECHO = _flag("SQL_ECHO")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()


class TestingConfig(BaseConfig):
    TESTING = True
    # Fresh in-memory database per app instance
    DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")
    SQL_ECHO = False


class ProductionConfig(BaseConfig):
    DEBUG = False


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/test/prod).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
