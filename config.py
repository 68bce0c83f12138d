"""
Application configuration module.

This module defines configuration classes for different environments
(development, testing, production). Configuration values are loaded
from environment variables with sensible defaults.
"""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """
    Base configuration with default settings.

    Attributes:
        SECRET_KEY: Flask signing key.
        PORT: Port the development server listens on.
        SQLALCHEMY_DATABASE_URI: Document store connection string.
        EMAIL_API_URL: Transactional email provider endpoint.
        EMAIL_API_KEY: Provider credential, sent as the ``authkey`` header.
        EMAIL_TIMEOUT: Seconds to wait for the provider before giving up.
        CORS_ORIGINS: Origins allowed to make cross-origin requests.
    """

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
    PORT: int = int(os.environ.get("PORT", "5000"))
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    # Default database location
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'tasks.db'}"
    )

    EMAIL_API_URL: str = os.environ.get(
        "EMAIL_API_URL",
        "https://control.msg91.com/api/v5/email/send"
    )
    # Never ship a default key; the relay refuses to run without one.
    EMAIL_API_KEY: str = os.environ.get("EMAIL_API_KEY", "")
    EMAIL_TIMEOUT: int = int(os.environ.get("EMAIL_TIMEOUT", "10"))

    # Comma-separated list of allowed origins, "*" for any
    CORS_ORIGINS: str = os.environ.get("CORS_ORIGINS", "*")


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Testing environment configuration."""

    DEBUG: bool = True
    TESTING: bool = True

    # In-memory SQLite; Flask-SQLAlchemy shares one connection for it
    SQLALCHEMY_DATABASE_URI: str = os.environ.get("TEST_DATABASE_URL", "sqlite://")

    # Non-routable host so tests never reach the real provider
    EMAIL_API_URL: str = os.environ.get("TEST_EMAIL_API_URL", "http://email.test/send")
    EMAIL_API_KEY: str = os.environ.get("TEST_EMAIL_API_KEY", "test-email-key")
    EMAIL_TIMEOUT: int = 1


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG: bool = False
    TESTING: bool = False


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, production).
             If None, uses FLASK_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
