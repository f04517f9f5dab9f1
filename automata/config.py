"""
Configuration module for the Automata onboarding core.

Loads environment variables and validates required settings.
"""
import logging
import os
from dotenv import load_dotenv

from automata.utils.constants import STORAGE_KEY

# Load .env file
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Onboarding persistence (one JSON blob under one key)
    ONBOARDING_STORAGE_KEY: str = os.getenv("ONBOARDING_STORAGE_KEY", STORAGE_KEY)
    ONBOARDING_STORAGE_PATH: str = os.getenv(
        "ONBOARDING_STORAGE_PATH",
        ".automata/onboarding.json"
    )

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing or invalid.
        """
        required_settings = {
            "ONBOARDING_STORAGE_KEY": cls.ONBOARDING_STORAGE_KEY,
            "ONBOARDING_STORAGE_PATH": cls.ONBOARDING_STORAGE_PATH,
        }

        missing = [key for key, value in required_settings.items() if not value.strip()]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

        if not isinstance(logging.getLevelName(cls.LOG_LEVEL.upper()), int):
            raise ValueError(
                f"Invalid LOG_LEVEL '{cls.LOG_LEVEL}'. "
                "Use one of DEBUG, INFO, WARNING, ERROR, CRITICAL."
            )

    @classmethod
    def log_level(cls) -> int:
        """Numeric logging level for LOG_LEVEL (INFO when unrecognised)."""
        level = logging.getLevelName(cls.LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_staging(cls) -> bool:
        """Check if running in staging environment."""
        return cls.ENVIRONMENT.lower() == "staging"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"⚠️  Warning: {e}")
            print("   Onboarding state may not persist correctly until you fix your .env file.")
        else:
            # In production or staging, fail immediately
            raise
