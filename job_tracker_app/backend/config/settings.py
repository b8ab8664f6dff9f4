"""
Centralized configuration management for the Job Application Tracker.
All environment variables, the shared secret and the demo/read-only switches are managed here.
"""
from typing import Optional, List
from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Application settings with validation and type hints."""

    # =============================================================================
    # APPLICATION SETTINGS
    # =============================================================================
    app_name: str = "Job Application Tracker"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    testing: bool = False

    # =============================================================================
    # ACCESS SETTINGS
    # =============================================================================
    # Demo mode opens the access gate to everyone.
    demo_mode: bool = False
    # Unset means "follow demo_mode".
    read_only: Optional[bool] = None
    app_password: Optional[str] = None
    auth_realm: str = "Secure Area"
    auth_exempt_paths: List[str] = ["/api/health"]

    # =============================================================================
    # LIST VIEW SETTINGS
    # =============================================================================
    default_page_size: int = 10
    max_page_size: int = 100

    @field_validator("default_page_size", "max_page_size")
    @classmethod
    def validate_page_size(cls, v, info):
        if v < 1:
            raise ValueError(f"{info.field_name} must be at least 1")
        return v

    # =============================================================================
    # DATABASE SETTINGS
    # =============================================================================
    database_url: str = "sqlite:///./job_tracker.db"
    database_echo: bool = False

    # =============================================================================
    # LOGGING SETTINGS
    # =============================================================================
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # =============================================================================
    # DEVELOPMENT SETTINGS
    # =============================================================================
    api_docs_enabled: bool = True
    cors_enabled: bool = True
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # =============================================================================
    # CONFIGURATION LOADING
    # =============================================================================
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.testing or self.environment.lower() == "testing"

    def is_read_only(self) -> bool:
        """Mutations are disabled explicitly, or implicitly by demo mode."""
        if self.read_only is None:
            return self.demo_mode
        return self.read_only

    def get_database_url(self) -> str:
        """Get database URL with appropriate settings for environment."""
        if self.is_testing():
            return "sqlite:///:memory:"
        return self.database_url

    def validate_required_settings(self) -> List[str]:
        """Validate that all required settings are properly configured."""
        missing = []

        if self.is_production() and self.debug:
            missing.append("DEBUG must be False in production")

        if not self.demo_mode and not self.app_password:
            missing.append("APP_PASSWORD is required unless DEMO_MODE is enabled")
        elif self.app_password and not self.app_password.isascii():
            missing.append("APP_PASSWORD must be ASCII to be usable with HTTP Basic credentials")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            missing.append(f"Invalid LOG_LEVEL: {self.log_level}")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).
    This function is cached to avoid recreating the settings object multiple times.
    """
    return Settings()
