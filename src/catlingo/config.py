"""Configuration settings for catlingo."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "production", "test"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CATLINGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./catlingo.db"

    # "test" is the only environment where the connector may alter the schema
    environment: Environment = "development"

    # Connector loaded by activate_connector() when no name is given
    categories_connector: str = "i18n"

    # Display locale used when a request does not carry one
    default_locale: str = "en"

    # Admin service
    admin_host: str = "0.0.0.0"  # noqa: S104 - intentional bind to all interfaces
    admin_port: int = 8080

    @property
    def is_ephemeral(self) -> bool:
        """Whether this is a throwaway environment (tests)."""
        return self.environment == "test"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
