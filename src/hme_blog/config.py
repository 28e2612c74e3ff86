"""Configuration helpers for the blog front end."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_token: str | None = Field(None, alias="DATOCMS_API_TOKEN")
    endpoint: str = Field(
        "https://graphql.datocms.com",
        alias="DATOCMS_ENDPOINT",
        description="GraphQL Content Delivery API endpoint.",
    )
    include_drafts: bool = Field(
        False,
        alias="DATOCMS_INCLUDE_DRAFTS",
        description="Ask the CMS for draft records as well as published ones.",
    )
    exclude_invalid: bool = Field(
        False,
        alias="DATOCMS_EXCLUDE_INVALID",
        description="Ask the CMS to drop records that fail its own validations.",
    )
    request_timeout: float = Field(
        10.0, alias="DATOCMS_TIMEOUT", description="HTTP timeout in seconds."
    )
    related_limit: int = Field(
        3,
        alias="RELATED_LIMIT",
        description="Maximum number of related articles shown on a detail page.",
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    def require_api_token(self) -> str:
        if not self.api_token:
            raise RuntimeError(
                "DATOCMS_API_TOKEN is required. Set it in the environment or .env file."
            )
        return self.api_token


def get_settings() -> Settings:
    """Return a settings instance read from the current environment."""
    return Settings()
