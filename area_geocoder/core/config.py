"""Application configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Environment variables will be loaded and validated using Pydantic.
    """

    app_name: str = "Area Geocoder"
    version: str = "0.1.0"
    api_prefix: str = "/api/v1"

    # CORS Settings
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = False

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # Boundary dataset
    BOUNDARY_FILE: str = "areas.json"
    BOUNDARY_CACHE_ENABLED: bool = False  # Reload the file on every lookup

    # Response labels
    LOCALITY_NAME: str = "Dire Dawa"  # Appended to matched area long names
    FALLBACK_NAME: str = Field(
        default="Dire Dawa",
        description="Location name returned when no area contains the point",
    )
    FALLBACK_PLACE_ID: str = "unknown"

    # Plaintext listener (loopback only by default)
    HTTP_ENABLED: bool = True
    HTTP_HOST: str = "127.0.0.1"
    HTTP_PORT: int = Field(default=8080, ge=1, le=65535)

    # TLS listener
    HTTPS_ENABLED: bool = True
    HTTPS_HOST: str = "0.0.0.0"  # nosec B104
    HTTPS_PORT: int = Field(default=8443, ge=1, le=65535)
    TLS_CERTFILE: str | None = None
    TLS_KEYFILE: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",  # Allow extra fields in environment
    )


# Create settings instance
settings = Settings()
