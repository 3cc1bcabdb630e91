from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PeliasConfig(BaseModel):
    """Immutable Pelias connection settings handed to PeliasClient."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "https://api.pelias.io/v1/"
    api_key: str | None = None
    timeout_seconds: float = 30.0

    @field_validator("base_url")
    @classmethod
    def _single_trailing_slash(cls, value: str) -> str:
        # Relative paths ("search", "reverse") must resolve under the base path
        return value.rstrip("/") + "/"

    @field_validator("api_key")
    @classmethod
    def _blank_key_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value


class Settings(BaseSettings):
    project_name: str = "Geo Service API"
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # PELIAS_BASE_URL: Pelias API root, e.g. https://api.pelias.io/v1
    pelias_base_url: str = "https://api.pelias.io/v1"

    # PELIAS_API_KEY: sent as the api_key query parameter when set (optional)
    pelias_api_key: str | None = None

    # PELIAS_TIMEOUT_SECONDS: outbound request timeout
    pelias_timeout_seconds: int = 30

    @property
    def pelias(self) -> PeliasConfig:
        """Build the client configuration from the Pelias settings."""
        return PeliasConfig(
            base_url=self.pelias_base_url,
            api_key=self.pelias_api_key,
            timeout_seconds=float(self.pelias_timeout_seconds),
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="forbid",
        frozen=True,
    )


settings = Settings()
