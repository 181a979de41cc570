import logging
from pydantic_settings import BaseSettings
from pydantic import model_validator, ConfigDict
from functools import lru_cache

logger = logging.getLogger(__name__)

DEV_ORIGINS = "http://localhost:5173,http://localhost:3000"


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment: "development" or "production"
    environment: str = "development"
    log_level: str = "INFO"

    allowed_origins: str = DEV_ORIGINS

    # Upstream services
    oauth_token_url: str = "https://oauth2.googleapis.com/token"
    google_ads_host: str = "googleads.googleapis.com"
    google_ads_api_version: str = "v19"
    openai_api_key: str = ""  # Fallback when the request carries no key
    openai_model: str = "gpt-4o"
    openai_base_url: str = "https://api.openai.com/v1"

    http_timeout: float = 30.0

    @model_validator(mode="after")
    def _validate_settings(self) -> "Settings":
        if self.http_timeout <= 0:
            raise ValueError("HTTP_TIMEOUT must be a positive number of seconds.")
        if self.is_production:
            remote = [o for o in self.cors_origin_list if "localhost" not in o]
            if not remote:
                raise ValueError(
                    "ALLOWED_ORIGINS must be set in production "
                    "(comma-separated list of frontend origins)."
                )
            if not self.openai_api_key:
                logger.warning("OPENAI_API_KEY is not set; audits require a key in each request.")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def google_ads_base_url(self) -> str:
        return f"https://{self.google_ads_host}/{self.google_ads_api_version}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
