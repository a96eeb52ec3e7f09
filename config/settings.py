"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    holiday_api_url: str = "https://date.nager.at/api/v3/PublicHolidays"
    holiday_api_timeout: float = 10.0
    holiday_lookup_enabled: bool = True
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_prefix": "AUPAY_", "extra": "ignore"}


settings = Settings()
