"""Application configuration with environment variables."""

from decimal import Decimal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clinic_api.core import constants


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"
    VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Slot generation (24-hour clock)
    SLOT_INTERVAL_MINUTES: int = constants.DEFAULT_SLOT_INTERVAL_MINUTES
    BUSINESS_HOURS_START: int = constants.BUSINESS_HOURS_START
    BUSINESS_HOURS_END: int = constants.BUSINESS_HOURS_END

    # Calendar occupancy bands
    OCCUPANCY_LOW_WATERMARK: int = constants.OCCUPANCY_LOW_WATERMARK
    OCCUPANCY_HIGH_WATERMARK: int = constants.OCCUPANCY_HIGH_WATERMARK
    MAX_CALENDAR_RANGE_DAYS: int = constants.MAX_CALENDAR_RANGE_DAYS

    # Checkout
    DEFAULT_TAX_RATE: Decimal = constants.DEFAULT_TAX_RATE

    @model_validator(mode="after")
    def _check_watermarks(self) -> "Settings":
        if self.OCCUPANCY_LOW_WATERMARK < 0:
            raise ValueError("OCCUPANCY_LOW_WATERMARK must be >= 0")
        if self.OCCUPANCY_HIGH_WATERMARK < self.OCCUPANCY_LOW_WATERMARK:
            raise ValueError("OCCUPANCY_HIGH_WATERMARK must be >= OCCUPANCY_LOW_WATERMARK")
        return self

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def docs_enabled(self) -> bool:
        """API docs only outside production."""
        return self.ENV != "production"


settings = Settings()
