# flight_emissions/config.py
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App
    APP_ENV: Literal["dev", "prod", "staging"] = "dev"
    TZ: str = "Europe/Oslo"  # "today" for future-flight date checks

    # Past flights emissions service
    PAST_EMISSIONS_API_URL: str = "https://flights-by-scope321.replit.app/api/v1"
    PAST_EMISSIONS_API_TOKEN: Optional[str] = None

    # Travel Impact Model (future flights)
    TRAVEL_IMPACT_API_URL: str = "https://travelimpactmodel.googleapis.com/v1"
    TRAVEL_IMPACT_API_KEY: Optional[str] = None

    # HTTP transport
    HTTP_CONNECT_TIMEOUT: float = 3.0
    HTTP_READ_TIMEOUT: float = 30.0

    # read .env and ignore any extra keys so this doesn't break again
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def has_travel_impact_key(self) -> bool:
        return bool((self.TRAVEL_IMPACT_API_KEY or "").strip())

settings = Settings()
