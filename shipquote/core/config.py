from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    REDIS_URL: Optional[str] = None
    PRICE_CACHE_TTL: int = 60   # 60 seconds

    # JSON file overriding the built-in pricing config
    PRICING_CONFIG_PATH: Optional[str] = None
    ROAD_MULTIPLIER: float = 1.15

    API_TITLE: str = "Vehicle Shipping Quote Service"
    API_DESCRIPTION: str = "Deterministic vehicle shipping quotes with a full price breakdown"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
