from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./greenthumb.sqlite"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800

    # Security
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Plant.id identification
    PLANT_ID_API_KEY: str = ""
    PLANT_ID_API_URL: str = "https://plant.id/api/v2/identify"

    # Trefle supplemental data
    TREFLE_API_KEY: str = ""
    TREFLE_API_URL: str = "https://trefle.io/api/v1"

    HTTP_TIMEOUT: float = 30.0

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_CACHE_TTL: int = 3600
    PLANT_DETAILS_CACHE_TTL: int = 86400

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 60
    RATE_LIMIT_PER_HOUR: int = 1000

    # All reminder date math happens in this zone
    TIMEZONE: str = "UTC"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
