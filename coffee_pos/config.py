"""
Configuration settings for Coffee POS Service
"""
from decimal import Decimal
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings"""
    
    # Database
    DATABASE_URL: str = "sqlite:///./coffee_pos.db"
    DB_CONNECT_RETRIES: int = 5
    DB_RETRY_DELAY: int = 1
    
    # Service
    SERVICE_NAME: str = "coffee-pos"
    SERVICE_PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    ENABLE_METRICS: bool = True
    
    # Origin used to build customer and tracking links
    PUBLIC_ORIGIN: str = "http://localhost:3000"
    
    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8080"
    ]
    
    # Pricing
    UPSIZE_SURCHARGE: Decimal = Decimal("10")
    
    # Tracking and dashboard clock times
    DISPLAY_TIMEZONE: str = "Asia/Manila"
    
    # Customer links
    TOKEN_TTL_HOURS: int = 48
    
    # Staff auth
    SECRET_KEY: str = "change-me"
    ACCESS_TOKEN_EXPIRES_HOURS: int = 12
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Default settings instance, used when the app factory is not given one
settings = Settings()
