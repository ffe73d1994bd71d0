"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./wedding_planner.db")

    # Security
    ADMIN_TOKEN: str = os.getenv("ADMIN_TOKEN", "admin_token_123")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 30
    # Peers whose X-Forwarded-For / X-Real-IP headers are believed
    TRUSTED_PROXIES: List[str] = []

    # Seating
    TABLE_CAPACITY: int = 10
    TABLE_COUNT: int = 20

    # Search
    SEARCH_RESULT_LIMIT: int = 50

    # Floor layout
    FLOOR_LAYOUT_FILE: str = os.getenv("FLOOR_LAYOUT_FILE", "floor-layout.json")
    # Canvas size of layouts saved before positions were normalized
    LEGACY_LAYOUT_WIDTH: float = 1000.0
    LEGACY_LAYOUT_HEIGHT: float = 600.0

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"

settings = Settings()
