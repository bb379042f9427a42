# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, List
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./storage_inventory.db"

    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Public base URL used for previewUrl and uploaded object URLs
    PUBLIC_URL: str = "http://localhost:8000"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Uploads
    UPLOAD_DIR: str = "static/uploads"
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024
    ALLOWED_UPLOAD_TYPES: List[str] = ["image/jpeg", "image/png", "image/webp", "image/gif"]

    # Cursor pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # Account deletion grace period and the delayed-callback service
    ACCOUNT_DELETION_DELAY_HOURS: int = 24
    SCHEDULER_URL: str = ""
    SCHEDULER_TOKEN: str = ""
    SCHEDULER_SIGNING_KEY: str = ""

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
