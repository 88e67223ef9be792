"""Configuration management using Pydantic Settings"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    environment: str = "development"

    # Database
    database_url: str = "sqlite:///./loanyfy.db"

    # Document storage
    upload_dir: str = "uploads"

    # Service
    service_name: str = "loanyfy-api"
    log_level: str = "INFO"
    port: int = 5001
    cors_origins: List[str] = ["https://loanyfy.netlify.app"]

    # Wizard client
    api_base: str = "http://localhost:5001"
    create_timeout_seconds: float = 10.0
    upload_timeout_seconds: float = 60.0  # Multipart uploads carry whole files
    frame_interval_seconds: float = 1 / 60
    default_product_type: Optional[str] = None

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


settings = Settings()
