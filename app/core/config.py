from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Recipe Catalog API"
    ROOT_PATH: str = ""
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"

    # Database
    DATABASE_URL: str = "sqlite:///./recipes.db"
    DATABASE_ECHO: bool = False

    # Picture uploads
    UPLOAD_DIR: str = "uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # CORS
    # In production, you would handle this more robustly, possibly parsing a comma-separated string
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000"
    ]

    LOG_CONFIG_FILE: str = "logging.ini"

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")

settings = Settings()
