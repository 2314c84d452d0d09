from typing import List, Union
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "PawPost"
    ENVIRONMENT: str = "development"
    API_PREFIX: str = "/api"

    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"]

    @field_validator("CORS_ORIGINS", "ALLOWED_UPLOAD_TYPES", "ALLOWED_IMPORT_TYPES", mode="before")
    @classmethod
    def split_comma_list(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            v = v.strip("[").strip("]").strip('"').strip("'")
            if not v:
                return []
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./pawpost.db"

    # Uploads (evidence files and CSV imports)
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    ALLOWED_UPLOAD_TYPES: List[str] = [
        "image/jpeg",
        "image/png",
        "image/gif",
        "application/pdf",
        "video/mp4",
        "audio/mpeg",
    ]
    # CSV imports, same MAX_UPLOAD_BYTES ceiling
    ALLOWED_IMPORT_TYPES: List[str] = [
        "text/csv",
        "application/csv",
        "application/vnd.ms-excel",
        "text/plain",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file="pawpost.env",
        env_file_encoding="utf-8"
    )

settings = Settings()
