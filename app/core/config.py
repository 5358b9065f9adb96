# File: app/core/config.py

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class Settings(BaseModel):
    """
    Application settings.

    Environment-backed defaults are read once, when this module is imported
    (after `.env` is loaded). Changing the environment later and calling
    `get_settings.cache_clear()` does not pick up the new values; pass them
    to `Settings(...)` explicitly instead.
    """

    # Basic app info
    PROJECT_NAME: str = "Blog API"
    VERSION: str = "0.1.0"

    api_prefix: str = "/api"
    environment: str = os.getenv("APP_ENV", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS (the SPA runs on its own dev server)
    backend_cors_origins: List[str] = Field(
        default=os.getenv(
            "BACKEND_CORS_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173",
        ),
        validate_default=True,
    )

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./blog.db")

    # Security / auth
    session_secret: Optional[str] = os.getenv("SESSION_SECRET") or None
    algorithm: str = "HS256"
    session_expire_days: int = 7
    bcrypt_rounds: int = 10

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
