"""
Application configuration — reads all settings from environment variables.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

DEFAULT_KNOWLEDGE_BASE = str(Path(__file__).parent / "data" / "knowledge_base.json")


class Settings(BaseSettings):
    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "Companion AI"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # ── Knowledge Base ───────────────────────────────────
    KNOWLEDGE_BASE_PATH: str = DEFAULT_KNOWLEDGE_BASE
    RANDOM_SEED: Optional[int] = None

    # ── Rate Limiting ────────────────────────────────────
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60

    # ── Email (SMTP relay) ───────────────────────────────
    EMAIL_HOST: str = "smtp.gmail.com"
    EMAIL_PORT: int = 587
    EMAIL_USER: str = ""
    EMAIL_PASSWORD: str = ""
    EMAIL_USE_TLS: bool = True
    EMAIL_TIMEOUT_SECONDS: float = 10.0
    FRONTEND_URL: str = "https://yourapp.com"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
