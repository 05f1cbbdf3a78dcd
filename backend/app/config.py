"""
Configuration for the LogicCraft analyzer backend.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    # CORS
    ALLOWED_ORIGINS: str = Field(default="http://localhost:3000,http://localhost:5173")

    # Request limits
    MAX_REQUEST_SIZE: int = Field(default=1_048_576)  # 1 MB
    MAX_CODE_LENGTH: int = Field(default=50_000)

    # OpenRouter
    OPENROUTER_API_KEY: Optional[str] = Field(default=None)
    OPENROUTER_MODELS: str = Field(
        default=(
            "google/gemini-2.0-flash-exp:free,"
            "meta-llama/llama-3.3-70b-instruct:free,"
            "mistralai/mistral-small-3.1-24b-instruct:free,"
            "qwen/qwen2.5-72b-instruct:free,"
            "deepseek/deepseek-chat:free"
        )
    )
    AI_TIMEOUT_SECONDS: float = Field(default=30.0)
    MAX_TOKENS: int = Field(default=1024)
    TEMPERATURE: float = Field(default=0.1)

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]
        if "*" in origins:
            return ["*"]
        return origins

    @property
    def openrouter_models(self) -> list[str]:
        return [m.strip() for m in self.OPENROUTER_MODELS.split(",") if m.strip()]

    @property
    def ai_enabled(self) -> bool:
        return bool(self.OPENROUTER_API_KEY)


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


# Logging setup
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger("logiccraft")
