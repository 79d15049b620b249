"""Environment driven settings for the flashcard AI service."""
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

    ENVIRONMENT: str = 'development'
    LOG_LEVEL: str = 'INFO'
    LOG_FORMAT: str = 'json'
    LOG_FILE_PATH: str = 'logs'
    LOG_TO_FILE: bool = True
    LOG_MAX_SIZE: int = 10 * 1024 * 1024
    LOG_MAX_FILES: int = 7

    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: Optional[str] = None
    OPENAI_MODEL: str = 'gpt-4o-mini'
    OPENAI_TIMEOUT: float = 60
    OPENAI_RETRY_ATTEMPTS: int = 3
    OPENAI_RETRY_MULTIPLIER: int = 2
    OPENAI_RETRY_MAX_WAIT: int = 10

    FLASHCARD_MAX_TOKENS: int = 4096
    FLASHCARD_TEMPERATURE: float = 0.5
    FLASHCARD_MIN_TEXT_LENGTH: int = 20

    SUMMARIZER_MAX_TOKENS: int = 500
    SUMMARIZER_TEMPERATURE: float = 0.3

    MINDMAP_MAX_TOKENS: int = 2000
    MINDMAP_TEMPERATURE: float = 0.4

    MAX_IMAGE_SIZE_MB: int = 10
    SUPPORTED_IMAGE_FORMATS: str = 'png,jpeg,jpg,webp,gif'
    MAX_PDF_SIZE_MB: int = 50

    REDIS_CACHE_ENABLED: bool = False
    REDIS_HOST: str = 'localhost'
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: Optional[str] = Field(default=None)
    REDIS_CACHE_TTL: int = 3600

    @property
    def supported_image_formats(self) -> List[str]:
        return [f.strip().lower() for f in self.SUPPORTED_IMAGE_FORMATS.split(',') if f.strip()]


settings = Settings()
