"""
Application Configuration
从环境变量加载配置
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Environment
    ENVIRONMENT: str = "development"

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Reject values the translation path cannot work with"""
        if self.TRANSLATION_CACHE_SIZE <= 0:
            raise ValueError("TRANSLATION_CACHE_SIZE must be positive")
        if self.TRANSLATION_ADAPTER_TIMEOUT <= 0:
            raise ValueError("TRANSLATION_ADAPTER_TIMEOUT must be positive")
        if self.DEFAULT_SAMPLE_RATE <= 0:
            raise ValueError("DEFAULT_SAMPLE_RATE must be positive")
        if self.ENVIRONMENT == "production" and "*" in self.CORS_ORIGINS:
            raise ValueError(
                "Wildcard CORS origin is not allowed in production! "
                "Set CORS_ORIGINS via environment variable."
            )
        return self

    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"  # DEBUG, INFO, WARNING, ERROR

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # CORS
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8080",
        "http://127.0.0.1:8080",
        "http://localhost:5500",
        "http://127.0.0.1:5500",
    ]

    # Session defaults
    DEFAULT_SOURCE_LANG: str = "en"
    DEFAULT_TARGET_LANG: str = "ar"
    DEFAULT_SAMPLE_RATE: int = 16000

    # Audio accumulation (16-bit PCM)
    AUDIO_FLUSH_SECONDS: float = 2.0
    AUDIO_BYTES_PER_SAMPLE: int = 2
    MIN_TRANSCRIBE_BYTES: int = 1000

    # Translation engine
    TRANSLATION_CACHE_SIZE: int = 1000
    TRANSLATION_ADAPTER_TIMEOUT: float = 8.0  # seconds, per adapter

    # Remote translation providers
    REMOTE_TRANSLATION_ENABLED: bool = True
    LIBRETRANSLATE_URL: str = "https://libretranslate.com/translate"
    MYMEMORY_URL: str = "https://api.mymemory.translated.net/get"
    GOOGLE_TRANSLATE_URL: str = "https://translate.googleapis.com/translate_a/single"
    MICROSOFT_TRANSLATOR_URL: str = "https://api.cognitive.microsofttranslator.com/translate"
    MICROSOFT_TRANSLATOR_KEY: str = ""

    # Quality scoring weights
    SCORE_BASE: float = 0.5
    SCORE_LENGTH_WEIGHT: float = 0.2
    SCORE_COVERAGE_WEIGHT: float = 0.3
    SCORE_ERROR_PENALTY: float = 0.3
    SCORE_SCRIPT_BONUS: float = 0.2
    SCORE_BRACKET_DENSITY_WEIGHT: float = 0.3

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
