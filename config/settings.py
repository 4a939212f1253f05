"""
Configuration management using Pydantic Settings.

Environment variables:
- OCR_PROVIDER: Model provider (openrouter, openai, gemini, ollama)
- OCR_MODEL: Model name (defaults to the provider's default)
- OPENAI_API_KEY / OPENROUTER_API_KEY / GEMINI_API_KEY: Provider API keys
- OLLAMA_BASE_URL: Base URL for a local Ollama server
- OCR_DEBUG: Emit progress logs
- OCR_TIMEOUT: Per-attempt model timeout in seconds
- IMAGE_MAX_WIDTH / IMAGE_MAX_HEIGHT / IMAGE_QUALITY: Image preparation
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Provider Configuration
    ocr_provider: str = "openrouter"
    ocr_model: Optional[str] = None
    openai_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    ollama_base_url: str = "http://localhost:11434"

    # OCR Parameters
    ocr_debug: bool = False
    ocr_timeout: float = 30.0
    ocr_concurrency: int = 3
    ocr_temperature: float = 0.1

    # Image Preparation
    image_max_width: int = 2048
    image_max_height: int = 2048
    image_quality: int = 90
    image_sharpen: bool = True
    image_normalize: bool = True

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8002

    def get_api_key(self, provider: str) -> Optional[str]:
        """Get the API key configured for a provider."""
        return {
            'openai': self.openai_api_key,
            'openrouter': self.openrouter_api_key,
            'gemini': self.gemini_api_key,
        }.get(provider.lower().strip())

    def get_image_options(self) -> dict:
        """Get image preparation options as dictionary."""
        return {
            'max_width': self.image_max_width,
            'max_height': self.image_max_height,
            'quality': self.image_quality,
            'sharpen': self.image_sharpen,
            'normalize': self.image_normalize
        }


# Global settings instance
settings = Settings()
