"""
Validated configuration for an OCR service instance.

Validation happens synchronously at construction, before any client is
created or any network call is made.
"""
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from core.constants import (
    DEFAULT_IMAGE_OPTIONS,
    DEFAULT_MODELS,
    DEFAULT_OCR_PARAMS,
    DEFAULT_OLLAMA_BASE_URL,
    LOCAL_PROVIDERS,
    SUPPORTED_PROVIDERS,
)
from core.exceptions import ConfigurationError


def _format_error(err: dict) -> str:
    message = err['msg'].removeprefix('Value error, ')
    location = '.'.join(str(part) for part in err.get('loc', ()))
    return f"{location}: {message}" if location else message


class ImageOptions(BaseModel):
    """Image preparation options."""

    model_config = ConfigDict(frozen=True)

    max_width: int = Field(default=DEFAULT_IMAGE_OPTIONS['max_width'], gt=0)
    max_height: int = Field(default=DEFAULT_IMAGE_OPTIONS['max_height'], gt=0)
    quality: int = Field(default=DEFAULT_IMAGE_OPTIONS['quality'], ge=1, le=100)
    sharpen: bool = DEFAULT_IMAGE_OPTIONS['sharpen']
    normalize: bool = DEFAULT_IMAGE_OPTIONS['normalize']


class OCRConfig(BaseModel):
    """Provider, credentials and image options for an OCR service."""

    model_config = ConfigDict(frozen=True)

    provider: str
    api_key: Optional[str] = None
    model: Optional[str] = None
    ollama_base_url: str = DEFAULT_OLLAMA_BASE_URL
    temperature: float = Field(default=DEFAULT_OCR_PARAMS['temperature'], ge=0, le=2)
    debug: bool = False
    image_options: ImageOptions = Field(default_factory=ImageOptions)

    @field_validator('provider', mode='before')
    @classmethod
    def _check_provider(cls, value):
        if not value:
            raise ValueError(
                f"Provider is required ({', '.join(SUPPORTED_PROVIDERS)})"
            )
        provider = str(value).lower().strip()
        if provider not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Invalid provider '{value}'. Must be one of: {', '.join(SUPPORTED_PROVIDERS)}"
            )
        return provider

    @model_validator(mode='after')
    def _check_api_key(self):
        if self.provider not in LOCAL_PROVIDERS and not self.api_key:
            raise ValueError(f"API key is required for {self.provider}")
        return self

    @property
    def resolved_model(self) -> str:
        """Configured model, or the provider default."""
        return self.model or DEFAULT_MODELS[self.provider]

    @classmethod
    def create(
        cls,
        config: Union["OCRConfig", Mapping[str, Any], None] = None,
        **overrides
    ) -> "OCRConfig":
        """
        Build a validated config from an instance, a mapping or keywords.

        Raises:
            ConfigurationError: If the configuration is missing or invalid
        """
        if isinstance(config, OCRConfig) and not overrides:
            return config
        if isinstance(config, OCRConfig):
            data = config.model_dump()
        elif config is None:
            data = {}
        else:
            data = dict(config)
        data.update(overrides)
        if not data:
            raise ConfigurationError("Configuration is required")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            messages = "; ".join(_format_error(err) for err in e.errors())
            raise ConfigurationError(f"Invalid configuration: {messages}") from e

    @classmethod
    def from_settings(cls, settings, **overrides) -> "OCRConfig":
        """Build a config from environment settings."""
        provider = overrides.pop('provider', None) or settings.ocr_provider
        data = {
            'provider': provider,
            'api_key': settings.get_api_key(provider),
            'model': settings.ocr_model,
            'ollama_base_url': settings.ollama_base_url,
            'temperature': settings.ocr_temperature,
            'debug': settings.ocr_debug,
            'image_options': settings.get_image_options(),
        }
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.create(data)
