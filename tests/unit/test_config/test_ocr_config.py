"""
Unit tests for config.ocr_config and config.settings modules.
"""
import pytest
from config.ocr_config import ImageOptions, OCRConfig
from config.settings import Settings
from pydantic import ValidationError
from core.exceptions import ConfigurationError


class TestOCRConfigCreate:
    """Tests for OCRConfig.create validation."""

    def test_missing_config(self):
        with pytest.raises(ConfigurationError, match="Configuration is required"):
            OCRConfig.create()

    def test_missing_provider(self):
        with pytest.raises(ConfigurationError, match="Provider is required"):
            OCRConfig.create({'provider': '', 'api_key': 'k'})

    def test_unknown_provider(self):
        with pytest.raises(ConfigurationError, match="Invalid provider 'watson'"):
            OCRConfig.create(provider='watson', api_key='k')

    @pytest.mark.parametrize("provider", ['openai', 'openrouter', 'gemini'])
    def test_remote_provider_requires_key(self, provider):
        with pytest.raises(ConfigurationError, match=f"API key is required for {provider}"):
            OCRConfig.create(provider=provider)

    def test_ollama_without_key(self):
        config = OCRConfig.create(provider='ollama')

        assert config.api_key is None
        assert config.resolved_model == 'llava'
        assert config.ollama_base_url == 'http://localhost:11434'

    def test_provider_normalized(self):
        config = OCRConfig.create(provider=' OpenAI ', api_key='k')

        assert config.provider == 'openai'
        assert config.resolved_model == 'gpt-4o-mini'

    def test_explicit_model_wins(self):
        config = OCRConfig.create(provider='openrouter', api_key='k', model='openai/gpt-4o-mini')

        assert config.resolved_model == 'openai/gpt-4o-mini'

    def test_overrides_applied_to_instance(self):
        base = OCRConfig.create(provider='openai', api_key='k')

        config = OCRConfig.create(base, debug=True)

        assert config.debug is True
        assert base.debug is False
        assert OCRConfig.create(base) is base

    def test_image_options_from_mapping(self):
        config = OCRConfig.create(provider='ollama', image_options={'max_width': 512})

        assert config.image_options.max_width == 512
        assert config.image_options.max_height == 2048

    @pytest.mark.parametrize("options", [
        {'max_width': 0},
        {'max_height': -1},
        {'quality': 101},
        {'quality': 0},
    ])
    def test_invalid_image_options(self, options):
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            OCRConfig.create(provider='ollama', image_options=options)

    def test_temperature_range(self):
        with pytest.raises(ConfigurationError):
            OCRConfig.create(provider='ollama', temperature=3)

    def test_frozen(self):
        config = OCRConfig.create(provider='ollama')

        with pytest.raises(ValidationError):
            config.provider = 'openai'


class TestImageOptions:
    """Tests for ImageOptions defaults."""

    def test_defaults(self):
        options = ImageOptions()

        assert (options.max_width, options.max_height) == (2048, 2048)
        assert options.quality == 90
        assert options.sharpen is True
        assert options.normalize is True


class TestFromSettings:
    """Tests for building a config from environment settings."""

    def test_reads_provider_key(self, monkeypatch):
        monkeypatch.setenv('OCR_PROVIDER', 'gemini')
        monkeypatch.setenv('GEMINI_API_KEY', 'g-key')
        monkeypatch.setenv('IMAGE_MAX_WIDTH', '1024')

        config = OCRConfig.from_settings(Settings(_env_file=None))

        assert config.provider == 'gemini'
        assert config.api_key == 'g-key'
        assert config.image_options.max_width == 1024

    def test_provider_override_picks_matching_key(self, monkeypatch):
        monkeypatch.setenv('OPENROUTER_API_KEY', 'or-key')
        monkeypatch.setenv('OPENAI_API_KEY', 'oa-key')

        config = OCRConfig.from_settings(Settings(_env_file=None), provider='openai')

        assert config.api_key == 'oa-key'

    def test_none_overrides_ignored(self, monkeypatch):
        monkeypatch.setenv('OCR_PROVIDER', 'ollama')
        monkeypatch.setenv('OCR_MODEL', 'bakllava')

        config = OCRConfig.from_settings(Settings(_env_file=None), model=None, api_key=None)

        assert config.resolved_model == 'bakllava'

    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv('OPENROUTER_API_KEY', raising=False)
        monkeypatch.setenv('OCR_PROVIDER', 'openrouter')

        with pytest.raises(ConfigurationError):
            OCRConfig.from_settings(Settings(_env_file=None))


class TestSettings:
    """Tests for Settings helpers."""

    def test_get_api_key_unknown_provider(self):
        assert Settings(_env_file=None).get_api_key('ollama') is None

    def test_get_image_options(self, monkeypatch):
        monkeypatch.setenv('IMAGE_QUALITY', '75')

        options = Settings(_env_file=None).get_image_options()

        assert options['quality'] == 75
        assert set(options) == {'max_width', 'max_height', 'quality', 'sharpen', 'normalize'}
