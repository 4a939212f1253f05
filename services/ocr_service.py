"""
OCR Service - Orchestrates text extraction through a vision model.

This service sequences image preparation, prompt building, model
invocation and response normalization, and fans single-image extraction
out over batches and image regions.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from config.ocr_config import OCRConfig
from core.constants import AVAILABLE_MODELS, DEFAULT_OCR_PARAMS, LOG_PREFIX, OUTPUT_FORMATS
from core.exceptions import InvalidInputError, OCRExtractionError
from core.models import OCRResult, Region
from llm.client_factory import LLMClientFactory
from llm.llm_client_base import BaseLLMClient
from utils.image_utils import create_sample_image
from .image_processor import ImageProcessor, ImageSource
from .invocation import DEFAULT_STRATEGIES, InvocationStrategy, invoke_with_fallback
from .prompt_builder import PromptBuilder
from .result_parser import ResultParser

logger = logging.getLogger(__name__)

ExtractionOutput = Union[OCRResult, str]


@dataclass
class OCRComponents:
    """
    Collaborators used by OCRService.

    Any component left as None is replaced by the default implementation;
    the LLM client default is built from the service configuration.
    """
    image_processor: Optional[ImageProcessor] = None
    llm_client: Optional[BaseLLMClient] = None
    prompt_builder: Optional[PromptBuilder] = None
    result_parser: Optional[ResultParser] = None
    invocation_strategies: Optional[Sequence[InvocationStrategy]] = None


class OCRService:
    """Service for OCR extraction using a vision LLM."""

    def __init__(
        self,
        config: Union[OCRConfig, Mapping[str, Any], None] = None,
        components: Optional[OCRComponents] = None,
        **config_overrides
    ):
        """
        Initialize OCR service.

        Args:
            config: OCRConfig instance or mapping of its fields
            components: Collaborators to use instead of the defaults
            **config_overrides: Individual config fields (provider, api_key, ...)

        Raises:
            ConfigurationError: If the configuration is invalid; raised before
                any client is created
        """
        self.config = OCRConfig.create(config, **config_overrides)
        components = components or OCRComponents()

        self.image_processor = components.image_processor or ImageProcessor(self.config.image_options)
        self.prompt_builder = components.prompt_builder or PromptBuilder()
        self.result_parser = components.result_parser or ResultParser()
        self.invocation_strategies = tuple(components.invocation_strategies or DEFAULT_STRATEGIES)
        self.llm_client = components.llm_client or LLMClientFactory.create_client(
            self.config.provider,
            self.config.resolved_model,
            api_key=self.config.api_key,
            ollama_base_url=self.config.ollama_base_url,
            temperature=self.config.temperature
        )

        self.log('OCR service initialized with provider:', self.provider)

    @property
    def provider(self) -> str:
        return self.config.provider

    @property
    def model(self) -> str:
        return self.config.resolved_model

    def log(self, *args):
        """Emit a progress message when debug is enabled."""
        if self.config.debug:
            logger.info(" ".join([LOG_PREFIX, *(str(arg) for arg in args)]))

    async def extract_text(
        self,
        source: ImageSource,
        format: str = DEFAULT_OCR_PARAMS['format'],
        include_colors: bool = DEFAULT_OCR_PARAMS['include_colors'],
        custom_prompt: Optional[str] = None,
        timeout: float = DEFAULT_OCR_PARAMS['timeout']
    ) -> ExtractionOutput:
        """
        Extract text from a single image.

        Args:
            source: File path, http(s) URL or raw image bytes
            format: 'json' for an OCRResult, 'text' for plain text
            include_colors: Ask the model for text/background colors
            custom_prompt: Prompt used instead of the built-in one
            timeout: Seconds allowed for each model attempt

        Returns:
            OCRResult for 'json', stripped reply text for 'text'

        Raises:
            OCRExtractionError: If any step fails
        """
        start_time = time.perf_counter()

        try:
            if format not in OUTPUT_FORMATS:
                raise InvalidInputError(
                    f"Unsupported output format '{format}'. Must be one of: {', '.join(OUTPUT_FORMATS)}"
                )
            if timeout is None or timeout <= 0:
                raise InvalidInputError("Timeout must be a positive number of seconds")

            self.log('Starting OCR extraction...')
            prepared = await self.image_processor.prepare(source)

            prompt = custom_prompt or self.prompt_builder.build(format, include_colors=include_colors)

            self.log('Sending to AI provider...')
            reply = await invoke_with_fallback(
                self.llm_client,
                prompt,
                prepared.to_data_uri(),
                timeout,
                strategies=self.invocation_strategies,
                log=self.log
            )
            self.log('AI response received')

            if format == 'json':
                result = self.result_parser.parse(
                    reply,
                    prepared.metadata,
                    prepared.original_metadata,
                    start_time
                )
                self.log(f'OCR completed: {len(result.elements)} elements found')
                return result

            self.log('OCR completed (text format)')
            return reply.strip()

        except Exception as e:
            self.log('OCR extraction failed:', e)
            raise OCRExtractionError(f"OCR extraction failed: {e}", cause=e) from e

    async def batch_process(
        self,
        sources: Sequence[ImageSource],
        concurrency: int = DEFAULT_OCR_PARAMS['concurrency'],
        **options
    ) -> List[Union[ExtractionOutput, Dict[str, Any]]]:
        """
        Extract text from many images.

        Images are processed in consecutive groups of ``concurrency``; groups
        run one after another, items of a group run concurrently. A failing
        item becomes ``{'error': message, 'image': source}`` at its position.

        Args:
            sources: Image paths, URLs or bytes
            concurrency: Group size
            **options: Keyword options for extract_text

        Returns:
            One entry per input, in input order
        """
        if not isinstance(sources, (list, tuple)):
            raise InvalidInputError('Images must be a list')
        if not isinstance(concurrency, int) or concurrency < 1:
            raise InvalidInputError('Concurrency must be a positive integer')

        self.log(f'Starting batch processing of {len(sources)} images with concurrency {concurrency}')

        results = []
        for start in range(0, len(sources), concurrency):
            group = sources[start:start + concurrency]
            group_results = await asyncio.gather(*[
                self._extract_or_error(source, index + 1, len(group), options)
                for index, source in enumerate(group)
            ])
            results.extend(group_results)

        self.log(f'Batch processing completed: {len(results)} results')
        return results

    async def _extract_or_error(self, source, position: int, group_size: int, options: dict):
        try:
            self.log(f'Processing batch item {position}/{group_size}')
            return await self.extract_text(source, **options)
        except Exception as e:
            self.log(f'Batch item {position} failed:', e)
            return {'error': str(e), 'image': source}

    async def extract_from_regions(
        self,
        source: ImageSource,
        regions: Sequence[Any],
        **options
    ) -> List[Union[ExtractionOutput, Dict[str, Any]]]:
        """
        Extract text from rectangular regions of one image.

        The source is prepared once; each region (in original-image pixels)
        is mapped onto the prepared image, cropped and run through
        extract_text. A failing region becomes ``{'error': message,
        'region': region}``.

        Args:
            source: File path, http(s) URL or raw image bytes
            regions: Region objects, dicts with x/y/width/height, or 4-tuples
            **options: Keyword options for extract_text

        Returns:
            One entry per region, in region order

        Raises:
            OCRExtractionError: If the source image cannot be prepared
        """
        if not isinstance(regions, (list, tuple)):
            raise InvalidInputError('Regions must be a list')

        self.log(f'Extracting text from {len(regions)} regions')

        try:
            prepared = await self.image_processor.prepare(source)
        except Exception as e:
            raise OCRExtractionError(f"OCR extraction failed: {e}", cause=e) from e

        original = prepared.original_metadata
        scale_x = prepared.metadata.width / original.width if original.width else 1.0
        scale_y = prepared.metadata.height / original.height if original.height else 1.0

        results = []
        for index, region in enumerate(regions, start=1):
            self.log(f'Processing region {index}/{len(regions)}:', region)
            try:
                box = Region.from_value(region).scaled(scale_x, scale_y)
                region_bytes = await asyncio.to_thread(self.image_processor.crop, prepared.buffer, box)
                results.append(await self.extract_text(region_bytes, **options))
            except Exception as e:
                self.log(f'Region {index} extraction failed:', e)
                results.append({'error': str(e), 'region': region})

        return results

    def get_available_models(self) -> List[str]:
        """
        Get known vision models for the configured provider.

        Returns:
            List of model names (static table, no network call)
        """
        return list(AVAILABLE_MODELS.get(self.provider, ()))

    async def test(self) -> Dict[str, Any]:
        """
        Run the whole pipeline on a generated sample image.

        Returns:
            Dict with 'success' and either timing/result facts or 'error'
        """
        try:
            self.log('Running OCR test...')
            sample = create_sample_image()
            result = await self.extract_text(sample, format='json')
            return {
                'success': True,
                'provider': self.provider,
                'model': self.model,
                'elements_found': len(result.elements),
                'raw_text': result.raw_text,
                'processing_time_ms': result.metadata.processing_time_ms
            }
        except Exception as e:
            return {
                'success': False,
                'error': str(e),
                'provider': self.provider
            }

    async def close(self):
        """Close the model client."""
        await self.llm_client.close()

    async def __aenter__(self) -> "OCRService":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
