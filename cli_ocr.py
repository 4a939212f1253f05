#!/usr/bin/env python3
"""
CLI runner for vision-model OCR.

Provides command-line access to single, batch and region extraction.
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from config.logging_config import setup_logging
from config.ocr_config import OCRConfig
from config.settings import settings
from core.constants import AVAILABLE_MODELS, SUPPORTED_PROVIDERS
from core.exceptions import ConfigurationError, OCRExtractionError
from core.models import OCRResult, Region
from services.ocr_service import OCRService


def build_config(args) -> OCRConfig:
    """Validate settings merged with CLI overrides."""
    return OCRConfig.from_settings(
        settings,
        provider=args.provider,
        model=args.model,
        api_key=args.api_key,
        debug=args.debug or None
    )


def build_service(args) -> OCRService:
    """Create the OCR service from settings and CLI overrides."""
    return OCRService(build_config(args))


def parse_region(value: str) -> Region:
    """Parse an 'x,y,width,height' argument."""
    parts = value.split(',')
    if len(parts) != 4:
        raise argparse.ArgumentTypeError(f"Region must be x,y,width,height: {value}")
    try:
        return Region.from_value([float(p) for p in parts])
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def to_jsonable(output):
    """Convert extraction output to something json.dumps accepts."""
    if isinstance(output, OCRResult):
        return output.to_dict()
    if isinstance(output, dict):
        entry = dict(output)
        if isinstance(entry.get('image'), (bytes, bytearray)):
            entry['image'] = f"<{len(entry['image'])} bytes>"
        if isinstance(entry.get('region'), Region):
            entry['region'] = entry['region'].to_dict()
        return entry
    return output


def write_output(data, output_path: str = None):
    """Print or save JSON output."""
    if isinstance(data, list):
        payload = [to_jsonable(item) for item in data]
    else:
        payload = to_jsonable(data)
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output_path:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(text)
        print(f"✓ Output written to: {output_path}")
    else:
        print(text)


async def extract_cli(args):
    """Extract text from one image."""
    async with build_service(args) as service:
        output = await service.extract_text(
            args.image,
            format=args.format,
            include_colors=not args.no_colors,
            custom_prompt=args.prompt,
            timeout=args.timeout
        )
    if isinstance(output, str) and not args.output:
        print(output)
    else:
        write_output(output, args.output)


async def batch_cli(args):
    """Extract text from several images."""
    async with build_service(args) as service:
        outputs = await service.batch_process(
            args.images,
            concurrency=args.concurrency,
            format=args.format,
            include_colors=not args.no_colors,
            timeout=args.timeout
        )
    failed = sum(1 for o in outputs if isinstance(o, dict) and 'error' in o)
    write_output(outputs, args.output)
    print(f"✓ {len(outputs) - failed}/{len(outputs)} images processed", file=sys.stderr)


async def regions_cli(args):
    """Extract text from regions of one image."""
    async with build_service(args) as service:
        outputs = await service.extract_from_regions(
            args.image,
            args.region,
            format=args.format,
            include_colors=not args.no_colors,
            timeout=args.timeout
        )
    write_output(outputs, args.output)


def models_cli(args):
    """List known models for the provider."""
    config = build_config(args)
    print(f"Models for {config.provider}:")
    for name in AVAILABLE_MODELS[config.provider]:
        marker = "*" if name == config.resolved_model else " "
        print(f" {marker} {name}")


async def test_cli(args):
    """Run the pipeline on a generated sample image."""
    async with build_service(args) as service:
        result = await service.test()
    if result['success']:
        print(f"✓ Test passed with {result['provider']}/{result['model']}")
        print(f"  Elements: {result['elements_found']}")
        print(f"  Time: {result['processing_time_ms']} ms")
        print(f"  Text: {result['raw_text']}")
    else:
        print(f"❌ Test failed with {result['provider']}: {result['error']}")
    return result['success']


def add_extraction_args(parser):
    parser.add_argument('--format', type=str, default='json', choices=['json', 'text'], help='Output format')
    parser.add_argument('--no-colors', action='store_true', help='Skip color detection')
    parser.add_argument('--timeout', type=float, default=settings.ocr_timeout, help='Seconds per model attempt')
    parser.add_argument('-o', '--output', type=str, help='Output file path')


def main():
    parser = argparse.ArgumentParser(
        description='Vision-model OCR CLI'
    )
    parser.add_argument('--provider', type=str, default=None, choices=SUPPORTED_PROVIDERS, help='Model provider')
    parser.add_argument('--model', type=str, default=None, help='Model name')
    parser.add_argument('--api-key', type=str, default=None, help='Provider API key')
    parser.add_argument('--debug', action='store_true', help='Log progress messages')
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Extract command
    extract_parser = subparsers.add_parser('extract', help='Extract text from an image')
    extract_parser.add_argument('image', type=str, help='Image path or URL')
    extract_parser.add_argument('--prompt', type=str, default=None, help='Custom prompt')
    add_extraction_args(extract_parser)

    # Batch command
    batch_parser = subparsers.add_parser('batch', help='Extract text from several images')
    batch_parser.add_argument('images', nargs='+', help='Image paths or URLs')
    batch_parser.add_argument('--concurrency', type=int, default=settings.ocr_concurrency, help='Images processed at once')
    add_extraction_args(batch_parser)

    # Regions command
    regions_parser = subparsers.add_parser('regions', help='Extract text from image regions')
    regions_parser.add_argument('image', type=str, help='Image path or URL')
    regions_parser.add_argument('--region', type=parse_region, action='append', required=True,
                                help='Region as x,y,width,height (repeatable)')
    add_extraction_args(regions_parser)

    # Models command
    subparsers.add_parser('models', help='List available models')

    # Test command
    subparsers.add_parser('test', help='Run a self test on a sample image')

    args = parser.parse_args()
    setup_logging(logging.INFO if args.debug else logging.WARNING)

    try:
        if args.command == 'extract':
            asyncio.run(extract_cli(args))
        elif args.command == 'batch':
            asyncio.run(batch_cli(args))
        elif args.command == 'regions':
            asyncio.run(regions_cli(args))
        elif args.command == 'models':
            models_cli(args)
        elif args.command == 'test':
            if not asyncio.run(test_cli(args)):
                sys.exit(1)
        else:
            parser.print_help()
    except (ConfigurationError, OCRExtractionError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
