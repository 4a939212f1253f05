"""
Pytest configuration and global fixtures.
"""
import asyncio
import sys
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from llm.llm_client_base import BaseLLMClient
from services.ocr_service import OCRComponents, OCRService


VALID_REPLY = (
    '{"rawText": "Hello World", "elements": ['
    '{"text": "Hello", "coordinates": {"x": 10, "y": 20, "width": 50, "height": 12,'
    ' "centerX": 35, "centerY": 26}, "confidence": 90, "color": "black",'
    ' "backgroundColor": "white", "lineNumber": 1, "wordIndex": 1},'
    '{"text": "World", "coordinates": {"x": 70, "y": 20, "width": 55, "height": 12},'
    ' "confidence": 70}'
    ']}'
)


class FakeLLMClient(BaseLLMClient):
    """In-memory model client recording every call."""

    def __init__(self, reply=VALID_REPLY):
        super().__init__(model="fake-vision-model")
        self.reply = reply
        self.calls = []
        self.fail_agent = False
        self.fail_chat = False
        self.agent_delay = 0.0
        self.chat_delay = 0.0
        self.closed = False

    async def chat_completion(self, prompt, image_data_uri=None, system_prompt=None, **kwargs):
        kind = 'agent' if system_prompt else 'chat'
        self.calls.append({
            'kind': kind,
            'prompt': prompt,
            'system_prompt': system_prompt,
            'image_data_uri': image_data_uri
        })
        delay = self.agent_delay if kind == 'agent' else self.chat_delay
        if delay:
            await asyncio.sleep(delay)
        if kind == 'agent' and self.fail_agent:
            raise RuntimeError("agent unavailable")
        if kind == 'chat' and self.fail_chat:
            raise RuntimeError("chat unavailable")
        if callable(self.reply):
            return self.reply(prompt, image_data_uri)
        return self.reply

    async def close(self):
        self.closed = True


def _png_bytes(width, height, color='white'):
    img = Image.new('RGB', (width, height), color=color)
    draw = ImageDraw.Draw(img)
    draw.rectangle([10, 10, width // 2, height // 2], fill='black')
    buf = BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()


@pytest.fixture
def temp_dir(tmp_path):
    """Provide temporary directory for test files."""
    return tmp_path


@pytest.fixture
def sample_image_bytes():
    """PNG image of 800x600."""
    return _png_bytes(800, 600)


@pytest.fixture
def large_image_bytes():
    """PNG image larger than the default maximum size."""
    return _png_bytes(4000, 1000)


@pytest.fixture
def sample_image_path(temp_dir, sample_image_bytes):
    """Create a sample test image on disk."""
    img_path = temp_dir / "test_image.png"
    img_path.write_bytes(sample_image_bytes)
    return str(img_path)



@pytest.fixture
def fake_client():
    """Fake model client returning a valid two-element reply."""
    return FakeLLMClient()


@pytest.fixture
def make_service(fake_client):
    """Factory building an OCRService around the fake client."""
    def _make(client=None, components=None, **overrides):
        config = {'provider': 'openai', 'api_key': 'test-key'}
        config.update(overrides)
        if components is None:
            components = OCRComponents(llm_client=client or fake_client)
        return OCRService(config, components=components)
    return _make
