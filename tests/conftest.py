"""
Shared fixtures: fake Gemini client and responses, dispatcher wiring.
"""
import os

# Must be set before adcraft_engine.config is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["GENERATE_RATE_LIMIT"] = "1000/minute"

import base64
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from adcraft_engine.models import GenerationInputs
from adcraft_engine.services.gemini_content_generator import GeminiContentGenerator
from adcraft_engine.services.generation_dispatcher import GenerationDispatcher


PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-bytes"
PNG_B64 = base64.b64encode(PNG_BYTES).decode("ascii")
PNG_DATA_URI = f"data:image/png;base64,{PNG_B64}"

BRAND_INPUTS = {
    "businessName": "Acme",
    "niche": "Coffee",
    "audience": "Commuters",
    "tone": "Bold",
    "offerDetails": "Cold brew subscription",
}

LANDING_PAGE_OUTPUT = {
    "heroHeadline": "Cold brew that keeps up with you",
    "problemDescription": "Cafe lines eat your mornings.",
    "solutionDescription": "Fresh cold brew delivered weekly.",
    "ctaText": "Start my subscription",
}

SALES_PAGE_OUTPUT = {
    "headline": "Never wait for coffee again",
    "subheadline": "Cold brew at your door every Monday",
    "storySection": "We started Acme after one too many missed trains.",
    "benefits": ["Skip the queue", "Roasted weekly"],
    "faq": [{"question": "Can I pause?", "answer": "Anytime."}],
    "cta": "Join Acme",
}

GENERIC_OUTPUT = {
    "headline": "Commute fuel",
    "content": "Bold cold brew for people on the move.",
    "cta": "Order now",
}


def text_response(text):
    """Gemini text response stand-in"""
    return SimpleNamespace(text=text, candidates=[])


def image_part(data=PNG_BYTES):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type="image/png"), text=None)


def text_part(text):
    return SimpleNamespace(inline_data=None, text=text)


def image_response(*parts):
    """Gemini multimodal response stand-in"""
    content = SimpleNamespace(parts=list(parts))
    return SimpleNamespace(text=None, candidates=[SimpleNamespace(content=content)])


def make_client(*responses):
    """Fake genai client whose aio.models.generate_content returns the given responses in order"""
    client = MagicMock()
    if len(responses) == 1:
        client.aio.models.generate_content = AsyncMock(return_value=responses[0])
    else:
        client.aio.models.generate_content = AsyncMock(side_effect=list(responses))
    return client


def json_response(payload):
    return text_response(json.dumps(payload))


@pytest.fixture
def brand_inputs():
    return GenerationInputs(**BRAND_INPUTS)


@pytest.fixture
def fake_client():
    return make_client(json_response(GENERIC_OUTPUT))


@pytest.fixture
def dispatcher_for():
    """Build a dispatcher around a fake client"""
    def _build(client):
        return GenerationDispatcher(generator=GeminiContentGenerator(client=client))
    return _build
