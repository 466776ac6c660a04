"""Test fixtures for intake tests."""
import io
import os
from typing import List, Optional

import pytest
from PIL import Image


# Ensure test env vars are set before Settings is imported
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("GOOGLE_CLOUD_PROJECT_ID", "test-project")
os.environ.setdefault("GOOGLE_CLOUD_PRIVATE_KEY", "test-private-key")
os.environ.setdefault("GOOGLE_CLOUD_CLIENT_EMAIL", "ocr@test-project.iam.gserviceaccount.com")

from intake.llm.base import CompletionBackend  # noqa: E402
from intake.ocr.base import TextRecognizer  # noqa: E402
from intake.scraper.browser import Renderer  # noqa: E402
from intake.scraper.orchestrator import ExtractionService  # noqa: E402
from intake.core.schemas import UploadedImage  # noqa: E402


class FakeRenderer(Renderer):
    """Renderer returning canned page text and recording calls."""

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[str] = []

    async def render(self, url: str) -> str:
        self.calls.append(url)
        if self.error:
            raise self.error
        return self.text


class FakeRecognizer(TextRecognizer):
    """OCR backend returning canned text and recording calls."""

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[bytes] = []

    async def recognize_text(self, data: bytes) -> str:
        self.calls.append(data)
        if self.error:
            raise self.error
        return self.text


class FakeCompletion(CompletionBackend):
    """Completion backend returning a canned response and recording calls."""

    def __init__(self, content: Optional[str] = "{}", error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls: List[tuple] = []

    async def complete(self, system_prompt: str, user_text: str) -> Optional[str]:
        self.calls.append((system_prompt, user_text))
        if self.error:
            raise self.error
        return self.content


def make_png(width: int = 4, height: int = 4) -> bytes:
    """Encode a tiny solid-colour PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def flyer(png_bytes):
    """An uploaded flyer image."""
    return UploadedImage(data=png_bytes, mime_type="image/png", filename="flyer.png")


@pytest.fixture
def sample_page_text():
    return (
        "Board Game Night\n"
        "Friday, March 15, 2026 at 7pm\n"
        "The Game Parlour, 123 Main St, San Francisco\n"
        "Bring your favourite games. Snacks provided."
    )


@pytest.fixture
def full_model_response():
    """A well-formed completion with every field present and valid."""
    return (
        '{"title": "Board Game Night", '
        '"datetime": "2026-03-16T02:00:00.000Z", '
        '"location": {"name": "The Game Parlour"}, '
        '"description": "Bring your favourite games.", '
        '"category": "entertainment"}'
    )


@pytest.fixture
def renderer(sample_page_text):
    return FakeRenderer(text=sample_page_text)


@pytest.fixture
def recognizer(sample_page_text):
    return FakeRecognizer(text=sample_page_text)


@pytest.fixture
def completion(full_model_response):
    return FakeCompletion(content=full_model_response)


@pytest.fixture
def service(renderer, recognizer, completion):
    """An ExtractionService wired to test doubles."""
    return ExtractionService(
        renderer=renderer,
        recognizer=recognizer,
        completion=completion,
        timezone="America/Los_Angeles",
    )
