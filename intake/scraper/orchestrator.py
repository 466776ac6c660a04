"""Orchestrates the complete extraction pipeline."""
import io
import logging
from typing import Optional

from PIL import Image
from pydantic import HttpUrl, TypeAdapter, ValidationError

from intake.scraper.browser import Renderer
from intake.ocr.base import TextRecognizer
from intake.llm.base import CompletionBackend
from intake.llm.prompts import SYSTEM_PROMPT
from intake.core.errors import (
    ExtractionError,
    InvalidInputError,
    MalformedModelResponseError,
    NoTextExtractedError,
)
from intake.core.normalize import normalize_event, parse_model_response
from intake.core.schemas import EventCandidate, ExtractionRequest, UploadedImage

logger = logging.getLogger(__name__)

_http_url = TypeAdapter(HttpUrl)


class ExtractionService:
    """Turns a URL or an uploaded image into an EventCandidate.

    The three backends are injected so each can be swapped for another
    provider or a test double. The service keeps no per-request state.
    """

    def __init__(
        self,
        renderer: Renderer,
        recognizer: TextRecognizer,
        completion: CompletionBackend,
        max_image_bytes: int = 10 * 1024 * 1024,
        timezone: Optional[str] = None,
    ):
        self.renderer = renderer
        self.recognizer = recognizer
        self.completion = completion
        self.max_image_bytes = max_image_bytes
        self.timezone = timezone

    def _validate_url(self, url: str) -> str:
        url = url.strip()
        try:
            _http_url.validate_python(url)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid URL: {url}") from e
        return url

    def _validate_image(self, image: UploadedImage) -> None:
        if len(image.data) > self.max_image_bytes:
            raise InvalidInputError(
                f"Image is too large ({len(image.data)} bytes, limit {self.max_image_bytes})"
            )
        try:
            with Image.open(io.BytesIO(image.data)) as img:
                img.verify()
        except Exception as e:
            raise InvalidInputError("Uploaded file is not a readable image") from e

    def validate(self, request: ExtractionRequest) -> None:
        """
        Stage 1: check that exactly one source is supplied and that it is usable.

        Raises:
            InvalidInputError: neither or both sources, bad URL, or bad image
        """
        if request.has_url and request.has_image:
            raise InvalidInputError("Provide either a url or an image, not both")
        if not request.has_url and not request.has_image:
            raise InvalidInputError("Provide a url or an image")

        if request.has_url:
            self._validate_url(request.url)
        else:
            self._validate_image(request.image)

    async def acquire_text(self, request: ExtractionRequest) -> str:
        """
        Stage 2: render the page or run OCR on the image.

        Raises:
            AcquisitionError: the backend failed
            NoTextExtractedError: the source yielded no text
        """
        if request.has_url:
            url = request.url.strip()
            logger.info(f"Processing URL: {url}")
            text = await self.renderer.render(url)
            backend = self.renderer.name
        else:
            image = request.image
            logger.info(
                f"Processing image: {image.filename or '<unnamed>'} "
                f"({image.mime_type}, {len(image.data)} bytes)"
            )
            text = await self.recognizer.recognize_text(image.data)
            backend = self.recognizer.name

        if not text or not text.strip():
            raise NoTextExtractedError("No text extracted", backend=backend)

        logger.info(f"Extracted {len(text)} characters of text via {backend}")
        logger.debug(f"Extracted text: {text}")
        return text

    async def extract_structured(self, raw_text: str) -> str:
        """Stage 3: ask the language model for JSON. Missing content becomes '{}'."""
        content = await self.completion.complete(SYSTEM_PROMPT, raw_text)
        if not content:
            logger.warning(f"{self.completion.name} returned no content, using empty object")
            return "{}"
        return content

    async def process(self, request: ExtractionRequest) -> EventCandidate:
        """
        Execute the complete extraction pipeline.

        Steps:
        1. Validate the request (exactly one of url/image)
        2. Acquire raw text from the page or the image
        3. Send the text to the language model for structured extraction
        4. Parse the response and apply defaults to every field

        Args:
            request: ExtractionRequest with a url or an image

        Returns:
            Fully populated EventCandidate

        Raises:
            ExtractionError: any stage failed; no partial candidate is returned
        """
        try:
            self.validate(request)
            raw_text = await self.acquire_text(request)
            completion_text = await self.extract_structured(raw_text)
            event_data = parse_model_response(completion_text)
        except MalformedModelResponseError as e:
            logger.error(f"[{e.stage}/{e.backend}] {e.message}. Raw response: {e.raw_text[:1000]!r}")
            raise
        except (InvalidInputError, NoTextExtractedError) as e:
            logger.warning(f"[{e.stage}/{e.backend or '-'}] {e.message}")
            raise
        except ExtractionError as e:
            logger.error(f"[{e.stage}/{e.backend or '-'}] {e.message}")
            raise

        event = normalize_event(event_data, timezone=self.timezone)
        logger.info(f"Extracted event '{event.title}' ({event.category}, datetime={event.datetime})")
        return event
