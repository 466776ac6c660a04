"""Gemini-based completion backend."""
import logging
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from intake.llm.base import CompletionBackend
from intake.core.errors import ModelBackendError, UpstreamTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash-lite"


class GeminiBackend(CompletionBackend):
    """Completion backend using Google Gemini."""

    name = "gemini"

    def __init__(self, api_key: str, model_name: str = DEFAULT_MODEL,
                 max_tokens: int = 500, timeout: float = 30.0, json_mode: bool = False):
        """Initialize Gemini API client."""
        genai.configure(api_key=api_key)
        self.model_name = model_name or DEFAULT_MODEL
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.json_mode = json_mode

    def _generation_config(self) -> dict:
        config = {"max_output_tokens": self.max_tokens}
        if self.json_mode:
            config["response_mime_type"] = "application/json"
        return config

    async def complete(self, system_prompt: str, user_text: str) -> Optional[str]:
        model = genai.GenerativeModel(self.model_name, system_instruction=system_prompt)

        try:
            response = await model.generate_content_async(
                user_text,
                generation_config=self._generation_config(),
                request_options={"timeout": self.timeout, "retry": None},
            )
        except google_exceptions.DeadlineExceeded as e:
            logger.error(f"Gemini completion timed out (model={self.model_name}): {e}")
            raise UpstreamTimeoutError(
                f"Language model request timed out: {e}", stage="extraction", backend=self.name
            ) from e
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Gemini completion failed (model={self.model_name}): {e}")
            raise ModelBackendError(
                f"Language model request failed: {e}", backend=self.name
            ) from e

        try:
            return response.text
        except ValueError:
            # No candidate parts (e.g. blocked by safety filters)
            logger.warning(f"Gemini returned no content (model={self.model_name})")
            return None
