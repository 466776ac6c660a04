"""OpenAI and OpenAI-compatible completion backend.

Works with the hosted OpenAI API and any OpenAI-compatible endpoint
(HuggingFace Inference, vLLM, etc.) via the openai Python SDK's base_url
parameter.
"""
import logging
from typing import Optional

from openai import AsyncOpenAI, APIError, APITimeoutError

from intake.llm.base import CompletionBackend
from intake.core.errors import ModelBackendError, UpstreamTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"


class OpenAICompatBackend(CompletionBackend):
    """Completion backend using any OpenAI-compatible chat completions API."""

    name = "openai"

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL,
                 endpoint_url: Optional[str] = None, max_tokens: int = 500,
                 timeout: float = 30.0, json_mode: bool = False):
        # Retries are the caller's concern; one request per call
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=endpoint_url,
            timeout=timeout,
            max_retries=0,
        )
        self.model = model or DEFAULT_MODEL
        self.max_tokens = max_tokens
        self.json_mode = json_mode

    async def complete(self, system_prompt: str, user_text: str) -> Optional[str]:
        kwargs = {}
        if self.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_text},
                ],
                max_tokens=self.max_tokens,
                **kwargs,
            )
        except APITimeoutError as e:
            logger.error(f"Completion timed out (model={self.model}): {e}")
            raise UpstreamTimeoutError(
                f"Language model request timed out: {e}", stage="extraction", backend=self.name
            ) from e
        except APIError as e:
            logger.error(f"Completion failed (model={self.model}): {e}")
            raise ModelBackendError(
                f"Language model request failed: {e}", backend=self.name
            ) from e

        if not response.choices:
            return None
        return response.choices[0].message.content
