"""Completion backend factory: creates the right backend for the configured provider."""
import logging

from intake.llm.base import CompletionBackend
from intake.core.config import Settings

logger = logging.getLogger(__name__)


def create_completion_backend(settings: Settings) -> CompletionBackend:
    """Create a completion backend based on settings.

    Supported providers:
      - "openai": hosted OpenAI chat completions (default)
      - "openai_compatible": Any OpenAI-compatible endpoint (HuggingFace, vLLM, etc.)
      - "gemini": Google Gemini
    """
    provider = settings.llm_provider

    if provider in ("openai", "openai_compatible"):
        from intake.llm.openai_compat import OpenAICompatBackend, DEFAULT_MODEL
        if provider == "openai_compatible" and not settings.llm_endpoint_url:
            raise ValueError("openai_compatible provider requires llm_endpoint_url")
        logger.info(f"Using {provider} completion backend")
        return OpenAICompatBackend(
            api_key=settings.openai_api_key,
            model=settings.llm_model or DEFAULT_MODEL,
            endpoint_url=settings.llm_endpoint_url if provider == "openai_compatible" else None,
            max_tokens=settings.max_output_tokens,
            timeout=settings.llm_timeout,
            json_mode=settings.llm_json_mode,
        )

    if provider == "gemini":
        from intake.llm.gemini import GeminiBackend, DEFAULT_MODEL
        logger.info("Using gemini completion backend")
        return GeminiBackend(
            api_key=settings.gemini_api_key,
            model_name=settings.llm_model or DEFAULT_MODEL,
            max_tokens=settings.max_output_tokens,
            timeout=settings.llm_timeout,
            json_mode=settings.llm_json_mode,
        )

    raise ValueError(f"Unknown LLM provider: {provider!r}. Supported: openai, openai_compatible, gemini")
