"""Tests for the OpenAI-compatible completion backend."""
import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from openai import APIConnectionError, APITimeoutError

from intake.core.errors import ModelBackendError, UpstreamTimeoutError
from intake.llm.openai_compat import OpenAICompatBackend


@pytest.fixture
def backend():
    """Create a backend with mocked client."""
    with patch("intake.llm.openai_compat.AsyncOpenAI"):
        ext = OpenAICompatBackend(
            api_key="test-key",
            model="test-model",
            max_tokens=500,
        )
    return ext


def _mock_completion(content):
    """Build a mock ChatCompletion response."""
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _request():
    return httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


class TestClientSetup:
    def test_no_sdk_retries(self):
        with patch("intake.llm.openai_compat.AsyncOpenAI") as MockClient:
            OpenAICompatBackend(api_key="k", endpoint_url="https://example.com/v1", timeout=12.0)

        MockClient.assert_called_once_with(
            api_key="k", base_url="https://example.com/v1", timeout=12.0, max_retries=0
        )

    def test_default_model(self):
        with patch("intake.llm.openai_compat.AsyncOpenAI"):
            backend = OpenAICompatBackend(api_key="k", model="")
        assert backend.model == "gpt-3.5-turbo"


class TestComplete:
    @pytest.mark.asyncio
    async def test_returns_first_choice_content(self, backend):
        backend.client.chat.completions.create = AsyncMock(
            return_value=_mock_completion('{"title": "Test Event"}')
        )

        content = await backend.complete("system", "event text")
        assert content == '{"title": "Test Event"}'

    @pytest.mark.asyncio
    async def test_sends_system_and_user_turns(self, backend):
        create = AsyncMock(return_value=_mock_completion("{}"))
        backend.client.chat.completions.create = create

        await backend.complete("Extract the event", "Board Game Night")

        create.assert_awaited_once_with(
            model="test-model",
            messages=[
                {"role": "system", "content": "Extract the event"},
                {"role": "user", "content": "Board Game Night"},
            ],
            max_tokens=500,
        )

    @pytest.mark.asyncio
    async def test_json_mode_requests_json_object(self, backend):
        backend.json_mode = True
        create = AsyncMock(return_value=_mock_completion("{}"))
        backend.client.chat.completions.create = create

        await backend.complete("system", "text")
        assert create.call_args.kwargs["response_format"] == {"type": "json_object"}

    @pytest.mark.asyncio
    async def test_null_content(self, backend):
        backend.client.chat.completions.create = AsyncMock(return_value=_mock_completion(None))
        assert await backend.complete("system", "text") is None

    @pytest.mark.asyncio
    async def test_no_choices(self, backend):
        response = MagicMock()
        response.choices = []
        backend.client.chat.completions.create = AsyncMock(return_value=response)
        assert await backend.complete("system", "text") is None

    @pytest.mark.asyncio
    async def test_timeout(self, backend):
        backend.client.chat.completions.create = AsyncMock(
            side_effect=APITimeoutError(request=_request())
        )

        with pytest.raises(UpstreamTimeoutError) as exc_info:
            await backend.complete("system", "text")
        assert exc_info.value.stage == "extraction"
        assert exc_info.value.backend == "openai"

    @pytest.mark.asyncio
    async def test_api_error_called_once(self, backend):
        create = AsyncMock(side_effect=APIConnectionError(request=_request()))
        backend.client.chat.completions.create = create

        with pytest.raises(ModelBackendError):
            await backend.complete("system", "text")
        assert create.await_count == 1
