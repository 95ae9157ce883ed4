"""Tests for the Anthropic and OpenAI completion services (SDK clients mocked)."""

from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import openai
import pytest

from app.chains.completion_service import (
    AnthropicCompletionService,
    CompletionRequest,
    OpenAICompletionService,
    build_completion_service,
)
from app.core.config import Settings
from app.core.errors import GenerationError, OutputSchemaViolation
from app.core.schemas_consultant import parse_data_uri

_REQUEST = httpx.Request("POST", "https://api.example.com/v1/messages")


def _request(**overrides) -> CompletionRequest:
    kwargs = {
        "prompt": "Build the HIRA",
        "output_schema_name": "hira_output",
        "output_schema": {"type": "object", "properties": {"hiraDocument": {"type": "string"}}},
        "system": "You are a safety officer.",
    }
    kwargs.update(overrides)
    return CompletionRequest(**kwargs)


def _tool_response(data, name="submit_hira_output"):
    block = MagicMock()
    block.type = "tool_use"
    block.name = name
    block.input = data
    response = MagicMock()
    response.content = [block]
    response.stop_reason = "tool_use"
    response.usage.input_tokens = 120
    response.usage.output_tokens = 40
    return response


def _anthropic_service(response=None, error=None) -> AnthropicCompletionService:
    service = AnthropicCompletionService(api_key="test-key", model="claude-test")
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=response, side_effect=error)
    service._client = client
    return service


class TestAnthropicCompletionService:
    @pytest.mark.asyncio
    async def test_forced_tool_call(self):
        service = _anthropic_service(_tool_response({"hiraDocument": "# HIRA"}))

        response = await service.complete(_request())

        assert response.data == {"hiraDocument": "# HIRA"}
        assert response.tokens_input == 120
        assert response.provider == "anthropic"
        kwargs = service._client.messages.create.call_args.kwargs
        assert kwargs["tool_choice"] == {"type": "tool", "name": "submit_hira_output"}
        assert kwargs["tools"][0]["input_schema"]["properties"] == {"hiraDocument": {"type": "string"}}
        assert kwargs["system"] == "You are a safety officer."

    @pytest.mark.asyncio
    async def test_text_fallback_without_tool_block(self):
        block = MagicMock(spec=["type", "text"])
        block.type = "text"
        block.text = '```json\n{"hiraDocument": "# HIRA"}\n```'
        response = _tool_response(None)
        response.content = [block]
        service = _anthropic_service(response)

        result = await service.complete(_request())

        assert result.data == {"hiraDocument": "# HIRA"}

    @pytest.mark.asyncio
    async def test_unparseable_text_is_output_violation(self):
        block = MagicMock(spec=["type", "text"])
        block.type = "text"
        block.text = "Here is your HIRA document!"
        response = _tool_response(None)
        response.content = [block]
        service = _anthropic_service(response)

        with pytest.raises(OutputSchemaViolation):
            await service.complete(_request())

    @pytest.mark.asyncio
    async def test_connection_error_is_retryable_generation_error(self):
        service = _anthropic_service(error=anthropic.APIConnectionError(request=_REQUEST))

        with pytest.raises(GenerationError) as exc_info:
            await service.complete(_request())

        assert exc_info.value.retryable is True
        assert exc_info.value.provider == "anthropic"

    @pytest.mark.asyncio
    async def test_auth_error_is_not_retryable(self):
        error = anthropic.AuthenticationError(
            "invalid x-api-key", response=httpx.Response(401, request=_REQUEST), body=None
        )
        service = _anthropic_service(error=error)

        with pytest.raises(GenerationError) as exc_info:
            await service.complete(_request())

        assert exc_info.value.retryable is False

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        service = AnthropicCompletionService(api_key="", model="claude-test")

        with pytest.raises(GenerationError) as exc_info:
            await service.complete(_request())

        assert exc_info.value.retryable is False

    @pytest.mark.asyncio
    async def test_client_built_without_retries(self):
        service = AnthropicCompletionService(api_key="test-key", model="claude-test", timeout=30.0)

        with patch("anthropic.AsyncAnthropic") as mock_cls:
            mock_cls.return_value.messages.create = AsyncMock(
                return_value=_tool_response({"hiraDocument": "# HIRA"})
            )
            await service.complete(_request())

        mock_cls.assert_called_once_with(api_key="test-key", timeout=30.0, max_retries=0)

    @pytest.mark.asyncio
    async def test_image_sent_as_content_block(self):
        service = _anthropic_service(_tool_response({"hiraDocument": "# HIRA"}))
        image = parse_data_uri("data:image/png;base64,iVBORw0KGgo=")

        await service.complete(_request(media=(image,)))

        content = service._client.messages.create.call_args.kwargs["messages"][0]["content"]
        assert content[0]["type"] == "image"
        assert content[0]["source"]["media_type"] == "image/png"
        assert content[-1] == {"type": "text", "text": "Build the HIRA"}

    @pytest.mark.asyncio
    async def test_stream_yields_text_deltas(self):
        class FakeStream:
            async def __aenter__(self):
                return self

            async def __aexit__(self, *exc):
                return False

            @property
            def text_stream(self):
                async def gen():
                    for text in ["Wear ", "", "a harness."]:
                        yield text

                return gen()

        service = _anthropic_service()
        service._client.messages.stream = MagicMock(return_value=FakeStream())

        chunks = [c async for c in service.stream("Harness?", system="Winston")]

        assert chunks == ["Wear ", "a harness."]


class TestOpenAICompletionService:
    def _service(self, content=None, error=None) -> OpenAICompletionService:
        service = OpenAICompletionService(api_key="test-key", model="gpt-test")
        response = MagicMock()
        response.choices = [MagicMock()]
        response.choices[0].message.content = content
        response.choices[0].finish_reason = "stop"
        response.usage.prompt_tokens = 50
        response.usage.completion_tokens = 20
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=response, side_effect=error)
        service._client = client
        return service

    @pytest.mark.asyncio
    async def test_json_mode_with_fences(self):
        service = self._service('```json\n{"hiraDocument": "# HIRA"}\n```')

        response = await service.complete(_request())

        assert response.data == {"hiraDocument": "# HIRA"}
        kwargs = service._client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][0] == {"role": "system", "content": "You are a safety officer."}

    @pytest.mark.asyncio
    async def test_non_object_json_is_output_violation(self):
        service = self._service('["# HIRA"]')

        with pytest.raises(OutputSchemaViolation):
            await service.complete(_request())

    @pytest.mark.asyncio
    async def test_timeout_is_generation_error(self):
        service = self._service(error=openai.APITimeoutError(request=_REQUEST))

        with pytest.raises(GenerationError) as exc_info:
            await service.complete(_request())

        assert "timed out" in str(exc_info.value)
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_pdf_not_supported(self):
        service = self._service('{"summary": "x"}')
        pdf = parse_data_uri("data:application/pdf;base64,JVBERi0xLjQ=")

        with pytest.raises(GenerationError):
            await service.complete(_request(media=(pdf,)))


def test_build_completion_service_by_provider():
    assert isinstance(
        build_completion_service(Settings(COMPLETION_PROVIDER="anthropic")), AnthropicCompletionService
    )
    assert isinstance(
        build_completion_service(Settings(COMPLETION_PROVIDER="openai")), OpenAICompletionService
    )
