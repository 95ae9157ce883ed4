"""Completion service boundary: prompt + output schema in, structured data out.

The document flows only see the CompletionService protocol. Concrete
services wrap the Anthropic and OpenAI SDKs and translate every SDK
failure into GenerationError so callers can tell "the service failed"
apart from "the service answered in the wrong shape".

No retries happen here: SDK clients are built with max_retries=0 and any
error is surfaced to the caller.
"""

import json
import time
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any, Protocol

from app.core.config import Settings
from app.core.errors import GenerationError, OutputSchemaViolation
from app.core.llm import parse_llm_json_dict
from app.core.logging import get_logger
from app.core.schemas_consultant import MediaAttachment

logger = get_logger(__name__)


@dataclass(frozen=True)
class CompletionRequest:
    """Everything one structured completion call needs."""

    prompt: str
    output_schema_name: str
    output_schema: dict[str, Any]
    system: str | None = None
    media: tuple[MediaAttachment, ...] = ()
    model: str | None = None
    max_tokens: int | None = None


@dataclass
class CompletionResponse:
    """Raw structured output plus call metadata."""

    data: Any
    provider: str
    model: str
    tokens_input: int = 0
    tokens_output: int = 0
    duration_ms: int = 0
    stop_reason: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class CompletionService(Protocol):
    """External text-completion boundary used by every flow."""

    provider: str

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Return output shaped to ``request.output_schema``."""
        ...

    def stream(
        self, prompt: str, system: str | None = None, model: str | None = None
    ) -> AsyncIterator[str]:
        """Yield raw text fragments in order until the answer is complete."""
        ...


def _tool_name(schema_name: str) -> str:
    return f"submit_{schema_name}"


# =============================================================================
# Anthropic
# =============================================================================


class AnthropicCompletionService:
    """Completion service backed by the Anthropic Messages API.

    Structured output uses a forced tool call whose input_schema is the
    flow's output JSON schema.
    """

    provider = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str,
        max_tokens: int = 8000,
        temperature: float = 0.2,
        timeout: float | None = None,
        stream_model: str | None = None,
        stream_max_tokens: int = 2048,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.stream_model = stream_model or model
        self.stream_max_tokens = stream_max_tokens
        self._api_key = api_key
        self._timeout = timeout
        self._client = None

    def _get_client(self):
        if not self._api_key:
            raise GenerationError(
                "ANTHROPIC_API_KEY not configured", provider=self.provider, retryable=False
            )
        if self._client is None:
            from anthropic import AsyncAnthropic

            self._client = AsyncAnthropic(
                api_key=self._api_key, timeout=self._timeout, max_retries=0
            )
        return self._client

    def _content(self, prompt: str, media: tuple[MediaAttachment, ...]) -> list[dict[str, Any]]:
        blocks: list[dict[str, Any]] = []
        for attachment in media:
            source = {
                "type": "base64",
                "media_type": attachment.media_type,
                "data": attachment.data,
            }
            if attachment.media_type.startswith("image/"):
                blocks.append({"type": "image", "source": source})
            elif attachment.media_type == "application/pdf":
                blocks.append({"type": "document", "source": source})
            # text/plain attachments are inlined into the prompt by the flow
        blocks.append({"type": "text", "text": prompt})
        return blocks

    def _wrap_error(self, e: Exception) -> GenerationError:
        import anthropic

        retryable = not isinstance(
            e,
            (
                anthropic.AuthenticationError,
                anthropic.PermissionDeniedError,
                anthropic.BadRequestError,
                anthropic.NotFoundError,
            ),
        )
        kind = "timed out" if isinstance(e, anthropic.APITimeoutError) else "failed"
        return GenerationError(
            f"Anthropic completion {kind}: {type(e).__name__}",
            provider=self.provider,
            retryable=retryable,
        )

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        import anthropic

        client = self._get_client()
        model = request.model or self.model
        tool_name = _tool_name(request.output_schema_name)

        kwargs: dict[str, Any] = {
            "model": model,
            "max_tokens": request.max_tokens or self.max_tokens,
            "temperature": self.temperature,
            "messages": [{"role": "user", "content": self._content(request.prompt, request.media)}],
            "tools": [
                {
                    "name": tool_name,
                    "description": f"Submit the result as {request.output_schema_name}.",
                    "input_schema": request.output_schema,
                }
            ],
            "tool_choice": {"type": "tool", "name": tool_name},
        }
        if request.system:
            kwargs["system"] = request.system

        start = time.time()
        try:
            response = await client.messages.create(**kwargs)
        except anthropic.APIError as e:
            raise self._wrap_error(e) from e
        duration_ms = int((time.time() - start) * 1000)

        if response.stop_reason == "max_tokens":
            logger.warning(f"Completion for {request.output_schema_name} hit max_tokens")

        data: Any = None
        for block in response.content:
            if getattr(block, "type", None) == "tool_use" and block.name == tool_name:
                data = block.input
                if isinstance(data, str):
                    # Anthropic string bug guard
                    data = _parse_text_output(data, request.output_schema_name)
                break
        else:
            # Fallback: parse text if no tool_use block (shouldn't happen)
            logger.warning("No tool_use block in completion response, falling back to text")
            text = "".join(getattr(b, "text", "") for b in response.content)
            data = _parse_text_output(text, request.output_schema_name)

        usage = response.usage
        return CompletionResponse(
            data=data,
            provider=self.provider,
            model=model,
            tokens_input=getattr(usage, "input_tokens", 0) or 0,
            tokens_output=getattr(usage, "output_tokens", 0) or 0,
            duration_ms=duration_ms,
            stop_reason=response.stop_reason,
        )

    async def stream(
        self, prompt: str, system: str | None = None, model: str | None = None
    ) -> AsyncIterator[str]:
        import anthropic

        client = self._get_client()
        kwargs: dict[str, Any] = {
            "model": model or self.stream_model,
            "max_tokens": self.stream_max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system

        try:
            async with client.messages.stream(**kwargs) as stream:
                async for text in stream.text_stream:
                    if text:
                        yield text
        except anthropic.APIError as e:
            raise self._wrap_error(e) from e


# =============================================================================
# OpenAI
# =============================================================================


class OpenAICompletionService:
    """Completion service backed by OpenAI chat completions in JSON mode."""

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        model: str,
        max_tokens: int = 8000,
        temperature: float = 0.2,
        timeout: float | None = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._api_key = api_key
        self._timeout = timeout
        self._client = None

    def _get_client(self):
        if not self._api_key:
            raise GenerationError(
                "OPENAI_API_KEY not configured", provider=self.provider, retryable=False
            )
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(api_key=self._api_key, timeout=self._timeout, max_retries=0)
        return self._client

    def _wrap_error(self, e: Exception) -> GenerationError:
        import openai

        retryable = not isinstance(
            e,
            (
                openai.AuthenticationError,
                openai.PermissionDeniedError,
                openai.BadRequestError,
                openai.NotFoundError,
            ),
        )
        kind = "timed out" if isinstance(e, openai.APITimeoutError) else "failed"
        return GenerationError(
            f"OpenAI completion {kind}: {type(e).__name__}",
            provider=self.provider,
            retryable=retryable,
        )

    def _user_content(self, request: CompletionRequest) -> str | list[dict[str, Any]]:
        schema_text = json.dumps(request.output_schema, indent=2)
        text = (
            f"{request.prompt}\n\n"
            "Respond with ONLY a JSON object matching this JSON schema, no markdown:\n"
            f"{schema_text}"
        )
        images = [m for m in request.media if m.media_type.startswith("image/")]
        if not images:
            return text
        parts: list[dict[str, Any]] = [
            {"type": "image_url", "image_url": {"url": f"data:{m.media_type};base64,{m.data}"}}
            for m in images
        ]
        parts.append({"type": "text", "text": text})
        return parts

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        import openai

        if any(m.media_type == "application/pdf" for m in request.media):
            raise GenerationError(
                "PDF attachments are not supported by the openai provider",
                provider=self.provider,
                retryable=False,
            )

        client = self._get_client()
        model = request.model or self.model
        messages: list[dict[str, Any]] = []
        if request.system:
            messages.append({"role": "system", "content": request.system})
        messages.append({"role": "user", "content": self._user_content(request)})

        start = time.time()
        try:
            response = await client.chat.completions.create(
                model=model,
                temperature=self.temperature,
                max_tokens=request.max_tokens or self.max_tokens,
                response_format={"type": "json_object"},
                messages=messages,
            )
        except openai.APIError as e:
            raise self._wrap_error(e) from e
        duration_ms = int((time.time() - start) * 1000)

        choice = response.choices[0]
        raw_output = choice.message.content or ""
        usage = response.usage
        return CompletionResponse(
            data=_parse_text_output(raw_output, request.output_schema_name),
            provider=self.provider,
            model=model,
            tokens_input=getattr(usage, "prompt_tokens", 0) or 0,
            tokens_output=getattr(usage, "completion_tokens", 0) or 0,
            duration_ms=duration_ms,
            stop_reason=choice.finish_reason,
        )

    async def stream(
        self, prompt: str, system: str | None = None, model: str | None = None
    ) -> AsyncIterator[str]:
        import openai

        client = self._get_client()
        messages: list[dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await client.chat.completions.create(
                model=model or self.model,
                temperature=self.temperature,
                messages=messages,
                stream=True,
            )
            async for chunk in response:
                if not chunk.choices:
                    continue
                text = chunk.choices[0].delta.content
                if text:
                    yield text
        except openai.APIError as e:
            raise self._wrap_error(e) from e


def _parse_text_output(raw_output: str, schema_name: str) -> dict[str, Any]:
    """Parse a text answer as a JSON object, or report the shape problem."""
    try:
        return parse_llm_json_dict(raw_output)
    except (json.JSONDecodeError, ValueError) as e:
        # Do NOT leak raw model output in the exception
        raise OutputSchemaViolation(
            field="$",
            constraint=f"response was not a JSON object ({type(e).__name__})",
            schema_name=schema_name,
        ) from e


def build_completion_service(settings: Settings) -> CompletionService:
    """Construct the configured completion service."""
    if settings.COMPLETION_PROVIDER == "openai":
        return OpenAICompletionService(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_GENERATION_MODEL,
            max_tokens=settings.GENERATION_MAX_TOKENS,
            temperature=settings.GENERATION_TEMPERATURE,
            timeout=settings.GENERATION_TIMEOUT_SECONDS,
        )
    return AnthropicCompletionService(
        api_key=settings.ANTHROPIC_API_KEY,
        model=settings.GENERATION_MODEL,
        max_tokens=settings.GENERATION_MAX_TOKENS,
        temperature=settings.GENERATION_TEMPERATURE,
        timeout=settings.GENERATION_TIMEOUT_SECONDS,
        stream_model=settings.CONSULTANT_MODEL,
        stream_max_tokens=settings.CONSULTANT_MAX_TOKENS,
    )
