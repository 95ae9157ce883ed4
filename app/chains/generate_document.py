"""Send a bound prompt to the completion service and ask for a named output shape."""

from typing import Any

from app.chains.completion_service import CompletionRequest, CompletionService
from app.core.llm_usage import log_llm_usage
from app.core.logging import get_logger
from app.core.schema_validation import output_json_schema
from app.core.schemas_consultant import MediaAttachment

logger = get_logger(__name__)


async def invoke(
    service: CompletionService,
    prompt: str,
    output_schema_name: str,
    system: str | None = None,
    media: tuple[MediaAttachment, ...] = (),
    flow: str | None = None,
    run_id: str | None = None,
) -> Any:
    """
    Request structured output for a prompt.

    Args:
        service: Completion service to call
        prompt: Bound prompt text
        output_schema_name: Registered output schema the answer must match
        system: Optional system prompt
        media: Attachments sent alongside the prompt
        flow: Flow name for usage logging
        run_id: Pipeline run id for usage logging

    Returns:
        Raw (unvalidated) model output

    Raises:
        GenerationError: If the service is unreachable, errors or times out
        OutputSchemaViolation: If the service answer is not a JSON object
    """
    request = CompletionRequest(
        prompt=prompt,
        output_schema_name=output_schema_name,
        output_schema=output_json_schema(output_schema_name),
        system=system,
        media=media,
    )

    response = await service.complete(request)

    log_llm_usage(
        flow=flow or output_schema_name,
        model=response.model,
        provider=response.provider,
        tokens_input=response.tokens_input,
        tokens_output=response.tokens_output,
        duration_ms=response.duration_ms,
        run_id=run_id,
    )
    return response.data
