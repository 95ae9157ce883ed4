"""Streaming endpoint for the AI safety consultant."""

from collections.abc import AsyncGenerator, AsyncIterator

from fastapi import APIRouter, Body, Depends
from fastapi.responses import StreamingResponse

from app.api.deps import get_pipeline
from app.core.errors import GenerationError
from app.core.logging import get_logger
from app.graphs.document_pipeline_graph import DocumentPipeline

logger = get_logger(__name__)

router = APIRouter()


@router.post("/safety-consultant/stream")
async def stream_safety_advice(
    query: str | None = Body(None, embed=True),
    pipeline: DocumentPipeline = Depends(get_pipeline),
) -> StreamingResponse:
    """
    Stream consultant advice as plain text fragments.

    The first fragment is awaited before the response starts, so a
    service that fails up front returns 502 instead of an empty 200.

    Raises:
        SchemaViolation: 422 if the query is missing or blank
        GenerationError: 502 if the service fails before the first fragment
    """
    stream = pipeline.stream_advice(query)
    try:
        first = await anext(stream)
    except StopAsyncIteration:
        first = ""

    async def generate(rest: AsyncIterator[str]) -> AsyncGenerator[str, None]:
        if first:
            yield first
        try:
            async for chunk in rest:
                yield chunk
        except GenerationError as e:
            # Headers are already sent; end the stream early
            logger.error(f"Safety consultant stream failed: {e}")

    return StreamingResponse(
        generate(stream),
        media_type="text/plain; charset=utf-8",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )
