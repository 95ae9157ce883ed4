"""FastAPI dependencies for the pipeline and its completion service."""

from functools import lru_cache

from fastapi import Depends

from app.chains.completion_service import CompletionService, build_completion_service
from app.core.config import get_settings
from app.graphs.document_pipeline_graph import DocumentPipeline


@lru_cache
def get_completion_service() -> CompletionService:
    """Process-wide completion service built from settings (overridden in tests)."""
    return build_completion_service(get_settings())


@lru_cache
def get_pipeline(
    completion_service: CompletionService = Depends(get_completion_service),
) -> DocumentPipeline:
    """One pipeline per completion service; its compiled graph is reused across requests."""
    return DocumentPipeline(completion_service, settings=get_settings())
