"""FastAPI application entry point."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api import router as api_router
from app.core.errors import (
    BindingError,
    GenerationError,
    OutputSchemaViolation,
    PipelineError,
    SchemaViolation,
    UnknownFlowError,
)
from app.core.logging import get_logger

logger = get_logger(__name__)

app = FastAPI(
    title="Safety Docs Engine",
    description="LangGraph-based safety document generation service",
    version="0.1.0",
)

# PipelineError kind -> HTTP status
_STATUS_BY_ERROR: dict[type[PipelineError], int] = {
    SchemaViolation: 422,
    BindingError: 500,
    GenerationError: 502,
    OutputSchemaViolation: 502,
}


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    """Map pipeline failures to distinct status codes and error kinds."""
    status_code = next(
        (code for cls, code in _STATUS_BY_ERROR.items() if isinstance(exc, cls)), 500
    )
    if isinstance(exc, BindingError):
        logger.error(f"Template binding failed for {request.url.path}: {exc}")
    return JSONResponse(content=exc.to_dict(), status_code=status_code)


@app.exception_handler(UnknownFlowError)
async def unknown_flow_handler(request: Request, exc: UnknownFlowError) -> JSONResponse:
    return JSONResponse(content={"error": "unknown_flow", "detail": str(exc)}, status_code=404)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "ok"}, status_code=200)


# Include v1 API router
app.include_router(api_router, prefix="/v1", tags=["v1"])
