"""API endpoints for the document generation flows."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_pipeline
from app.chains.flows import FLOWS, get_flow
from app.core.logging import get_logger
from app.core.schema_validation import get_schema, output_json_schema
from app.graphs.document_pipeline_graph import DocumentPipeline

logger = get_logger(__name__)

router = APIRouter()


@router.get("/flows")
async def list_flows() -> list[dict[str, Any]]:
    """List registered flows with their schema names and output fields."""
    return [
        {
            "name": flow.name,
            "description": flow.description,
            "input_schema": flow.input_schema,
            "output_schema": flow.output_schema,
            "output_fields": flow.output_fields,
        }
        for flow in FLOWS.values()
    ]


@router.get("/flows/{flow_name}/schema")
async def get_flow_schema(flow_name: str) -> dict[str, Any]:
    """
    Get the JSON schemas a flow accepts and returns.

    Raises:
        UnknownFlowError: 404 if the flow is not registered
    """
    flow = get_flow(flow_name)
    return {
        "name": flow.name,
        "input": get_schema(flow.input_schema).model_json_schema(by_alias=True),
        "output": output_json_schema(flow.output_schema),
    }


@router.post("/flows/{flow_name}")
async def run_flow(
    flow_name: str,
    raw_input: Any = Body(..., description="Flow input object (camelCase fields)"),
    pipeline: DocumentPipeline = Depends(get_pipeline),
) -> JSONResponse:
    """
    Run a flow and return its validated output.

    Args:
        flow_name: Registered flow name (e.g. "hira", "method_statement")
        raw_input: Caller input, validated against the flow's input schema

    Returns:
        The output object, e.g. {"hiraDocument": "..."}

    Raises:
        SchemaViolation: 422 on invalid input
        GenerationError: 502 when the completion service fails
        OutputSchemaViolation: 502 when the service answers in the wrong shape
        UnknownFlowError: 404 if the flow is not registered
    """
    result = await pipeline.run(flow_name, raw_input)
    return JSONResponse(content=result.model_dump(by_alias=True, mode="json"), status_code=200)
