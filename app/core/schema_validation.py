"""Named schema registry plus the input and output validation gates.

Both gates are pure: they either return a validated pydantic model or
raise the matching PipelineError. Nothing is partially accepted.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from app.core.errors import OutputSchemaViolation, SchemaViolation, UnknownFlowError
from app.core.schemas_articles import ScrapeArticleInput, ScrapeArticleOutput
from app.core.schemas_consultant import (
    AnalyzeDocumentInput,
    AnalyzeDocumentOutput,
    HazardHunterInput,
    HazardHunterOutput,
    SafetyConsultantInput,
    SafetyConsultantOutput,
)
from app.core.schemas_documents import (
    HiraInput,
    HiraOutput,
    MethodStatementInput,
    MethodStatementOutput,
    RiskAssessmentInput,
    RiskAssessmentOutput,
    SafeWorkProcedureInput,
    SafeWorkProcedureOutput,
    ShePlanInput,
    ShePlanOutput,
)
from app.core.schemas_hazards import SuggestHazardsInput, SuggestHazardsOutput

SCHEMAS: dict[str, type[BaseModel]] = {
    "hira_input": HiraInput,
    "hira_output": HiraOutput,
    "risk_assessment_input": RiskAssessmentInput,
    "risk_assessment_output": RiskAssessmentOutput,
    "she_plan_input": ShePlanInput,
    "she_plan_output": ShePlanOutput,
    "method_statement_input": MethodStatementInput,
    "method_statement_output": MethodStatementOutput,
    "safe_work_procedure_input": SafeWorkProcedureInput,
    "safe_work_procedure_output": SafeWorkProcedureOutput,
    "hazard_suggestions_input": SuggestHazardsInput,
    "hazard_suggestions_output": SuggestHazardsOutput,
    "article_scrape_input": ScrapeArticleInput,
    "article_scrape_output": ScrapeArticleOutput,
    "safety_consultant_input": SafetyConsultantInput,
    "safety_consultant_output": SafetyConsultantOutput,
    "hazard_hunter_input": HazardHunterInput,
    "hazard_hunter_output": HazardHunterOutput,
    "document_analyzer_input": AnalyzeDocumentInput,
    "document_analyzer_output": AnalyzeDocumentOutput,
}


def get_schema(schema_name: str) -> type[BaseModel]:
    """Look up a registered schema by name."""
    try:
        return SCHEMAS[schema_name]
    except KeyError:
        raise UnknownFlowError(f"Unknown schema: {schema_name}") from None


def format_loc(loc: tuple[Any, ...]) -> str:
    """Render a pydantic error location as a dotted field path (``hazards.0.hazard``)."""
    return ".".join(str(part) for part in loc) or "$"


def _violations(error: ValidationError) -> list[dict[str, str]]:
    return [
        {"field": format_loc(err["loc"]), "constraint": err["msg"], "type": err["type"]}
        for err in error.errors(include_url=False)
    ]


def validate_input(schema_name: str, raw_input: Any) -> BaseModel:
    """
    Validate caller input against a named input schema.

    Args:
        schema_name: Registered schema name (e.g. "hira_input")
        raw_input: JSON-shaped object supplied by the caller

    Returns:
        Validated model instance

    Raises:
        SchemaViolation: On the first structural problem (all problems listed in .violations)
        UnknownFlowError: If the schema name is not registered
    """
    model = get_schema(schema_name)

    if not isinstance(raw_input, Mapping):
        raise SchemaViolation(
            field="$",
            constraint=f"input must be an object, got {type(raw_input).__name__}",
            schema_name=schema_name,
        )

    try:
        return model.model_validate(raw_input)
    except ValidationError as e:
        violations = _violations(e)
        first = violations[0]
        raise SchemaViolation(
            field=first["field"],
            constraint=first["constraint"],
            schema_name=schema_name,
            violations=violations,
        ) from e


def validate_output(raw_output: Any, schema_name: str) -> BaseModel:
    """
    Validate a completion service response against a named output schema.

    Args:
        raw_output: Parsed object returned by the completion service
        schema_name: Registered schema name (e.g. "hira_output")

    Returns:
        Validated output model (the generation result)

    Raises:
        OutputSchemaViolation: If a declared field is missing, empty or of the wrong type
    """
    model = get_schema(schema_name)

    if not isinstance(raw_output, Mapping):
        raise OutputSchemaViolation(
            field="$",
            constraint=f"expected an object, got {type(raw_output).__name__}",
            schema_name=schema_name,
        )

    try:
        return model.model_validate(raw_output)
    except ValidationError as e:
        first = _violations(e)[0]
        raise OutputSchemaViolation(
            field=first["field"],
            constraint=first["constraint"],
            schema_name=schema_name,
        ) from e


def output_json_schema(schema_name: str) -> dict[str, Any]:
    """JSON schema (camelCase) declared to the completion service for an output."""
    return get_schema(schema_name).model_json_schema(by_alias=True)
