"""Cross-check generated documents against the risk ratings computed before the call.

Ratings are computed locally and only interpolated into the prompt, so a
model can still rewrite them. This check looks for every computed
"L - S - **R**" triple in the returned document text.
"""

import logging
from typing import Literal

from app.core.errors import OutputSchemaViolation
from app.core.logging import get_logger, log_with_context
from app.core.schemas_hazards import RatedHazard

logger = get_logger(__name__)

ConsistencyMode = Literal["off", "warn", "enforce"]


def missing_triples(document: str, hazards: list[RatedHazard]) -> list[tuple[int, str, str]]:
    """
    List rating triples absent from a document.

    Returns:
        (hazard index, "initial" | "residual", triple) for each missing triple
    """
    missing = []
    for index, hazard in enumerate(hazards):
        for stage, triple in (
            ("initial", hazard.initial_triple),
            ("residual", hazard.residual_triple),
        ):
            if triple not in document:
                missing.append((index, stage, triple))
    return missing


def check_risk_consistency(
    document: str,
    hazards: list[RatedHazard],
    mode: ConsistencyMode,
    document_field: str,
    schema_name: str | None = None,
    run_id: str | None = None,
) -> list[tuple[int, str, str]]:
    """
    Apply the configured consistency policy to one generated document.

    Raises:
        OutputSchemaViolation: In enforce mode, when any triple is missing
    """
    if mode == "off" or not hazards:
        return []

    missing = missing_triples(document, hazards)
    if not missing:
        return []

    if mode == "enforce":
        index, stage, triple = missing[0]
        raise OutputSchemaViolation(
            field=document_field,
            constraint=f"{stage} risk triple '{triple}' for hazard {index + 1} missing",
            schema_name=schema_name,
        )

    for index, stage, triple in missing:
        context = {"run_id": run_id} if run_id else {}
        log_with_context(
            logger,
            logging.WARNING,
            f"Generated {document_field} is missing {stage} risk triple for hazard {index + 1}",
            hazard_index=index,
            stage=stage,
            triple=triple,
            **context,
        )
    return missing
