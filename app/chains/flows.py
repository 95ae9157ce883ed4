"""Flow registry: one entry per document type served by the generic pipeline.

A flow is configuration, not code: its input and output schema names,
its prompt template and system prompt, and an optional pre-processing
step that derives computed fields (risk ratings, dates, document numbers,
fetched pages) before binding.
"""

import json
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, TypeAdapter, ValidationError

from app.chains.article_scrape_prompts import ARTICLE_SCRAPE_SYSTEM_PROMPT, ARTICLE_SCRAPE_TEMPLATE
from app.chains.hazard_suggestion_prompts import (
    HAZARD_SUGGESTION_SYSTEM_PROMPT,
    HAZARD_SUGGESTION_TEMPLATE,
)
from app.chains.hira_prompts import HIRA_SYSTEM_PROMPT, HIRA_TEMPLATE
from app.chains.media_analysis_prompts import (
    DOCUMENT_ANALYZER_SYSTEM_PROMPT,
    DOCUMENT_ANALYZER_TEMPLATE,
    HAZARD_HUNTER_SYSTEM_PROMPT,
    HAZARD_HUNTER_TEMPLATE,
)
from app.chains.method_statement_prompts import (
    METHOD_STATEMENT_SYSTEM_PROMPT,
    METHOD_STATEMENT_TEMPLATE,
)
from app.chains.risk_assessment_prompts import (
    RISK_ASSESSMENT_SYSTEM_PROMPT,
    RISK_ASSESSMENT_TEMPLATE,
)
from app.chains.safe_work_procedure_prompts import SWP_SYSTEM_PROMPT, SWP_TEMPLATE
from app.chains.safety_consultant_prompts import CONSULTANT_SYSTEM_PROMPT, CONSULTANT_TEMPLATE
from app.chains.she_plan_prompts import SHE_PLAN_SYSTEM_PROMPT, SHE_PLAN_TEMPLATE
from app.core.config import Settings
from app.core.errors import UnknownFlowError
from app.core.logging import get_logger
from app.core.schema_validation import get_schema
from app.core.schemas_articles import FetchedPage
from app.core.schemas_consultant import CoreMemoryEntry, MediaAttachment
from app.core.schemas_hazards import rate_hazards

logger = get_logger(__name__)


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> FetchedPage: ...


@dataclass(frozen=True)
class FlowContext:
    """Per-run collaborators available to pre-processing."""

    today: date
    rng: random.Random
    settings: Settings
    page_fetcher: PageFetcher | None = None
    media: MediaAttachment | None = None


Preprocess = Callable[[BaseModel, FlowContext], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class FlowDefinition:
    """Everything the generic pipeline needs to run one document type."""

    name: str
    template: str
    system_prompt: str
    preprocess: Preprocess | None = None
    media_field: str | None = None
    hazard_document_field: str | None = None
    description: str = ""
    input_schema: str = field(default="")
    output_schema: str = field(default="")

    def __post_init__(self):
        # Schema names default to <flow>_input / <flow>_output
        if not self.input_schema:
            object.__setattr__(self, "input_schema", f"{self.name}_input")
        if not self.output_schema:
            object.__setattr__(self, "output_schema", f"{self.name}_output")

    @property
    def output_fields(self) -> list[str]:
        model = get_schema(self.output_schema)
        return [f.alias or name for name, f in model.model_fields.items()]


def format_long_date(value: date) -> str:
    """Render a date as "Month D, YYYY" (e.g. "March 7, 2025")."""
    return f"{value:%B} {value.day}, {value.year}"


# =======================
# Pre-processing
# =======================


async def rate_hazard_rows(validated: BaseModel, ctx: FlowContext) -> dict[str, Any]:
    """Replace raw hazard rows with rated rows, caller order preserved."""
    return {"hazards": rate_hazards(validated.hazards)}


async def preparation_date(validated: BaseModel, ctx: FlowContext) -> dict[str, Any]:
    return {"preparationDate": format_long_date(ctx.today)}


async def method_statement_control(validated: BaseModel, ctx: FlowContext) -> dict[str, Any]:
    return {
        "documentNumber": f"MS-{ctx.today.year}-{ctx.rng.randint(1000, 9999)}",
        "effectiveDate": format_long_date(ctx.today),
    }


async def safe_work_procedure_control(validated: BaseModel, ctx: FlowContext) -> dict[str, Any]:
    return {
        "documentNumber": f"SWP-{ctx.today.year}-{ctx.rng.randint(100, 999)}",
        "effectiveDate": format_long_date(ctx.today),
    }


async def fetch_article_page(validated: BaseModel, ctx: FlowContext) -> dict[str, Any]:
    """Fetch the article so the prompt carries its text, not just its URL."""
    if ctx.page_fetcher is None:
        raise RuntimeError("article_scrape flow requires a page fetcher")
    page = await ctx.page_fetcher.fetch(str(validated.url))
    return {"page": page}


_core_memory_adapter = TypeAdapter(list[CoreMemoryEntry])


def load_core_memory(path: str) -> list[CoreMemoryEntry]:
    """
    Load the consultant's reference document list.

    A missing or malformed file yields an empty list; the consultant then
    answers from general knowledge.
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        return _core_memory_adapter.validate_python(raw)
    except FileNotFoundError:
        logger.info(f"No core memory file at {path}")
        return []
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Could not load core memory from {path}: {type(e).__name__}")
        return []


async def consultant_memory(validated: BaseModel, ctx: FlowContext) -> dict[str, Any]:
    return {"coreMemoryDocs": load_core_memory(ctx.settings.CORE_MEMORY_PATH)}


async def describe_document(validated: BaseModel, ctx: FlowContext) -> dict[str, Any]:
    media = ctx.media
    computed: dict[str, Any] = {"mediaType": media.media_type if media else None}
    computed["documentText"] = (
        media.decoded_text() if media and media.media_type == "text/plain" else None
    )
    return computed


# =======================
# Registry
# =======================

FLOWS: dict[str, FlowDefinition] = {
    flow.name: flow
    for flow in (
        FlowDefinition(
            name="hira",
            template=HIRA_TEMPLATE,
            system_prompt=HIRA_SYSTEM_PROMPT,
            preprocess=rate_hazard_rows,
            hazard_document_field="hira_document",
            description="Hazard Identification and Risk Assessment document",
        ),
        FlowDefinition(
            name="risk_assessment",
            template=RISK_ASSESSMENT_TEMPLATE,
            system_prompt=RISK_ASSESSMENT_SYSTEM_PROMPT,
            preprocess=rate_hazard_rows,
            hazard_document_field="risk_assessment_document",
            description="Site risk assessment with a 0-5 risk matrix",
        ),
        FlowDefinition(
            name="she_plan",
            template=SHE_PLAN_TEMPLATE,
            system_prompt=SHE_PLAN_SYSTEM_PROMPT,
            preprocess=preparation_date,
            description="Site Safety, Health and Environment plan",
        ),
        FlowDefinition(
            name="method_statement",
            template=METHOD_STATEMENT_TEMPLATE,
            system_prompt=METHOD_STATEMENT_SYSTEM_PROMPT,
            preprocess=method_statement_control,
            description="OSHA-adherent method statement",
        ),
        FlowDefinition(
            name="safe_work_procedure",
            template=SWP_TEMPLATE,
            system_prompt=SWP_SYSTEM_PROMPT,
            preprocess=safe_work_procedure_control,
            description="Safe work procedure (SWP)",
        ),
        FlowDefinition(
            name="hazard_suggestions",
            template=HAZARD_SUGGESTION_TEMPLATE,
            system_prompt=HAZARD_SUGGESTION_SYSTEM_PROMPT,
            description="Up to five suggested hazards for a task",
        ),
        FlowDefinition(
            name="article_scrape",
            template=ARTICLE_SCRAPE_TEMPLATE,
            system_prompt=ARTICLE_SCRAPE_SYSTEM_PROMPT,
            preprocess=fetch_article_page,
            description="Safety news article extraction",
        ),
        FlowDefinition(
            name="safety_consultant",
            template=CONSULTANT_TEMPLATE,
            system_prompt=CONSULTANT_SYSTEM_PROMPT,
            preprocess=consultant_memory,
            description="Safety advice for a free-text query",
        ),
        FlowDefinition(
            name="hazard_hunter",
            template=HAZARD_HUNTER_TEMPLATE,
            system_prompt=HAZARD_HUNTER_SYSTEM_PROMPT,
            media_field="photo_data_uri",
            description="Hazards spotted in a worksite photo",
        ),
        FlowDefinition(
            name="document_analyzer",
            template=DOCUMENT_ANALYZER_TEMPLATE,
            system_prompt=DOCUMENT_ANALYZER_SYSTEM_PROMPT,
            preprocess=describe_document,
            media_field="document_data_uri",
            description="Summary of an uploaded reference document",
        ),
    )
}


def get_flow(name: str) -> FlowDefinition:
    """Look up a registered flow by name."""
    try:
        return FLOWS[name]
    except KeyError:
        raise UnknownFlowError(f"Unknown flow: {name}") from None
