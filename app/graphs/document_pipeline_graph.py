"""LangGraph orchestrator shared by every document generation flow.

validate -> (compute) -> bind -> invoke -> validate_output

Each stage either returns a typed result or raises its PipelineError kind;
errors are logged with the run id and re-raised unchanged. There are no
retries between stages.
"""

import random
import time
import uuid
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from langgraph.graph import END, StateGraph
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from app.chains.completion_service import CompletionService
from app.chains.flows import FlowContext, FlowDefinition, PageFetcher, get_flow
from app.chains.generate_document import invoke
from app.chains.safety_consultant_prompts import CONSULTANT_SYSTEM_PROMPT, STREAMING_TEMPLATE
from app.core.config import Settings, get_settings
from app.core.errors import PipelineError, SchemaViolation
from app.core.logging import get_logger
from app.core.risk_consistency import check_risk_consistency
from app.core.schema_validation import validate_input, validate_output
from app.core.schemas_consultant import MediaAttachment, parse_data_uri
from app.core.template_binding import bind

logger = get_logger(__name__)


@dataclass
class DocumentPipelineState:
    """State for one pipeline run."""

    # Input fields
    flow_name: str
    run_id: str
    raw_input: Any = None

    # Processing state
    validated_input: BaseModel | None = None
    computed_fields: dict[str, Any] = field(default_factory=dict)
    media: MediaAttachment | None = None
    prompt: str | None = None
    raw_output: Any = None

    # Output
    result: BaseModel | None = None


class DocumentPipeline:
    """
    Generic generation pipeline parameterised by the flow registry.

    The instance holds only injected collaborators and read-only
    configuration; every run gets its own state object, so concurrent
    runs share nothing mutable.
    """

    def __init__(
        self,
        completion_service: CompletionService,
        clock: Callable[[], date] | None = None,
        rng: random.Random | None = None,
        page_fetcher: PageFetcher | None = None,
        settings: Settings | None = None,
    ):
        self.completion_service = completion_service
        self.clock = clock or date.today
        self.rng = rng or random.Random()
        self.settings = settings or get_settings()
        if page_fetcher is None:
            from app.core.article_fetcher import ArticleFetcher

            page_fetcher = ArticleFetcher(
                timeout=self.settings.ARTICLE_FETCH_TIMEOUT_SECONDS,
                max_chars=self.settings.MAX_ARTICLE_CHARS,
            )
        self.page_fetcher = page_fetcher
        self._graph = self._build_graph()

    # -------------------------------------------------------------------------
    # Nodes
    # -------------------------------------------------------------------------

    def _log(self, state: DocumentPipelineState, stage: str, msg: str, **extra: Any) -> None:
        logger.info(
            msg,
            extra={"run_id": state.run_id, "flow": state.flow_name, "stage": stage, "extra_data": extra},
        )

    def validate(self, state: DocumentPipelineState) -> dict[str, Any]:
        """Validate caller input against the flow's input schema."""
        flow = get_flow(state.flow_name)
        validated = validate_input(flow.input_schema, state.raw_input)
        self._log(state, "validate", f"Input valid for {flow.input_schema}")
        return {"validated_input": validated}

    def _decode_media(self, flow: FlowDefinition, validated: BaseModel) -> MediaAttachment:
        attachment = parse_data_uri(getattr(validated, flow.media_field))
        if attachment.size_bytes > self.settings.MAX_MEDIA_BYTES:
            raise SchemaViolation(
                field=to_camel(flow.media_field),
                constraint=(
                    f"attachment is {attachment.size_bytes} bytes; "
                    f"limit is {self.settings.MAX_MEDIA_BYTES}"
                ),
                schema_name=flow.input_schema,
            )
        return attachment

    async def compute(self, state: DocumentPipelineState) -> dict[str, Any]:
        """Derive computed fields (ratings, dates, document numbers, fetched pages)."""
        flow = get_flow(state.flow_name)
        media = self._decode_media(flow, state.validated_input) if flow.media_field else None

        computed: dict[str, Any] = {}
        if flow.preprocess is not None:
            ctx = FlowContext(
                today=self.clock(),
                rng=self.rng,
                settings=self.settings,
                page_fetcher=self.page_fetcher,
                media=media,
            )
            computed = await flow.preprocess(state.validated_input, ctx)

        self._log(state, "compute", f"Computed {sorted(computed)}")
        return {"computed_fields": computed, "media": media}

    def bind_prompt(self, state: DocumentPipelineState) -> dict[str, Any]:
        """Bind validated input and computed fields into the flow template."""
        flow = get_flow(state.flow_name)
        prompt = bind(
            flow.template,
            state.validated_input,
            state.computed_fields,
            template_name=flow.name,
        )
        self._log(state, "bind", f"Bound prompt ({len(prompt)} chars)")
        return {"prompt": prompt}

    async def invoke_service(self, state: DocumentPipelineState) -> dict[str, Any]:
        """Send the prompt to the completion service."""
        flow = get_flow(state.flow_name)
        raw_output = await invoke(
            self.completion_service,
            state.prompt,
            flow.output_schema,
            system=flow.system_prompt,
            media=(state.media,) if state.media else (),
            flow=flow.name,
            run_id=state.run_id,
        )
        return {"raw_output": raw_output}

    def check_output(self, state: DocumentPipelineState) -> dict[str, Any]:
        """Validate the service answer and cross-check computed risk values."""
        flow = get_flow(state.flow_name)
        result = validate_output(state.raw_output, flow.output_schema)

        if flow.hazard_document_field:
            check_risk_consistency(
                getattr(result, flow.hazard_document_field),
                state.computed_fields.get("hazards", []),
                self.settings.RISK_CONSISTENCY_MODE,
                document_field=to_camel(flow.hazard_document_field),
                schema_name=flow.output_schema,
                run_id=state.run_id,
            )

        self._log(state, "validate_output", f"Output valid for {flow.output_schema}")
        return {"result": result}

    @staticmethod
    def _route_after_validate(state: DocumentPipelineState) -> str:
        flow = get_flow(state.flow_name)
        if flow.preprocess is None and flow.media_field is None:
            return "bind"
        return "compute"

    def _build_graph(self):
        graph = StateGraph(DocumentPipelineState)

        graph.add_node("validate", self.validate)
        graph.add_node("compute", self.compute)
        graph.add_node("bind", self.bind_prompt)
        graph.add_node("invoke", self.invoke_service)
        graph.add_node("validate_output", self.check_output)

        graph.set_entry_point("validate")
        graph.add_conditional_edges(
            "validate", self._route_after_validate, {"compute": "compute", "bind": "bind"}
        )
        graph.add_edge("compute", "bind")
        graph.add_edge("bind", "invoke")
        graph.add_edge("invoke", "validate_output")
        graph.add_edge("validate_output", END)

        return graph.compile()

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    async def run(self, flow_name: str, raw_input: Any) -> BaseModel:
        """
        Run one flow start to finish.

        Args:
            flow_name: Registered flow name (e.g. "hira")
            raw_input: JSON-shaped caller input

        Returns:
            Validated output model

        Raises:
            UnknownFlowError: If the flow is not registered
            SchemaViolation: If the input is invalid (no service call is made)
            BindingError: If the template cannot be bound
            GenerationError: If the completion service fails
            OutputSchemaViolation: If the service answer has the wrong shape
        """
        get_flow(flow_name)
        run_id = str(uuid.uuid4())
        initial_state = DocumentPipelineState(flow_name=flow_name, run_id=run_id, raw_input=raw_input)

        logger.info(
            f"Starting {flow_name} pipeline",
            extra={"run_id": run_id, "flow": flow_name},
        )
        start = time.time()

        try:
            final_state = await self._graph.ainvoke(initial_state)
        except PipelineError as e:
            logger.warning(
                f"{flow_name} pipeline failed: {e.kind}",
                extra={"run_id": run_id, "flow": flow_name, "extra_data": {"detail": str(e)}},
            )
            raise

        result = final_state["result"]
        logger.info(
            f"Completed {flow_name} pipeline",
            extra={
                "run_id": run_id,
                "flow": flow_name,
                "extra_data": {"duration_ms": int((time.time() - start) * 1000)},
            },
        )
        return result

    def stream_advice(self, query: Any) -> AsyncIterator[str]:
        """
        Validate a consultant query and return its streamed answer.

        Raises:
            SchemaViolation: If the query is missing or blank
        """
        validated = validate_input("safety_consultant_input", {"query": query})
        prompt = bind(STREAMING_TEMPLATE, validated, template_name="safety_consultant_stream")
        logger.info("Streaming safety consultant answer", extra={"flow": "safety_consultant_stream"})
        return self.completion_service.stream(prompt, system=CONSULTANT_SYSTEM_PROMPT)
