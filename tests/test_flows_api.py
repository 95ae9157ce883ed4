"""Tests for the flow, risk and consultant HTTP endpoints."""

import random
from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_pipeline
from app.core.config import Settings
from app.core.errors import BindingError, GenerationError
from app.graphs.document_pipeline_graph import DocumentPipeline
from app.main import app
from tests.fakes.fake_completion import FakeCompletionService, FakePageFetcher
from tests.fixtures_documents import hira_document_for, make_hazard, make_hira_input


@pytest.fixture
def use_service(tmp_path):
    """Route API requests through a pipeline backed by the given fake service."""

    def _use(service: FakeCompletionService) -> TestClient:
        settings = Settings(CORE_MEMORY_PATH=str(tmp_path / "core-memory.json"))
        app.dependency_overrides[get_pipeline] = lambda: DocumentPipeline(
            service,
            clock=lambda: date(2025, 3, 7),
            rng=random.Random(1),
            page_fetcher=FakePageFetcher(),
            settings=settings,
        )
        return TestClient(app)

    yield _use
    app.dependency_overrides.clear()


def test_list_flows():
    response = TestClient(app).get("/v1/flows")

    assert response.status_code == 200
    flows = {f["name"]: f for f in response.json()}
    assert flows["hira"]["output_fields"] == ["hiraDocument"]
    assert flows["method_statement"]["output_fields"] == ["methodStatement"]
    assert flows["she_plan"]["output_fields"] == ["shePlanDocument"]
    assert flows["safe_work_procedure"]["output_fields"] == ["safeWorkProcedure"]
    assert flows["risk_assessment"]["output_fields"] == ["riskAssessmentDocument"]
    assert flows["hazard_suggestions"]["output_fields"] == ["suggestedHazards"]


def test_flow_schema():
    response = TestClient(app).get("/v1/flows/hira/schema")

    assert response.status_code == 200
    body = response.json()
    assert "hazards" in body["input"]["properties"]
    assert body["output"]["required"] == ["hiraDocument"]


def test_unknown_flow_is_404(use_service):
    client = use_service(FakeCompletionService())

    assert client.get("/v1/flows/toolbox_talk/schema").status_code == 404
    response = client.post("/v1/flows/toolbox_talk", json={})
    assert response.status_code == 404
    assert response.json()["error"] == "unknown_flow"


def test_run_hira_flow(use_service):
    raw = make_hira_input()
    client = use_service(FakeCompletionService(output={"hiraDocument": hira_document_for(raw["hazards"])}))

    response = client.post("/v1/flows/hira", json=raw)

    assert response.status_code == 200
    assert "4 - 5 - **20**" in response.json()["hiraDocument"]


def test_invalid_input_is_422(use_service):
    service = FakeCompletionService(output={"hiraDocument": "# HIRA"})
    client = use_service(service)

    response = client.post("/v1/flows/hira", json=make_hira_input([make_hazard(il=9)]))

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "schema_violation"
    assert body["field"] == "hazards.0.initialLikelihood"
    assert service.call_count == 0


def test_generation_error_is_502_retryable(use_service):
    client = use_service(FakeCompletionService(error=GenerationError("upstream 529", provider="fake")))

    response = client.post("/v1/flows/hira", json=make_hira_input())

    assert response.status_code == 502
    assert response.json()["error"] == "generation_error"
    assert response.json()["retryable"] is True


def test_output_violation_is_502_with_distinct_kind(use_service):
    client = use_service(FakeCompletionService(output={"wrong": "shape"}))

    response = client.post("/v1/flows/hira", json=make_hira_input())

    assert response.status_code == 502
    assert response.json()["error"] == "output_schema_violation"
    assert response.json()["field"] == "hiraDocument"


def test_binding_error_is_500_without_internals(use_service, monkeypatch):
    service = FakeCompletionService(output={"hiraDocument": "# HIRA"})
    client = use_service(service)

    def broken_bind(*args, **kwargs):
        raise BindingError("'companyName' is undefined", template_name="hira")

    monkeypatch.setattr("app.graphs.document_pipeline_graph.bind", broken_bind)
    response = client.post("/v1/flows/hira", json=make_hira_input())

    assert response.status_code == 500
    assert response.json() == {"error": "binding_error", "detail": "Document template could not be bound"}
    assert service.call_count == 0


@pytest.mark.parametrize(
    "body,expected",
    [
        ({"likelihood": 4, "consequence": 5}, {"rating": 20, "band": "High"}),
        ({"likelihood": 2, "consequence": 3}, {"rating": 6, "band": "Medium"}),
        ({"likelihood": 0, "consequence": 5}, {"rating": 0, "band": "Low"}),
    ],
)
def test_compute_risk(body, expected):
    response = TestClient(app).post("/v1/risk/compute", json=body)

    assert response.status_code == 200
    assert response.json() == expected


def test_compute_risk_rejects_out_of_range():
    response = TestClient(app).post("/v1/risk/compute", json={"likelihood": 6, "consequence": 1})

    assert response.status_code == 422


class TestSafetyConsultantStream:
    def test_streams_plain_text(self, use_service):
        client = use_service(FakeCompletionService(chunks=["Wear ", "a ", "harness."]))

        response = client.post("/v1/safety-consultant/stream", json={"query": "Harness?"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.headers["cache-control"] == "no-cache"
        assert response.text == "Wear a harness."

    @pytest.mark.parametrize("body", [{}, {"query": ""}, {"query": "   "}])
    def test_bad_query_is_422(self, use_service, body):
        service = FakeCompletionService(chunks=["x"])
        client = use_service(service)

        response = client.post("/v1/safety-consultant/stream", json=body)

        assert response.status_code == 422
        assert service.stream_calls == []

    def test_upfront_failure_is_502(self, use_service):
        client = use_service(
            FakeCompletionService(stream_error=GenerationError("ANTHROPIC_API_KEY not configured", retryable=False))
        )

        response = client.post("/v1/safety-consultant/stream", json={"query": "Harness?"})

        assert response.status_code == 502
        assert response.json()["retryable"] is False

    def test_mid_stream_failure_ends_stream(self, use_service):
        client = use_service(
            FakeCompletionService(chunks=["Wear "], stream_error=GenerationError("connection reset"))
        )

        response = client.post("/v1/safety-consultant/stream", json={"query": "Harness?"})

        assert response.status_code == 200
        assert response.text == "Wear "


def test_pipeline_dependency_is_reused_per_service():
    get_pipeline.cache_clear()
    first_service, second_service = FakeCompletionService(), FakeCompletionService()
    try:
        pipeline = get_pipeline(first_service)

        assert get_pipeline(first_service) is pipeline
        assert get_pipeline(second_service) is not pipeline
    finally:
        get_pipeline.cache_clear()
