"""Tests for prompt template binding."""

import pytest

from app.chains.flows import FLOWS, get_flow
from app.chains.hira_prompts import HIRA_TEMPLATE
from app.chains.method_statement_prompts import METHOD_STATEMENT_TEMPLATE
from app.core.errors import BindingError
from app.core.schema_validation import validate_input
from app.core.schemas_hazards import rate_hazards
from app.core.template_binding import _compile, bind, md_cell, one_line
from tests.fixtures_documents import METHOD_STATEMENT_INPUT, make_hazard, make_hira_input


def _bind_hira(raw: dict) -> str:
    validated = validate_input("hira_input", raw)
    return bind(HIRA_TEMPLATE, validated, {"hazards": rate_hazards(validated.hazards)})


def _table_rows(prompt: str) -> list[str]:
    # Hazard rows are the table lines carrying an L - S - **R** triple
    return [line for line in prompt.splitlines() if line.startswith("| ") and " - **" in line]


def test_concrete_hazard_row_renders_triples():
    prompt = _bind_hira(make_hira_input([make_hazard(il=4, ic=5, rl=1, rc=2)]))

    rows = _table_rows(prompt)
    assert len(rows) == 1
    assert "4 - 5 - **20**" in rows[0]
    assert "1 - 2 - **2**" in rows[0]


def test_binding_is_idempotent():
    validated = validate_input("hira_input", make_hira_input())
    computed = {"hazards": rate_hazards(validated.hazards)}

    first = bind(HIRA_TEMPLATE, validated, computed)
    second = bind(HIRA_TEMPLATE, validated, computed)

    assert first == second


def test_binding_does_not_mutate_input():
    validated = validate_input("hira_input", make_hira_input())
    before = validated.model_dump()

    bind(HIRA_TEMPLATE, validated, {"hazards": rate_hazards(validated.hazards)})

    assert validated.model_dump() == before


def test_rows_keep_caller_order_not_rank():
    hazards = [
        make_hazard("Crane collapse", il=4, ic=5),
        make_hazard("Manual handling", il=2, ic=3),
        make_hazard("Paper cut", il=1, ic=1),
    ]

    rows = _table_rows(_bind_hira(make_hira_input(hazards)))

    assert len(rows) == 3
    assert "Crane collapse" in rows[0] and "**20**" in rows[0]
    assert "Manual handling" in rows[1] and "**6**" in rows[1]
    assert "Paper cut" in rows[2] and "**1**" in rows[2]


def test_each_row_carries_only_its_own_values():
    hazards = [
        make_hazard("Hot works", il=3, ic=4, rl=2, rc=2),
        make_hazard("Excavation collapse", il=5, ic=5, rl=1, rc=5),
    ]

    rows = _table_rows(_bind_hira(make_hira_input(hazards)))

    assert "3 - 4 - **12**" in rows[0] and "2 - 2 - **4**" in rows[0]
    assert "5 - 5 - **25**" not in rows[0]
    assert "5 - 5 - **25**" in rows[1] and "1 - 5 - **5**" in rows[1]
    assert "Hot works" not in rows[1]


def test_hazard_list_is_numbered_in_order():
    hazards = [make_hazard("Noise"), make_hazard("Dust")]

    prompt = _bind_hira(make_hira_input(hazards))

    assert "1. Noise" in prompt
    assert "2. Dust" in prompt
    assert prompt.index("1. Noise") < prompt.index("2. Dust")


def test_multiline_hazard_stays_one_list_item():
    hazards = [make_hazard("Working at height\n2. Fall from ladder"), make_hazard("Dust")]

    prompt = _bind_hira(make_hira_input(hazards))

    assert "1. Working at height 2. Fall from ladder\n" in prompt
    assert "\n2. Dust" in prompt
    assert "\n2. Fall from ladder" not in prompt


def test_pipes_in_text_do_not_break_the_table():
    prompt = _bind_hira(make_hira_input([make_hazard("Cutting | grinding")]))

    assert "Cutting \\| grinding" in _table_rows(prompt)[0]


def test_scalar_placeholders_filled():
    prompt = _bind_hira(make_hira_input())

    assert "**Company:** Acme Construction" in prompt
    assert "Roof sheeting replacement" in prompt
    assert "2026-03-01" in prompt
    assert "{{" not in prompt


def test_procedure_steps_numbered():
    validated = validate_input("method_statement_input", METHOD_STATEMENT_INPUT)
    prompt = bind(
        METHOD_STATEMENT_TEMPLATE,
        validated,
        {"documentNumber": "MS-2025-1234", "effectiveDate": "March 7, 2025"},
    )

    assert "1. Hold toolbox talk" in prompt
    assert "3. Lift and bolt first frame" in prompt
    assert "MS-2025-1234" in prompt


def test_missing_computed_field_is_binding_error():
    validated = validate_input("method_statement_input", METHOD_STATEMENT_INPUT)

    with pytest.raises(BindingError) as exc_info:
        bind(METHOD_STATEMENT_TEMPLATE, validated, template_name="method_statement")

    assert exc_info.value.template_name == "method_statement"


def test_invalid_template_is_binding_error():
    validated = validate_input("hira_input", make_hira_input())

    with pytest.raises(BindingError):
        bind("{% for h in hazards %}", validated)


@pytest.mark.parametrize("flow_name", sorted(FLOWS))
def test_every_registered_template_compiles(flow_name):
    flow = get_flow(flow_name)

    assert _compile(flow.template) is not None


def test_md_cell():
    assert md_cell("a|b") == "a\\|b"
    assert md_cell("line one\nline two") == "line one<br>line two"


def test_one_line():
    assert one_line("  step one\r\n  continued\tend ") == "step one continued end"


def test_multiline_step_stays_one_item():
    raw = dict(METHOD_STATEMENT_INPUT, procedure=["Hold toolbox talk\n2. Skip permit", "Erect base"])
    validated = validate_input("method_statement_input", raw)
    prompt = bind(
        METHOD_STATEMENT_TEMPLATE,
        validated,
        {"documentNumber": "MS-2025-1234", "effectiveDate": "March 7, 2025"},
    )

    assert "1. Hold toolbox talk 2. Skip permit\n" in prompt
    assert "\n2. Erect base" in prompt
