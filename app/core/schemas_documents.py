"""Pydantic schemas for the generated safety documents.

Each document type has an input schema (what the form submits) and an
output schema holding exactly one Markdown text field.
"""

from pydantic import Field

from app.core.schemas_base import CamelModel, DocumentText, RequiredText
from app.core.schemas_hazards import HiraHazardInput, MatrixHazardInput

# =======================
# HIRA
# =======================


class HiraInput(CamelModel):
    """Hazard Identification and Risk Assessment request."""

    company_name: RequiredText = Field(..., description="The name of the company or organization")
    task_title: RequiredText = Field(..., description="The task or project being assessed")
    review_date: RequiredText = Field(..., description="Scheduled review date for this HIRA")
    hazards: list[HiraHazardInput] = Field(
        ..., min_length=1, description="Identified hazards and their assessments"
    )


class HiraOutput(CamelModel):
    hira_document: DocumentText = Field(
        ..., description="A professionally formatted, OHS Act-compliant HIRA document in Markdown"
    )


# =======================
# Risk assessment
# =======================


class RiskAssessmentInput(CamelModel):
    """Site risk assessment request (HIRA layout plus site location, 0-5 ratings)."""

    company_name: RequiredText = Field(..., description="The name of the company or organization")
    task_title: RequiredText = Field(..., description="The task or project being assessed")
    site_location: RequiredText = Field(..., description="Physical location of the site")
    review_date: RequiredText = Field(..., description="Scheduled review date")
    hazards: list[MatrixHazardInput] = Field(
        ..., min_length=1, description="Identified hazards and their assessments"
    )


class RiskAssessmentOutput(CamelModel):
    risk_assessment_document: DocumentText = Field(
        ..., description="A professionally formatted risk assessment document in Markdown"
    )


# =======================
# SHE plan
# =======================


class ShePlanInput(CamelModel):
    """Site Safety, Health and Environment plan request."""

    company_name: RequiredText = Field(..., description="The name of the company or organization")
    project_title: RequiredText = Field(..., description="The title of the project")
    project_location: RequiredText = Field(..., description="Physical location of the project")
    prepared_by: RequiredText = Field(..., description="Person preparing the plan")
    review_date: RequiredText = Field(..., description="Scheduled review date")
    project_overview: RequiredText = Field(
        ..., description="Project scope, timeline and characteristics"
    )
    site_hazards: RequiredText = Field(..., description="Summary of site-specific hazards")
    emergency_procedures: RequiredText = Field(
        ..., description="Emergency response procedures (medical, fire, spills)"
    )
    ppe_requirements: RequiredText = Field(
        ..., description="Minimum and task-specific PPE"
    )
    training_requirements: RequiredText = Field(
        ..., description="Mandatory training and competency requirements"
    )
    environmental_controls: RequiredText = Field(
        ..., description="Controls for waste, dust, water and other environmental hazards"
    )


class ShePlanOutput(CamelModel):
    she_plan_document: DocumentText = Field(
        ..., description="A comprehensive SHE Site Plan document in Markdown"
    )


# =======================
# Method statement
# =======================


class MethodStatementInput(CamelModel):
    """Method statement request."""

    company_name: RequiredText = Field(..., description="The name of the company or organization")
    project_title: RequiredText = Field(..., description="The project or contract")
    task_title: RequiredText = Field(..., description="The task this method statement covers")
    prepared_by: RequiredText = Field(..., description="Person preparing the document")
    review_date: RequiredText = Field(..., description="Next scheduled review date")
    scope: RequiredText = Field(..., description="The work, its boundaries and personnel")
    hazards: RequiredText = Field(..., description="Key hazards from the JHA/HIRA for this task")
    ppe: RequiredText = Field(..., description="Mandatory and task-specific PPE")
    procedure: list[RequiredText] = Field(
        ..., min_length=1, description="Sequential work method steps, one per entry"
    )
    equipment: RequiredText = Field(..., description="Tools, machinery and equipment required")
    training: RequiredText = Field(..., description="Required training and competencies")
    monitoring: RequiredText = Field(..., description="How the work is monitored")
    emergency_procedures: RequiredText = Field(..., description="Task-specific emergency actions")


class MethodStatementOutput(CamelModel):
    method_statement: DocumentText = Field(
        ..., description="The complete Method Statement document in Markdown"
    )


# =======================
# Safe work procedure
# =======================


class SafeWorkProcedureInput(CamelModel):
    """Safe work procedure (SWP) request."""

    task_title: RequiredText = Field(..., description="The task or operation")
    company_name: RequiredText = Field(..., description="The name of the company")
    prepared_by: RequiredText = Field(..., description="Person preparing the SWP")
    review_date: RequiredText = Field(..., description="Next scheduled review date")
    scope: RequiredText = Field(..., description="Scope and application of the procedure")
    hazards: RequiredText = Field(..., description="Identified hazards and risks for the task")
    ppe: RequiredText = Field(..., description="Required PPE")
    procedure: list[RequiredText] = Field(
        ..., min_length=1, description="Procedure steps, one per entry"
    )
    emergency_procedures: RequiredText = Field(..., description="Actions for emergencies")


class SafeWorkProcedureOutput(CamelModel):
    safe_work_procedure: DocumentText = Field(
        ..., description="The complete Safe Work Procedure document in Markdown"
    )
