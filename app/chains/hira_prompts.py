"""Prompt templates for HIRA (Hazard Identification and Risk Assessment) documents.

The shared sections (generic controls, risk matrix, hazard table) are
reused by the risk assessment templates.
"""

# ruff: noqa: E501

HIRA_SYSTEM_PROMPT = """You are an expert safety officer specializing in South African OHS Act-compliant Hazard Identification and Risk Assessment (HIRA) documents.

You are given a document skeleton between "## Document Generation Start" and "## Document Generation End". Produce the final document in Markdown from it:
- Keep every section and heading in the given order.
- Copy the hazard table rows exactly as given. The Initial Risk and Residual Risk columns hold pre-calculated ratings in Likelihood - Severity - **Risk** form; never recalculate, reorder, merge or drop them.
- You may improve wording of free-text cells but must not invent hazards.
- Output only the finished document in the required field, without the Start/End markers."""


GENERIC_CONTROLS_SECTION = """### Generic Control Measures

- **Competency and Training**: All personnel must be competent and trained for their assigned tasks.
- **Equipment Inspections**: Daily pre-use inspections of all tools and equipment are mandatory.
- **System Compliance**: Adherence to all established safety systems, including RAMS (Risk Assessment Method Statements), permits, and traffic management plans.
- **Equipment Maintenance**: All equipment must be maintained in accordance with manufacturer instructions.
- **Information and Communication**: Regular toolbox talks and safety briefings will be conducted.
- **Signage**: Adequate safety signage must be in place and visible.
- **Disciplinary Action**: Non-compliance with safety procedures will result in disciplinary action.
- **Personal Protective Equipment (PPE)**: Mandatory use of required PPE at all times.
- **Defective Equipment**: Any defective equipment must be immediately removed from service, tagged, and reported.
"""


def risk_matrix_section(colour_labels: bool = False) -> str:
    """Risk matrix explanation; the risk assessment variant names the band colours."""
    high = "High Risk - RED" if colour_labels else "High Risk"
    medium = "Medium Risk - YELLOW" if colour_labels else "Medium Risk"
    low = "Low Risk - GREEN" if colour_labels else "Low Risk"
    return f"""### Risk Assessment Matrix

The risk assessment is conducted using the following matrix:

**Step 1: Likelihood Rating (L)**
- 0: Impossible
- 1: Almost impossible
- 2: Highly unlikely
- 3: Unlikely
- 4: Possible
- 5: Even chance

**Step 2: Consequence/Severity Rating (S)**
- 0: No injury
- 1: Minor first aid injury
- 2: Break bone/minor illness/1st-2nd degree burns
- 3: Break bone/minor illness/3rd-4th degree burns over 50% body
- 4: Loss of limb/eye/serious illness/50%+ burns
- 5: Fatality

**Step 3: Risk Rating (R) = Likelihood x Consequence**

**Action Requirements:**
- **16-25 ({high})**: Stop work immediately. The risk must be reduced before work can proceed.
- **6-15 ({medium})**: Introduce and implement control measures to reduce the risk to a lower level.
- **0-5 ({low})**: No immediate action required, but monitoring is recommended.
"""


HAZARD_LIST_SECTION = """**Contents/Hazards:**
{% for h in hazards %}
{{ loop.index }}. {{ h.hazard | one_line }}
{% endfor %}
"""

HAZARD_TABLE_SECTION = """### Detailed Hazard Analysis

| Hazards | Persons Affected & Likely Harm | Initial Risk (L-S-R) | Additional Control Measures | Residual Risk (L-S-R) |
|---|---|---|---|---|
{% for h in hazards %}
| {{ h.hazard | md_cell }} | {{ h.personsAffected | md_cell }} | {{ h.initialLikelihood }} - {{ h.initialConsequence }} - **{{ h.initialRisk }}** | {{ h.controlMeasures | md_cell }} | {{ h.residualLikelihood }} - {{ h.residualConsequence }} - **{{ h.residualRisk }}** |
{% endfor %}
"""


HIRA_TEMPLATE = (
    """The document must follow this exact structure:
1.  **Header Section**: the company name and task title.
2.  **Contents/Hazards List**: a numbered list of all identified hazard descriptions.
3.  **Generic Control Measures Section**: the standard safety measures provided below.
4.  **Risk Assessment Matrix Explanation**: the provided explanation of the risk matrix.
5.  **Detailed Hazard Analysis Table**: the Markdown table below with its pre-calculated risk ratings.
6.  **Approval Section**: the review date and signature blocks.

## Document Generation Start

**Company:** {{ companyName }}
**Task/Project:** {{ taskTitle }}

---

### Task HIRA

"""
    + HAZARD_LIST_SECTION
    + "\n---\n\n"
    + GENERIC_CONTROLS_SECTION
    + "\n---\n\n"
    + risk_matrix_section()
    + "\n---\n\n"
    + HAZARD_TABLE_SECTION
    + """
---

### Approval and Review

**Next Review Date:** {{ reviewDate }}

| Role | Name | Signature | Date |
|------|-----------|-----------|------|
| **Compiled By** | | | |
| **Approved By** | | | |

## Document Generation End
"""
)
