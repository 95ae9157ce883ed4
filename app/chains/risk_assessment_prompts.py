"""Prompt templates for site risk assessments."""

from app.chains.hira_prompts import (
    GENERIC_CONTROLS_SECTION,
    HAZARD_LIST_SECTION,
    HAZARD_TABLE_SECTION,
    HIRA_SYSTEM_PROMPT,
    risk_matrix_section,
)

RISK_ASSESSMENT_SYSTEM_PROMPT = HIRA_SYSTEM_PROMPT

RISK_ASSESSMENT_TEMPLATE = (
    """The document must follow this exact structure:
1.  **Header Section**: the company name, task title and site location.
2.  **Contents/Hazards List**: a numbered list of all identified hazard descriptions.
3.  **Generic Control Measures Section**: the standard safety measures provided below.
4.  **Risk Assessment Matrix Explanation**: the provided explanation of the risk matrix, including band colours.
5.  **Detailed Hazard Analysis Table**: the Markdown table below with its pre-calculated risk ratings.
6.  **Approval Section**: the review date and signature blocks, including client sign-off.

## Document Generation Start

**Company:** {{ companyName }}
**Task/Project:** {{ taskTitle }}
**Site Location:** {{ siteLocation }}

---

### Task Risk Assessment

"""
    + HAZARD_LIST_SECTION
    + "\n---\n\n"
    + GENERIC_CONTROLS_SECTION
    + "\n---\n\n"
    + risk_matrix_section(colour_labels=True)
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
| **Client** | | | |

## Document Generation End
"""
)
