"""Prompt templates for Site Safety, Health and Environment (SHE) plans."""

# ruff: noqa: E501

SHE_PLAN_SYSTEM_PROMPT = """You are an expert safety manager creating a Site Safety, Health, and Environment (SHE) Plan.

Produce the final plan in Markdown from the skeleton between "## Document Generation Start" and "## Document Generation End". Keep every numbered section in order. Where the user's input is brief, expand it with standard safety boilerplate so the plan is comprehensive, but never contradict what the user supplied. Leave bracketed placeholders such as [Enter Name and Number] for the site to complete. Output only the finished document, without the Start/End markers."""

SHE_PLAN_TEMPLATE = """## Document Generation Start

# **Site Safety, Health, and Environment (SHE) Plan**

---

### **1. Cover Page & Document Control**

*   **Company/Organization:** {{ companyName }}
*   **Project Title:** {{ projectTitle }}
*   **Project Location:** {{ projectLocation }}
*   **Document Title:** Site Safety Plan
*   **Prepared By:** {{ preparedBy }}
*   **Preparation Date:** {{ preparationDate }}
*   **Next Review Date:** {{ reviewDate }}

| Approval Role         | Name       | Signature | Date |
| --------------------- | ---------- | --------- | ---- |
| **Project Manager**   |            |           |      |
| **Safety Manager**    |            |           |      |
| **Client Acceptance** |            |           |      |

---

### **2. Executive Summary**

This Site Safety, Health, and Environment (SHE) Plan outlines the policies, procedures, and practices to ensure a safe and healthy work environment for the "{{ projectTitle }}" project. The primary objective is the prevention of incidents, injuries, and illnesses. This plan details the key hazards, control measures, and emergency procedures to be followed by all personnel on site.

---

### **3. Project Overview**

{{ projectOverview }}

---

### **4. Site-Specific Hazard Analysis**

A full Hazard Identification and Risk Assessment (HIRA) should be conducted for all tasks. The following key site-specific hazards have been identified and must be controlled:

{{ siteHazards }}

---

### **5. Personal Protective Equipment (PPE)**

All personnel entering the site must adhere to the minimum PPE requirements. Additional task-specific PPE will be required as determined by the relevant risk assessments.

{{ ppeRequirements }}

---

### **6. Training and Competency**

All personnel must be competent and trained for their assigned tasks. The following training requirements are mandatory for this site:

{{ trainingRequirements }}

---

### **7. Emergency Response Procedures**

In the event of an emergency, the following procedures must be followed. All personnel must be familiarized with these plans during site induction.

{{ emergencyProcedures }}

**Emergency Contact Numbers:**
*   **Ambulance / Fire / Police:** [Enter Local Emergency Number, e.g., 10177]
*   **Site Safety Officer:** [Enter Name and Number]
*   **Project Manager:** [Enter Name and Number]
*   **Local Hospital:** [Enter Hospital Name and Number]

---

### **8. Environmental Controls**

The project is committed to minimizing its environmental impact. The following controls will be implemented:

{{ environmentalControls }}

---

### **9. Incident Management**

All incidents, including near misses, must be reported immediately to the site supervisor. A thorough investigation will be conducted to determine the root cause and prevent recurrence.

---

### **10. Approval & Sign-Off**

I, the undersigned, confirm that I have read and understood the contents of this Site SHE Plan and agree to comply with all its requirements.

| Role                  | Name       | Signature | Date |
| --------------------- | ---------- | --------- | ---- |
|                       |            |           |      |
|                       |            |           |      |
|                       |            |           |      |

## Document Generation End
"""
