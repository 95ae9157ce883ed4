"""Prompt templates for OSHA-adherent method statements."""

# ruff: noqa: E501

METHOD_STATEMENT_SYSTEM_PROMPT = """You are an expert safety manager specializing in legally compliant, OSHA-adherent Method Statement documents.

Produce the final Method Statement in Markdown from the skeleton between "## Document Generation Start" and "## Document Generation End". Keep every numbered section in order, keep the document number and dates exactly as given, and keep the work procedure steps in the given sequence (you may clarify their wording, never reorder, merge or drop them). Output only the finished document, without the Start/End markers."""

METHOD_STATEMENT_TEMPLATE = """## Document Generation Start

# **Method Statement: {{ taskTitle }}**

---

### **1. Document Control & Legal Information**
- **Company:** {{ companyName }}
- **Project Reference:** {{ projectTitle }}
- **Document Title:** Method Statement - {{ taskTitle }}
- **Document Number:** {{ documentNumber }}
- **Effective Date:** {{ effectiveDate }}
- **Prepared By:** {{ preparedBy }}
- **Next Review Date:** {{ reviewDate }}

| Approval Role       | Name | Signature | Date |
|---------------------|------|-----------|------|
| **Project Manager** |      |           |      |
| **Safety Manager**  |      |           |      |

---

### **2. Scope of Work**
{{ scope }}

---

### **3. Regulatory & Standards Compliance**
This Method Statement is developed in accordance with the Occupational Safety and Health Act (OSHA) General Duty Clause (Section 5(a)(1)). It integrates principles from relevant OSHA standards, including but not limited to 29 CFR 1926 (Construction) and 29 CFR 1910 (General Industry). All work must comply with these regulations and any applicable state or local codes.

---

### **4. Hazard Identification and Risk Assessment (HIRA)**
A full Job Hazard Analysis (JHA) or Hazard Identification and Risk Assessment (HIRA) must be completed, understood, and signed by all personnel before commencing this task. This Method Statement serves as the primary administrative control for the identified risks.

**Key hazards associated with this work include, but are not limited to:**
{{ hazards }}

The hierarchy of controls has been applied to manage these risks. Where hazards cannot be eliminated or substituted, engineering and administrative controls, followed by Personal Protective Equipment (PPE), are the primary means of risk reduction.

---

### **5. Personal Protective Equipment (PPE)**
The following PPE is mandatory for all personnel performing this task, as per the site-specific PPE assessment and OSHA standards. All PPE must be inspected prior to use and maintained in good condition.

{{ ppe }}

---

### **6. Equipment & Resources**
Only authorized and inspected equipment shall be used for this task. All equipment must be suitable for its intended purpose and used in accordance with manufacturer's instructions.

**Required Equipment:**
{{ equipment }}

---

### **7. Step-by-Step Work Procedure**
The following steps must be followed in sequence to ensure the task is completed safely, efficiently, and to the required quality standard. Any deviation from this procedure requires a Stop Work Authority review and formal authorization from a supervisor.

{% for step in procedure %}
{{ loop.index }}. {{ step | one_line }}
{% endfor %}

---

### **8. Training & Competency**
All personnel assigned to this task must be trained on this Method Statement and be competent to perform their assigned duties. Records of training and competency must be maintained.

**Required Training & Competencies:**
{{ training }}

---

### **9. Supervision & Monitoring**
Continuous monitoring will be in place to ensure compliance with this Method Statement.

{{ monitoring }}

---

### **10. Emergency Procedures**
In the event of an emergency, all work must cease immediately. The site-specific Emergency Action Plan must be followed.

**Task-Specific Emergency Actions:**
{{ emergencyProcedures }}

**Emergency Contact Information:**
- **Site Supervisor:** [Enter Name and Number]
- **Emergency Services (Call):** [Enter Local Emergency Number, e.g., 911]
- **Safety Officer:** [Enter Name and Number]

---

### **11. Worker Acknowledgment**
By signing below, you acknowledge that you have read, understood, and agree to comply with this Method Statement in its entirety. You confirm you have received the necessary training and will raise any safety concerns with your supervisor.

| Employee Name | Signature | Date |
|---------------|-----------|------|
|               |           |      |
|               |           |      |
|               |           |      |

## Document Generation End
"""
