"""Prompt templates for Safe Work Procedure (SWP) documents."""

# ruff: noqa: E501

SWP_SYSTEM_PROMPT = """You are an expert safety officer specializing in legally compliant, OSHA-adherent Safe Work Procedure (SWP) documents.

Produce the final SWP in Markdown from the skeleton between "## Document Generation Start" and "## Document Generation End". Keep the exact section structure, the document number and dates as given, and the procedure steps in the given sequence. Output only the finished document, without the Start/End markers."""

SWP_TEMPLATE = """## Document Generation Start

# **Safe Work Procedure: {{ taskTitle }}**

---

### **1. Document Control**
- **Company:** {{ companyName }}
- **Document Title:** Safe Work Procedure - {{ taskTitle }}
- **Document Number:** {{ documentNumber }}
- **Effective Date:** {{ effectiveDate }}
- **Prepared By:** {{ preparedBy }}
- **Next Review Date:** {{ reviewDate }}

| Approval Role       | Name | Signature | Date |
|---------------------|------|-----------|------|
| **Safety Manager**  |      |           |      |
| **Department Head** |      |           |      |

---

### **2. Scope and Application**
{{ scope }}

---

### **3. Regulatory References**
This procedure adheres to the principles outlined in the Occupational Safety and Health Act (OSHA), specifically referencing standards relevant to the tasks described herein, including but not limited to 29 CFR 1910 (General Industry) and/or 29 CFR 1926 (Construction). All personnel are required to comply with these and any applicable state or local regulations.

---

### **4. Hazard Identification and Risk Assessment**
A full Hazard Identification and Risk Assessment (HIRA) must be completed and understood by all personnel before commencing this task. Key hazards associated with this work include, but are not limited to:
{{ hazards }}

---

### **5. Personal Protective Equipment (PPE)**
The following Personal Protective Equipment is mandatory for all personnel performing this task, as per OSHA standards (29 CFR 1910.132). All PPE must be inspected prior to use and maintained in good condition.
{{ ppe }}

---

### **6. Step-by-Step Procedure**
The following steps must be followed in sequence to ensure the task is completed safely. Any deviation from this procedure requires authorization from a supervisor.

{% for step in procedure %}
{{ loop.index }}. {{ step | one_line }}
{% endfor %}

---

### **7. Emergency Procedures**
In the event of an emergency, all work must cease immediately. Follow these procedures:
{{ emergencyProcedures }}

**Emergency Contact Information:**
- **Site Supervisor:** [Enter Name and Number]
- **Emergency Services (Call):** [Enter Local Emergency Number, e.g., 911]

---

### **8. Training and Acknowledgment**
All personnel assigned to this task must be trained on this Safe Work Procedure prior to beginning work. By signing below, you acknowledge that you have read, understood, and agree to comply with this SWP in its entirety.

| Employee Name | Signature | Date |
|---------------|-----------|------|
|               |           |      |
|               |           |      |
|               |           |      |

## Document Generation End
"""
