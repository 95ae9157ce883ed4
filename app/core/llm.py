"""Helpers for reading structured data out of raw LLM text."""

import json
import re
from typing import Any


def _strip_llm_fences(raw_output: str) -> str:
    """Strip markdown code fences from LLM output.

    Handles: ```json ... ```, ``` ... ```, leading/trailing whitespace.
    """
    cleaned = raw_output.strip()

    # Extract JSON from markdown code fences
    fence_match = re.search(r"```(?:json)?\s*\n?(.*?)```", cleaned, re.DOTALL)
    if fence_match:
        return fence_match.group(1).strip()

    # Fallback: strip a dangling opening/closing fence
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_llm_json_dict(raw_output: str) -> dict[str, Any]:
    """
    Parse LLM output as a JSON object.

    Handles common LLM response quirks:
    - Markdown code fences (```json ... ```)
    - Leading/trailing whitespace
    - A JSON object encoded as a JSON string (double-encoded)

    Args:
        raw_output: Raw string from LLM response

    Returns:
        Parsed dict

    Raises:
        json.JSONDecodeError: If JSON parsing fails after cleanup
        ValueError: If the JSON is valid but not an object
    """
    parsed = json.loads(_strip_llm_fences(raw_output))
    if isinstance(parsed, str):
        # Double-encoded object
        parsed = json.loads(parsed)
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed
