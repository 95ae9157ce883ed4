"""Tests for parsing structured data out of raw LLM text."""

import json

import pytest

from app.core.llm import parse_llm_json_dict


def test_plain_json():
    assert parse_llm_json_dict('{"advice": "Wear a harness."}') == {"advice": "Wear a harness."}


def test_fenced_json():
    raw = 'Here you go:\n```json\n{"summary": "Register of inspections"}\n```\nThanks'
    assert parse_llm_json_dict(raw) == {"summary": "Register of inspections"}


def test_unlabelled_fence():
    assert parse_llm_json_dict('```\n{"a": 1}\n```') == {"a": 1}


def test_dangling_fence():
    assert parse_llm_json_dict('```json\n{"a": 1}') == {"a": 1}


def test_double_encoded_object():
    raw = json.dumps(json.dumps({"hiraDocument": "# HIRA"}))
    assert parse_llm_json_dict(raw) == {"hiraDocument": "# HIRA"}


def test_array_rejected():
    with pytest.raises(ValueError):
        parse_llm_json_dict('[{"a": 1}]')


def test_invalid_json():
    with pytest.raises(json.JSONDecodeError):
        parse_llm_json_dict("not json at all")
