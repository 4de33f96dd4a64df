from __future__ import annotations

import pytest

from thracker.errors import StructuredOutputError
from thracker.parsing import (
    AnalysisResponse,
    CoverLetterResponse,
    SuggestionsResponse,
    extract_json_block,
    parse_structured,
)


def test_extract_json_block_strips_code_fences() -> None:
    text = '```json\n{"coverLetter": "Hi"}\n```'
    assert extract_json_block(text) == '{"coverLetter": "Hi"}'


def test_extract_json_block_ignores_surrounding_prose() -> None:
    text = 'Sure! Here you go: {"analysis": "ok", "compatibilityScore": 70} Let me know.'
    assert extract_json_block(text) == '{"analysis": "ok", "compatibilityScore": 70}'


def test_parse_analysis_keeps_score_unclamped() -> None:
    resp = parse_structured('{"compatibilityScore": 140, "analysis": "Over-qualified"}', AnalysisResponse)
    assert resp.compatibility_score == 140
    assert resp.analysis == "Over-qualified"


def test_parse_suggestions_accepts_empty_list() -> None:
    resp = parse_structured('{"suggestions": []}', SuggestionsResponse)
    assert resp.suggestions == []


def test_parse_rejects_non_json() -> None:
    with pytest.raises(StructuredOutputError, match="not valid JSON"):
        parse_structured("I could not produce a score, sorry.", AnalysisResponse)


def test_parse_rejects_json_array() -> None:
    with pytest.raises(StructuredOutputError, match="expected a JSON object"):
        parse_structured('[{"original": "a", "suggestion": "b"}]', SuggestionsResponse)


def test_parse_rejects_missing_field() -> None:
    with pytest.raises(StructuredOutputError, match="compatibilityScore"):
        parse_structured('{"analysis": "no score here"}', AnalysisResponse)


def test_parse_rejects_non_numeric_score() -> None:
    with pytest.raises(StructuredOutputError):
        parse_structured('{"compatibilityScore": "high", "analysis": "x"}', AnalysisResponse)


def test_parse_rejects_malformed_suggestion_items() -> None:
    with pytest.raises(StructuredOutputError, match="suggestions"):
        parse_structured('{"suggestions": [{"original": "only half"}]}', SuggestionsResponse)


def test_parse_cover_letter() -> None:
    resp = parse_structured('{"coverLetter": "Dear team"}', CoverLetterResponse)
    assert resp.cover_letter == "Dear team"


def test_parse_rejects_array_wrapping_a_valid_object() -> None:
    with pytest.raises(StructuredOutputError, match="expected a JSON object, got list"):
        parse_structured('```json\n[{"compatibilityScore": 80, "analysis": "x"}]\n```', AnalysisResponse)


def test_parse_falls_back_to_object_inside_prose() -> None:
    resp = parse_structured('Here it is: {"compatibilityScore": 61.5, "analysis": "ok"} Thanks!', AnalysisResponse)
    assert resp.compatibility_score == 61.5


@pytest.mark.parametrize("score", ["NaN", "Infinity", "-Infinity", "true"])
def test_parse_rejects_non_finite_or_boolean_score(score) -> None:
    with pytest.raises(StructuredOutputError, match="compatibilityScore"):
        parse_structured(f'{{"compatibilityScore": {score}, "analysis": "x"}}', AnalysisResponse)
