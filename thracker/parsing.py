from __future__ import annotations
import json
import re
from typing import List, Type, TypeVar
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from .errors import StructuredOutputError
from .state import ResumeSuggestion

ModelT = TypeVar("ModelT", bound=BaseModel)


class AnalysisResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Booleans and NaN/Infinity are not scores.
    compatibility_score: float = Field(alias="compatibilityScore", strict=True, allow_inf_nan=False)
    analysis: str


class SuggestionsResponse(BaseModel):
    suggestions: List[ResumeSuggestion]


class CoverLetterResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cover_letter: str = Field(alias="coverLetter")


def strip_code_fences(text: str) -> str:
    return re.sub(r"^```[a-zA-Z]*\n|```$", "", text.strip(), flags=re.MULTILINE).strip()


def extract_json_block(text: str) -> str:
    """Extract JSON from LLM response, handling code fences and finding first {...} block."""
    t = strip_code_fences(text)
    m = re.search(r"\{[\s\S]*\}", t)
    if m:
        return t[m.start():m.end()]
    return t


def parse_structured(content: str, schema: Type[ModelT]) -> ModelT:
    """Decode a model response into ``schema``.

    Raises StructuredOutputError instead of returning an object with holes in it:
    the response must be a JSON object and must carry every field the schema needs.
    """
    text = strip_code_fences(content or "")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # Prose around the payload: fall back to the first {...} block.
        data = _loads_block(text)
    if not isinstance(data, dict):
        raise StructuredOutputError(f"expected a JSON object, got {type(data).__name__}")
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise StructuredOutputError(f"response does not match {schema.__name__} (bad fields: {fields})") from e


def _loads_block(text: str) -> object:
    try:
        return json.loads(extract_json_block(text))
    except json.JSONDecodeError as e:
        raise StructuredOutputError(f"response is not valid JSON ({e.msg})") from e
