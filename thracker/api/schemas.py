from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from ..state import AgentSettings, CopilotResult, ResumeSuggestion


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


class CopilotRequest(CamelModel):
    application_id: Optional[str] = None
    base_cover_letter: Optional[str] = None
    agent_settings: Optional[AgentSettings] = None


class SuggestionItem(CamelModel):
    id: str
    original: str
    suggestion: str
    accepted: bool = False


class CopilotResponse(CamelModel):
    compatibility_score: float = 0
    analysis_text: str = ""
    suggestions: List[SuggestionItem] = Field(default_factory=list)
    cover_letter: str = ""
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: CopilotResult) -> "CopilotResponse":
        return cls(
            compatibility_score=result.compatibility_score,
            analysis_text=result.analysis_text,
            suggestions=shape_suggestions(result.suggestions),
            cover_letter=result.cover_letter,
            error=result.error,
        )


class HealthResponse(CamelModel):
    status: str
    message: str
    llm: bool
    storage: bool


class NetworkingEmailResponse(CamelModel):
    email_draft: str


def shape_suggestions(suggestions: List[ResumeSuggestion]) -> List[SuggestionItem]:
    """Give each suggestion a positional id and an unaccepted flag for client bookkeeping."""
    return [
        SuggestionItem(id=f"suggestion-{i}", original=s.original, suggestion=s.suggestion, accepted=False)
        for i, s in enumerate(suggestions)
    ]
