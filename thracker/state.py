from __future__ import annotations
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DEFAULT_RESUME = (
    "[Your Name]\n[Your Address]\n[Your Email] | [Your Phone] | [Your LinkedIn]\n\n"
    "SUMMARY\n[Brief professional summary highlighting your key skills and experience]\n\n"
    "SKILLS\n[List your key technical and soft skills relevant to your target roles]\n\n"
    "WORK EXPERIENCE\n[Job Title] | [Company Name] | [Employment Dates]\n- [Accomplishment or responsibility]\n\n"
    "EDUCATION\n[Degree] | [Institution] | [Graduation Year]"
)


class Stage(str, Enum):
    ANALYZE = "analyze"
    SUGGEST = "suggest"
    DRAFT_COVER_LETTER = "draft_cover_letter"
    DONE = "done"


class JobDetails(BaseModel):
    position: str
    company: str
    location: Optional[str] = None
    industry: Optional[str] = None


class AgentSettings(BaseModel):
    """Free-form writing directives. Values are forwarded to the model verbatim."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tone: str = ""
    focus_area: str = ""
    detail_level: str = ""


class ResumeSuggestion(BaseModel):
    original: str
    suggestion: str


class PipelineState(BaseModel):
    # Input
    resume_text: str
    job_description: str
    job_details: JobDetails
    base_cover_letter: Optional[str] = None
    agent_settings: AgentSettings = Field(default_factory=AgentSettings)

    # Processing
    current_stage: Stage = Stage.ANALYZE

    # Output
    compatibility_score: Optional[float] = None
    analysis_text: Optional[str] = None
    suggestions: Optional[List[ResumeSuggestion]] = None
    cover_letter: Optional[str] = None
    error: Optional[str] = None


class CopilotResult(BaseModel):
    """Orchestrator output. Every field is present whatever stage the run reached."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    compatibility_score: float = 0
    analysis_text: str = ""
    suggestions: List[ResumeSuggestion] = Field(default_factory=list)
    cover_letter: str = ""
    error: Optional[str] = None

    @classmethod
    def from_state(cls, state: PipelineState) -> "CopilotResult":
        return cls(
            compatibility_score=state.compatibility_score or 0,
            analysis_text=state.analysis_text or "",
            suggestions=list(state.suggestions or []),
            cover_letter=state.cover_letter or "",
            error=state.error,
        )
