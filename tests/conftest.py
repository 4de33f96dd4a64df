from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import pytest
from langchain_core.messages import AIMessage

from thracker.state import AgentSettings, JobDetails, PipelineState

ANALYSIS_JSON = json.dumps({"compatibilityScore": 82, "analysis": "Strong Python background, light on Kubernetes."})
SUGGESTIONS_JSON = json.dumps(
    {
        "suggestions": [
            {"original": "Built internal tools", "suggestion": "Built internal FastAPI tools used by 40 engineers"},
            {"original": "Worked on data pipelines", "suggestion": "Owned Airflow pipelines processing 2TB/day"},
            {"original": "Helped with deployments", "suggestion": "Automated Kubernetes deployments with Helm"},
        ]
    }
)
COVER_LETTER_JSON = json.dumps({"coverLetter": "Dear Hiring Team,\n\nI am excited to apply..."})


def stage_of(messages: List[Any]) -> str:
    system = messages[0].content
    if "compatibility score (0-100)" in system:
        return "analyze"
    if "suggestions to improve the resume" in system:
        return "suggest"
    if "tailored cover letter" in system:
        return "draft_cover_letter"
    return "other"


class FakeLLM:
    """Completion provider stand-in that answers per stage and records every call."""

    def __init__(self, responses: Dict[str, Any]):
        self.responses = responses
        self.calls: List[List[Any]] = []
        self.stages: List[str] = []

    async def ainvoke(self, messages: List[Any]) -> AIMessage:
        stage = stage_of(messages)
        self.calls.append(messages)
        self.stages.append(stage)
        response = self.responses[stage]
        if callable(response):
            response = response(messages)
        if isinstance(response, Exception):
            raise response
        return AIMessage(content=response)

    def payload(self, stage: str) -> str:
        messages = self.calls[self.stages.index(stage)]
        return "\n".join(m.content for m in messages)


@pytest.fixture
def make_llm() -> Callable[..., FakeLLM]:
    def factory(overrides: Optional[Dict[str, Any]] = None) -> FakeLLM:
        responses: Dict[str, Any] = {
            "analyze": ANALYSIS_JSON,
            "suggest": SUGGESTIONS_JSON,
            "draft_cover_letter": COVER_LETTER_JSON,
            "other": "Subject: Coffee chat?\n\nHi Sam, ...",
        }
        responses.update(overrides or {})
        return FakeLLM(responses)

    return factory


@pytest.fixture
def job_details() -> JobDetails:
    return JobDetails(position="Backend Engineer", company="Acme Corp", location="Berlin")


@pytest.fixture
def agent_settings() -> AgentSettings:
    return AgentSettings(tone="professional", focus_area="technical", detail_level="balanced")


@pytest.fixture
def state(job_details: JobDetails, agent_settings: AgentSettings) -> PipelineState:
    return PipelineState(
        resume_text="Jane Doe\nBuilt internal tools\nWorked on data pipelines",
        job_description="We need a backend engineer with Python and Kubernetes.",
        job_details=job_details,
        agent_settings=agent_settings,
    )


def make_pdf(text: str) -> bytes:
    """Smallest single-page PDF with one line of Helvetica text."""
    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for i, obj in enumerate(objects, 1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % i + obj + b"\nendobj\n"
    xref = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for off in offsets:
        out += b"%010d 00000 n \n" % off
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref)
    return bytes(out)


@pytest.fixture
def pdf_bytes() -> Callable[[str], bytes]:
    return make_pdf
