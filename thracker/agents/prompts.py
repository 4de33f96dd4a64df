from __future__ import annotations
import asyncio
from typing import Any, List, Optional, Type
from ..errors import CompletionError, CopilotError, StageTimeoutError
from ..parsing import ModelT, parse_structured
from ..state import AgentSettings, JobDetails

PERSONA = "You are an expert Application Copilot assisting a job seeker."


def directives_block(settings: AgentSettings) -> str:
    return (
        f"Tone: {settings.tone}\n"
        f"Focus Area: {settings.focus_area}\n"
        f"Detail Level: {settings.detail_level}"
    )


def job_details_block(details: JobDetails, full: bool = True) -> str:
    lines = [
        "# Job Details",
        f"Position: {details.position}",
        f"Company: {details.company}",
    ]
    if full:
        lines.append(f"Location: {details.location or 'N/A'}")
        lines.append(f"Industry: {details.industry or 'N/A'}")
    return "\n".join(lines)


def resume_and_job_block(resume_text: str, job_description: str) -> str:
    return f"# Resume\n{resume_text}\n\n# Job Description\n{job_description}"


async def complete(llm: Any, messages: List[Any], stage: str, timeout_s: Optional[float] = None) -> str:
    """Await one completion and return its text content."""
    try:
        if timeout_s:
            resp = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout_s)
        else:
            resp = await llm.ainvoke(messages)
    except asyncio.TimeoutError as e:
        raise StageTimeoutError(stage, timeout_s or 0) from e
    except CopilotError:
        raise
    except Exception as e:
        raise CompletionError(str(e) or type(e).__name__) from e
    content = getattr(resp, "content", resp)
    if isinstance(content, list):
        # Some providers return content blocks instead of a plain string
        content = "".join(part.get("text", "") if isinstance(part, dict) else str(part) for part in content)
    return str(content or "").strip()


async def invoke_structured(
    llm: Any,
    messages: List[Any],
    schema: Type[ModelT],
    stage: str,
    timeout_s: Optional[float] = None,
) -> ModelT:
    content = await complete(llm, messages, stage, timeout_s)
    return parse_structured(content, schema)
