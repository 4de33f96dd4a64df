from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional
from langchain_core.messages import HumanMessage, SystemMessage
from ..errors import CopilotError
from ..parsing import CoverLetterResponse
from ..state import PipelineState, Stage
from .prompts import PERSONA, directives_block, invoke_structured, job_details_block, resume_and_job_block

logger = logging.getLogger(__name__)

BASE_LETTER_RULE = (
    "A base cover letter is provided. You MUST use it as the foundation. "
    "Only modify, add, or remove sentences as needed to tailor it to this job. "
    "Do NOT rewrite from scratch unless absolutely necessary."
)

BASE_LETTER_EDIT = (
    "Edit the base cover letter above to best fit the job, but keep as much of the "
    "original structure and content as possible. Only change what is needed."
)


def build_cover_letter_messages(state: PipelineState) -> List[Any]:
    """Assemble the drafting prompt.

    Without a base letter the model writes from scratch. With one, both messages
    change: the system message forbids a rewrite and the human message carries the
    base letter verbatim together with an edit-in-place instruction.
    """
    base = state.base_cover_letter

    system_parts = [
        f"{PERSONA}\nGenerate a tailored cover letter for this job application.",
        directives_block(state.agent_settings),
    ]
    if base:
        system_parts.append(BASE_LETTER_RULE)
    system_parts.append(
        "Your response should be a JSON object with:\n"
        "- coverLetter: the complete cover letter text\n"
        "Output ONLY JSON. No commentary, no markdown."
    )

    user_parts = [
        resume_and_job_block(state.resume_text, state.job_description),
        job_details_block(state.job_details),
    ]
    if base:
        user_parts.append(f"# Base Cover Letter\n{base}\n\n{BASE_LETTER_EDIT}")
    user_parts.append("Generate a tailored cover letter for this job application.")

    return [
        SystemMessage(content="\n\n".join(system_parts)),
        HumanMessage(content="\n\n".join(user_parts)),
    ]


async def draft_cover_letter(state: PipelineState, llm: Any, timeout_s: Optional[float] = None) -> Dict[str, Any]:
    messages = build_cover_letter_messages(state)
    try:
        resp = await invoke_structured(llm, messages, CoverLetterResponse, Stage.DRAFT_COVER_LETTER.value, timeout_s)
    except CopilotError as e:
        logger.warning("Cover letter stage failed: %s", e)
        return {"error": f"Failed to generate cover letter: {e}", "current_stage": Stage.DONE}
    return {"cover_letter": resp.cover_letter, "current_stage": Stage.DONE}
