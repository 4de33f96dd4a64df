from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional
from langchain_core.messages import HumanMessage, SystemMessage
from ..errors import CopilotError
from ..parsing import SuggestionsResponse
from ..state import PipelineState, Stage
from .prompts import PERSONA, directives_block, invoke_structured, job_details_block, resume_and_job_block

logger = logging.getLogger(__name__)


def build_suggestion_messages(state: PipelineState) -> List[Any]:
    system = SystemMessage(content=(
        f"{PERSONA}\n"
        "Generate specific suggestions to improve the resume for this job application.\n\n"
        f"{directives_block(state.agent_settings)}\n\n"
        "Your response should be a JSON object with:\n"
        "- suggestions: an array of objects each containing:\n"
        "  - original: a verbatim quote of specific text from the resume\n"
        "  - suggestion: an improved version of that text\n"
        "Output ONLY JSON. No commentary, no markdown."
    ))
    human = HumanMessage(content=(
        resume_and_job_block(state.resume_text, state.job_description)
        + "\n\n"
        + job_details_block(state.job_details, full=False)
        + f"\n\n# Compatibility Score\n{state.compatibility_score:g}"
        + f"\n\n# Analysis\n{state.analysis_text}"
        + "\n\nGenerate 3-5 specific suggestions to improve this resume for the job."
    ))
    return [system, human]


async def suggest(state: PipelineState, llm: Any, timeout_s: Optional[float] = None) -> Dict[str, Any]:
    # The number of pairs is requested, not enforced: zero is a valid answer.
    messages = build_suggestion_messages(state)
    try:
        resp = await invoke_structured(llm, messages, SuggestionsResponse, Stage.SUGGEST.value, timeout_s)
    except CopilotError as e:
        logger.warning("Suggest stage failed: %s", e)
        return {"error": f"Failed to generate suggestions: {e}", "current_stage": Stage.DONE}
    return {
        "suggestions": resp.suggestions,
        "current_stage": Stage.DRAFT_COVER_LETTER,
    }
