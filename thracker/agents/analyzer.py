from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional
from langchain_core.messages import HumanMessage, SystemMessage
from ..errors import CopilotError
from ..parsing import AnalysisResponse
from ..state import PipelineState, Stage
from .prompts import PERSONA, directives_block, invoke_structured, job_details_block, resume_and_job_block

logger = logging.getLogger(__name__)


def build_analysis_messages(state: PipelineState) -> List[Any]:
    system = SystemMessage(content=(
        f"{PERSONA}\n"
        "Analyze the provided Resume against the Job Description and calculate a compatibility score (0-100).\n"
        "Provide a detailed analysis of how well the resume matches the job requirements.\n\n"
        f"{directives_block(state.agent_settings)}\n\n"
        "Your response should be a JSON object with:\n"
        "- compatibilityScore (number between 0-100)\n"
        "- analysis (detailed text explaining the match)\n"
        "Output ONLY JSON. No commentary, no markdown."
    ))
    human = HumanMessage(content=(
        resume_and_job_block(state.resume_text, state.job_description)
        + "\n\n"
        + job_details_block(state.job_details)
    ))
    return [system, human]


async def analyze(state: PipelineState, llm: Any, timeout_s: Optional[float] = None) -> Dict[str, Any]:
    messages = build_analysis_messages(state)
    try:
        resp = await invoke_structured(llm, messages, AnalysisResponse, Stage.ANALYZE.value, timeout_s)
    except CopilotError as e:
        logger.warning("Analyze stage failed: %s", e)
        return {"error": f"Failed to analyze resume: {e}", "current_stage": Stage.DONE}
    return {
        "compatibility_score": resp.compatibility_score,
        "analysis_text": resp.analysis,
        "current_stage": Stage.SUGGEST,
    }
