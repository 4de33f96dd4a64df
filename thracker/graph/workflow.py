from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union
from langgraph.graph import StateGraph, END
from ..state import AgentSettings, CopilotResult, DEFAULT_RESUME, JobDetails, PipelineState, Stage
from ..agents.analyzer import analyze
from ..agents.suggester import suggest
from ..agents.cover_letter import draft_cover_letter

logger = logging.getLogger(__name__)

StageFn = Callable[[PipelineState, Any, Optional[float]], Any]


def next_stage(state: Union[PipelineState, Mapping[str, Any]]) -> str:
    if not isinstance(state, PipelineState):
        state = PipelineState.model_validate(state)
    if state.error or state.current_stage == Stage.DONE:
        return END
    return state.current_stage.value


def build_graph(llm: Any, stage_timeout_s: Optional[float] = None) -> Any:
    """Compile Analyze -> Suggest -> DraftCoverLetter, leaving for END as soon as a stage reports an error."""

    def node(fn: StageFn) -> Callable[[PipelineState], Any]:
        async def run(state: PipelineState) -> Dict[str, Any]:
            return await fn(state, llm, stage_timeout_s)
        return run

    g = StateGraph(PipelineState)
    g.add_node(Stage.ANALYZE.value, node(analyze))
    g.add_node(Stage.SUGGEST.value, node(suggest))
    g.add_node(Stage.DRAFT_COVER_LETTER.value, node(draft_cover_letter))

    g.set_entry_point(Stage.ANALYZE.value)
    g.add_conditional_edges(Stage.ANALYZE.value, next_stage, {Stage.SUGGEST.value: Stage.SUGGEST.value, END: END})
    g.add_conditional_edges(
        Stage.SUGGEST.value,
        next_stage,
        {Stage.DRAFT_COVER_LETTER.value: Stage.DRAFT_COVER_LETTER.value, END: END},
    )
    g.add_edge(Stage.DRAFT_COVER_LETTER.value, END)

    return g.compile()


async def run_application_copilot(
    resume_text: str,
    base_cover_letter: Optional[str],
    job_description: str,
    job_details: Union[JobDetails, Mapping[str, Any]],
    agent_settings: Union[AgentSettings, Mapping[str, Any], None],
    *,
    llm: Any,
    stage_timeout_s: Optional[float] = None,
) -> CopilotResult:
    """Run the copilot pipeline once. Never raises: failures come back in ``error``."""
    try:
        state = PipelineState(
            resume_text=resume_text or DEFAULT_RESUME,
            job_description=job_description,
            job_details=job_details,
            base_cover_letter=base_cover_letter,
            agent_settings=agent_settings if agent_settings is not None else AgentSettings(),
            current_stage=Stage.ANALYZE,
        )
        app = build_graph(llm, stage_timeout_s)

        logger.info("Running application copilot for %s at %s", state.job_details.position, state.job_details.company)
        final = await app.ainvoke(state)
        # LangGraph app.ainvoke returns a plain dict; coerce into PipelineState for uniform handling
        if isinstance(final, dict):
            final = PipelineState.model_validate(final)

        if final.error:
            logger.warning("Application copilot stopped early: %s", final.error)
        else:
            logger.info("Application copilot completed")
        return CopilotResult.from_state(final)
    except Exception as e:
        logger.exception("Error running application copilot")
        return CopilotResult(error=f"Workflow error: {e}")
