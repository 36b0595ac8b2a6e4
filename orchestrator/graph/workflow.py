from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Iterator, Optional
from langgraph.graph import StateGraph, END

from ..errors import PipelineError, ValidationError
from ..state import PipelineInput, PipelineState, PipelineStatus
from ..llm_provider import get_llm
from ..agents.job_extractor import extract_job_details
from ..agents.letter_writer import generate_cover_letter

logger = logging.getLogger(__name__)


def _failure(exc: Exception) -> Dict[str, Any]:
    if isinstance(exc, PipelineError):
        logger.warning("Pipeline failed: %s: %s", type(exc).__name__, exc)
    else:
        logger.exception("Unexpected pipeline failure")
    return {
        "status": PipelineStatus.ERROR,
        "error_message": str(exc) or PipelineError.default_message,
        "error_kind": type(exc).__name__,
    }


def _route(next_node: str) -> Callable[[PipelineState], str]:
    def route(state: PipelineState) -> str:
        return END if state.status == PipelineStatus.ERROR else next_node
    return route


def build_graph(client_factory: Callable[[], Any], model: str | None = None):
    """Compile the extraction -> generation state machine.

    ``client_factory`` is called on the first run that reaches extraction; the
    client is then reused for every later run.
    """
    client_holder: Dict[str, Any] = {"client": None}

    def validate_node(state: PipelineState) -> Dict[str, Any]:
        cleared = {"extraction": None, "letter": None, "error_message": None, "error_kind": None}
        if not PipelineInput(resume=state.resume, job_description=state.job_description).is_complete():
            return {**cleared, **_failure(ValidationError())}
        logger.info("Run started: extracting job details")
        return {**cleared, "status": PipelineStatus.EXTRACTING}

    def extract_node(state: PipelineState) -> Dict[str, Any]:
        try:
            if client_holder["client"] is None:
                client_holder["client"] = client_factory()
            extraction = extract_job_details(state.job_description, client_holder["client"], model)
        except Exception as e:
            return _failure(e)
        logger.info("Extraction done: generating letter")
        return {"extraction": extraction, "status": PipelineStatus.GENERATING}

    def generate_node(state: PipelineState) -> Dict[str, Any]:
        if state.extraction is None:
            return _failure(PipelineError("Job details are missing; extraction did not complete."))
        try:
            letter = generate_cover_letter(state.extraction, state.resume, client_holder["client"], model)
        except Exception as e:
            return _failure(e)
        logger.info("Run finished successfully")
        return {"letter": letter, "status": PipelineStatus.SUCCESS}

    g = StateGraph(PipelineState)
    g.add_node("validate", validate_node)
    g.add_node("extract", extract_node)
    g.add_node("generate", generate_node)

    g.set_entry_point("validate")
    g.add_conditional_edges("validate", _route("extract"))
    g.add_conditional_edges("extract", _route("generate"))
    g.add_edge("generate", END)

    return g.compile()


class PipelineController:
    """Owns the pipeline state and drives one run at a time.

    Renderers read ``state``; only the controller replaces it. Re-entrant
    triggers are the caller's concern: a second ``run`` while one is in
    flight is not guarded against.
    """

    def __init__(self, client: Any = None, provider: str | None = None, model: str | None = None,
                 on_change: Optional[Callable[[PipelineState], None]] = None):
        self.state = PipelineState()
        self.on_change = on_change
        if client is not None:
            factory: Callable[[], Any] = lambda: client
        else:
            factory = lambda: get_llm(provider=provider, model=model)
        self._app = build_graph(factory, model)

    def _set_state(self, state: PipelineState) -> PipelineState:
        self.state = state
        if self.on_change is not None:
            self.on_change(state)
        return state

    def run(self, resume: str, job_description: str) -> Iterator[PipelineState]:
        """Yield each state the run enters, ending with SUCCESS or ERROR."""
        state = self.state.model_copy(update={"resume": resume, "job_description": job_description})
        for chunk in self._app.stream(state, stream_mode="updates"):
            for update in chunk.values():
                if not update:
                    continue
                state = state.model_copy(update=update)
                yield self._set_state(state)

    def start(self, resume: str, job_description: str) -> PipelineState:
        for _ in self.run(resume, job_description):
            pass
        return self.state
