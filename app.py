from __future__ import annotations
import logging
import os
import re
import unicodedata
import streamlit as st
from dotenv import load_dotenv

from orchestrator.state import PipelineState, PipelineStatus
from orchestrator.graph.workflow import PipelineController
from orchestrator.llm_provider import normalize_provider
from orchestrator.agents.letter_writer import check_letter

DEMO_RESUME = (
    "I have 6 years of Python development, focusing on MLOps pipelines using Kubernetes and GCP. "
    "I successfully led a project to build and deploy a production RAG system last year. "
    "I pride myself on clear documentation and cross-team communication."
)
DEMO_JOB_DESCRIPTION = (
    "Senior Software Engineer, ML Platform at Innovatech Solutions. We are looking for an engineer with "
    "5+ years of Python experience, specializing in MLOps and cloud infrastructure. Key skills include: "
    "Kubernetes for deployment, expertise in building and maintaining Retrieval-Augmented Generation (RAG) "
    "systems, and strong collaboration skills."
)


def slugify(value: str) -> str:
    value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    value = re.sub(r"[^a-zA-Z0-9-]+", "-", value).strip("-")
    value = re.sub(r"-+", "-", value)
    return value.lower() or "cover-letter"


def render_status(slot, state: PipelineState) -> None:
    if state.status == PipelineStatus.EXTRACTING:
        slot.warning("**Step 1/2:** Extracting company and key requirements...")
    elif state.status == PipelineStatus.GENERATING:
        slot.info("**Step 2/2:** Generating tailored cover letter...")
    elif state.status == PipelineStatus.ERROR:
        slot.error(f"**Error**\n\n{state.error_message}")
    elif state.status == PipelineStatus.SUCCESS:
        slot.success("✅ **Success!** Cover letter generated successfully.")
    else:
        slot.empty()


def render_letter(state: PipelineState) -> None:
    if not state.letter:
        return
    st.subheader("Generated Cover Letter")
    # st.code carries the copy-to-clipboard button
    st.code(state.letter, language=None, wrap_lines=True)
    company = state.extraction.company if state.extraction else ""
    st.download_button(
        label="Download as .txt",
        data=state.letter.encode("utf-8"),
        file_name=f"cover-letter-{slugify(company)}.txt",
        mime="text/plain",
    )
    issues = check_letter(state.letter)
    if issues:
        st.info("📋 **Letter check notes:**\n" + "\n".join([f"• {issue}" for issue in issues]))


def _init_session() -> None:
    if "controller" not in st.session_state:
        provider = normalize_provider(None)
        st.session_state.controller = PipelineController(provider=provider)
        st.session_state.resume = DEMO_RESUME
        st.session_state.job_description = DEMO_JOB_DESCRIPTION
        st.session_state.running = False


def _request_run() -> None:
    st.session_state.running = True


def main():
    load_dotenv()
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    st.set_page_config(page_title="Orchestrator Web", page_icon="🧪", layout="wide")
    st.title("Orchestrator Web")
    st.caption("Extraction → Generation Chain")
    _init_session()
    controller: PipelineController = st.session_state.controller

    col_resume, col_job = st.columns(2)
    with col_resume:
        st.subheader("1. Resume / Summary")
        st.text_area(
            "Paste your relevant work history and skills.",
            key="resume",
            height=260,
            placeholder="E.g., 5 years experience in Python, specializing in RAG systems...",
        )
    with col_job:
        st.subheader("2. Job Description")
        st.text_area(
            "Paste the full job posting text.",
            key="job_description",
            height=260,
            placeholder="E.g., We are looking for a Senior Software Engineer with expertise in...",
        )

    running = st.session_state.running
    st.button(
        "Processing..." if running else "Generate Cover Letter",
        type="primary",
        disabled=running,
        on_click=_request_run,
    )
    status_slot = st.empty()

    if running:
        try:
            for state in controller.run(st.session_state.resume, st.session_state.job_description):
                render_status(status_slot, state)
        finally:
            st.session_state.running = False
        st.rerun()

    render_status(status_slot, controller.state)
    render_letter(controller.state)


if __name__ == "__main__":
    main()
