from __future__ import annotations
import argparse
import logging
import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from orchestrator.state import PipelineState, PipelineStatus
from orchestrator.graph.workflow import PipelineController
from orchestrator.llm_provider import normalize_provider
from orchestrator.utils import load_document

STEP_LABELS = {
    PipelineStatus.EXTRACTING: "Step 1/2: Extracting company and key requirements...",
    PipelineStatus.GENERATING: "Step 2/2: Generating tailored cover letter...",
}


def _read_input(path: str | None, text: str | None, label: str) -> str:
    if path and text:
        raise SystemExit(f"Use either --{label} or --{label}-text, not both.")
    if path:
        return load_document(path)
    return text or ""


def main():
    load_dotenv()  # load .env if exists
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    parser = argparse.ArgumentParser(description="Orchestrator: job description extraction -> cover letter generation")
    parser.add_argument("--resume", help="Path to resume/summary (.txt, .md or .pdf)")
    parser.add_argument("--resume-text", help="Resume/summary as raw text")
    parser.add_argument("--job", help="Path to job description (.txt, .md or .pdf)")
    parser.add_argument("--job-text", help="Job description as raw text")
    parser.add_argument("--out", default="cover_letter.txt", help="Output path for the letter")
    parser.add_argument("--provider", default=None, choices=["gemini", "mistral"], help="LLM provider (default: LLM_PROVIDER or gemini)")
    parser.add_argument("--model", default=None, help="Model name override")
    args = parser.parse_args()

    resume = _read_input(args.resume, args.resume_text, "resume")
    job_description = _read_input(args.job, args.job_text, "job")

    controller = PipelineController(provider=normalize_provider(args.provider), model=args.model)
    final: PipelineState = controller.state
    for final in controller.run(resume, job_description):
        if final.status in STEP_LABELS:
            print(STEP_LABELS[final.status])

    if final.status != PipelineStatus.SUCCESS or not final.letter:
        print(f"[ERR] {final.error_message or 'No letter produced.'}")
        sys.exit(1)

    if final.extraction:
        print(f"Company: {final.extraction.company}")
        print("Requirements: " + ", ".join(final.extraction.requirements))
    out_path = Path(args.out)
    out_path.write_text(final.letter, encoding="utf-8")
    print(f"[OK] Cover letter written to {out_path}")


if __name__ == "__main__":
    main()
