from __future__ import annotations
from typing import Any, List
import logging
import re

from ..errors import EmptyResponse, GenerationFailed
from ..prompts import ARTIFACT_URLS, MANDATORY_SENTENCE, build_generation_prompt
from .job_extractor import JobExtraction

logger = logging.getLogger(__name__)

_BULLET = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+\S", re.MULTILINE)


def generate_cover_letter(extraction: JobExtraction, resume: str, client: Any, model: str | None = None) -> str:
    """Write the letter. The model's text is returned as-is; formatting is its job."""
    prompt = build_generation_prompt(extraction, resume)
    try:
        letter = client.complete(model, prompt.system_instruction, prompt.user_query)
    except EmptyResponse as e:
        raise GenerationFailed() from e
    logger.info("Generated letter for %s (%d chars)", extraction.company, len(letter))
    return letter


def check_letter(letter: str) -> List[str]:
    """List the formatting and content rules a generated letter misses.

    Read-only: the letter itself is never touched.
    """
    issues: List[str] = []
    for url in ARTIFACT_URLS.values():
        if url not in letter:
            issues.append(f"Missing artifact link: {url}")
    if MANDATORY_SENTENCE not in letter:
        issues.append("Mandatory front-end fidelity sentence is missing or altered.")
    if "**" in letter:
        issues.append("Contains markdown bolding (**).")
    if not _BULLET.search(letter):
        issues.append("No bulleted list of skill matches.")
    return issues
