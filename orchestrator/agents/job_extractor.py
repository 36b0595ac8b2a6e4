from __future__ import annotations
from typing import Any, List
import json
import logging
from pydantic import BaseModel, ValidationError as SchemaError, field_validator

from ..errors import EmptyResponse, ExtractionFailed
from ..prompts import REQUIREMENT_COUNT, build_extraction_prompt

logger = logging.getLogger(__name__)


class JobExtraction(BaseModel):
    company: str
    requirements: List[str]

    @field_validator("company")
    @classmethod
    def _company_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("company is empty")
        return v

    @field_validator("requirements")
    @classmethod
    def _five_requirements(cls, v: List[str]) -> List[str]:
        items = [r.strip() for r in v]
        if len(items) != REQUIREMENT_COUNT:
            raise ValueError(f"expected {REQUIREMENT_COUNT} requirements, got {len(items)}")
        if not all(items):
            raise ValueError("requirements contain an empty entry")
        return items


def parse_job_extraction(text: str) -> JobExtraction:
    """Parse a structured-mode reply. The reply must already be bare JSON."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionFailed(f"{ExtractionFailed.default_message} The response was not valid JSON ({e.msg}).") from e
    if not isinstance(data, dict):
        raise ExtractionFailed(f"{ExtractionFailed.default_message} Expected a JSON object.")
    try:
        return JobExtraction.model_validate(data)
    except SchemaError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "response" for err in e.errors())
        raise ExtractionFailed(f"{ExtractionFailed.default_message} Invalid fields: {fields}.") from e


def extract_job_details(job_description: str, client: Any, model: str | None = None) -> JobExtraction:
    prompt = build_extraction_prompt(job_description)
    try:
        text = client.complete(model, prompt.system_instruction, prompt.user_query, schema=prompt.output_schema)
    except EmptyResponse as e:
        raise ExtractionFailed() from e
    extraction = parse_job_extraction(text)
    logger.info("Extracted %d requirements for %s", len(extraction.requirements), extraction.company)
    return extraction
