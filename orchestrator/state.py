from __future__ import annotations
from enum import Enum
from typing import Optional
from pydantic import BaseModel

from .agents.job_extractor import JobExtraction


class PipelineStatus(str, Enum):
    IDLE = "IDLE"
    EXTRACTING = "EXTRACTING"
    GENERATING = "GENERATING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


BUSY_STATUSES = (PipelineStatus.EXTRACTING, PipelineStatus.GENERATING)


class PipelineInput(BaseModel):
    resume: str = ""
    job_description: str = ""

    def is_complete(self) -> bool:
        return bool(self.resume.strip()) and bool(self.job_description.strip())


class PipelineState(BaseModel):
    # Input
    resume: str = ""
    job_description: str = ""

    # Intermediate
    status: PipelineStatus = PipelineStatus.IDLE
    extraction: Optional[JobExtraction] = None

    # Output
    letter: Optional[str] = None
    error_message: Optional[str] = None
    error_kind: Optional[str] = None

    @property
    def is_busy(self) -> bool:
        return self.status in BUSY_STATUSES
