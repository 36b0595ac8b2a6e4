from __future__ import annotations


class PipelineError(Exception):
    """Base for failures the pipeline knows how to describe."""

    default_message = "An unexpected error occurred."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ValidationError(PipelineError):
    default_message = "Please provide both your experience and the job description."


class EmptyResponse(PipelineError):
    default_message = "The model returned an empty response."


class ExtractionFailed(PipelineError):
    default_message = "Failed to extract data from the job description."


class GenerationFailed(PipelineError):
    default_message = "Failed to generate the cover letter."
