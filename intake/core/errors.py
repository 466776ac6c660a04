"""Error taxonomy for the extraction pipeline.

Every pipeline failure is an ExtractionError carrying the stage and backend
it came from (for server-side logs) and a client-safe public message (for the
response body). Upstream payloads never reach public_message.
"""
from typing import Optional


class ConfigurationError(RuntimeError):
    """Required configuration is missing or invalid. Raised at startup only."""


class ExtractionError(Exception):
    """Base class for all extraction pipeline failures."""

    status_code: int = 500
    public_message: str = "Failed to process request"
    stage: str = "unknown"

    def __init__(self, message: str, *, stage: Optional[str] = None, backend: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage
        self.backend = backend


class InvalidInputError(ExtractionError):
    """Neither or both of url/image supplied, or the supplied value is unusable."""

    status_code = 400
    stage = "input"

    @property
    def public_message(self) -> str:
        return self.message


class NoTextExtractedError(ExtractionError):
    """Acquisition worked but the source contained no readable text."""

    status_code = 400
    public_message = "No text extracted"
    stage = "acquisition"


class MalformedModelResponseError(ExtractionError):
    """Language model output could not be parsed as JSON."""

    status_code = 500
    public_message = "Error parsing response from language model"
    stage = "parsing"

    def __init__(self, message: str, raw_text: str = "", **kwargs):
        kwargs.setdefault("backend", "llm")
        super().__init__(message, **kwargs)
        self.raw_text = raw_text


class UpstreamError(ExtractionError):
    """An external backend failed."""

    status_code = 502
    public_message = "Upstream service failed"


class AcquisitionError(UpstreamError):
    """The rendering context or the OCR backend failed to produce text."""

    public_message = "Failed to acquire text from source"
    stage = "acquisition"


class ModelBackendError(UpstreamError):
    """The language model completion call failed."""

    public_message = "Language model request failed"
    stage = "extraction"


class UpstreamTimeoutError(UpstreamError):
    """An external backend exceeded its time budget."""

    status_code = 504
    public_message = "Upstream service timed out"


class AcquisitionTimeoutError(UpstreamTimeoutError, AcquisitionError):
    """Navigation or OCR did not finish within its time budget."""

    status_code = 504
    public_message = "Upstream service timed out"
    stage = "acquisition"
