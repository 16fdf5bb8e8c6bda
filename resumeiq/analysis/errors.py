from __future__ import annotations


class AnalysisError(RuntimeError):
    def __init__(self, message: str, *, code: str = "analysis_error"):
        super().__init__(message)
        self.code = code


class ValidationError(AnalysisError):
    """Input rejected before any analysis ran. Always surfaced to the caller."""

    def __init__(self, message: str, *, code: str = "resume_too_short"):
        super().__init__(message, code=code)


class RemoteUnavailableError(AnalysisError):
    """The AI provider could not produce a usable reply. Recovered by the fallback engine."""

    def __init__(self, message: str, *, code: str = "llm_unavailable"):
        super().__init__(message, code=code)


class MalformedPayloadError(AnalysisError):
    def __init__(self, message: str, *, code: str = "invalid_json"):
        super().__init__(message, code=code)
