"""Exception types raised by the analysis pipeline."""


class ContractAnalyzerError(Exception):
    """Base class for failures that map to a caller-facing error response."""
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class MissingInput(ContractAnalyzerError):
    """Raised when the request carries no document."""
    status_code = 400


class UnsupportedMediaType(ContractAnalyzerError):
    """Raised when the document is not a PDF, DOCX or DOC file."""
    status_code = 400


class ExtractionFailure(ContractAnalyzerError):
    """Raised when text cannot be extracted from the document."""
    status_code = 400


class UpstreamUnavailable(ContractAnalyzerError):
    """Raised when the LLM service cannot be reached or rejects the call."""
    status_code = 424


class UpstreamTimeout(ContractAnalyzerError):
    """Raised when the LLM service does not answer in time."""
    status_code = 504
