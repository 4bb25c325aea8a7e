"""
Error types raised by the import pipeline
"""


class PaperNoteError(RuntimeError):
    """Base class for papernote failures."""


class UnsupportedSource(PaperNoteError):
    """Raised when a URL belongs to none of the supported sources."""

    def __init__(self, url: str):
        super().__init__(f"Unsupported paper URL: {url}")
        self.url = url


class UpstreamError(PaperNoteError):
    """Raised when an upstream API request or its response body fails."""


class MissingField(UpstreamError):
    """Raised when a structurally required field is absent from a response."""

    def __init__(self, field_name: str, source: str):
        super().__init__(f"{source} response is missing required field '{field_name}'")
        self.field_name = field_name
        self.source = source
