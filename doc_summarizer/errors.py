"""
Error types shared by the extraction and summarization services.

Every failure of an upload ends up as one of these, and the upload flow
turns them into the two user-facing messages below.
"""

UNSUPPORTED_FILE_TYPE_MESSAGE = "Unsupported file type."
PROCESSING_ERROR_MESSAGE = "Error processing the document."


class SummarizerError(Exception):
    """Base class for document summarizer failures."""


class UnsupportedFileType(SummarizerError):
    """The file extension has no extraction handler."""

    def __init__(self, extension: str):
        super().__init__(f"Unsupported file type: {extension or '<none>'}")
        self.extension = extension


class ExtractionError(SummarizerError):
    """A parsing library could not read the uploaded buffer."""


class CompletionError(SummarizerError):
    """The remote completion endpoint failed or returned something unusable."""
