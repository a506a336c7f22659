"""Upload -> extract -> truncate -> complete.

All failure paths end in the same place: an empty summary and one of two
fixed messages. The underlying error only goes to the log.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Hashable, Optional

from doc_summarizer.errors import (
    PROCESSING_ERROR_MESSAGE,
    UNSUPPORTED_FILE_TYPE_MESSAGE,
    ExtractionError,
    UnsupportedFileType,
)
from doc_summarizer.services.completion import request_completion
from doc_summarizer.services.extraction import select_extractor

logger = logging.getLogger(__name__)

MAX_DOCUMENT_CHARS = 5000

PROMPT_TEMPLATE = (
    "Please provide an accurate summary of the following document in less than 100 words:\n\n{text}"
)


@dataclass
class UploadOutcome:
    file_name: str
    summary: str = ""
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error

    @property
    def unsupported(self) -> bool:
        return self.error == UNSUPPORTED_FILE_TYPE_MESSAGE


def truncate_text(text: str, limit: int = MAX_DOCUMENT_CHARS) -> str:
    return (text or "")[:limit]


def build_prompt(text: str) -> str:
    return PROMPT_TEMPLATE.format(text=truncate_text(text))


def summarize_text(text: str, complete: Optional[Callable[..., str]] = None) -> str:
    complete = complete or request_completion
    return complete(build_prompt(text), response_type="text")


def summarize_upload(filename: str, data: bytes, complete: Optional[Callable[..., str]] = None) -> UploadOutcome:
    outcome = UploadOutcome(file_name=filename or "")

    try:
        extractor = select_extractor(filename)
    except UnsupportedFileType as e:
        logger.info("rejected %r: %s", filename, e)
        outcome.error = UNSUPPORTED_FILE_TYPE_MESSAGE
        return outcome

    try:
        text = extractor(data)
        if not (text or "").strip():
            raise ExtractionError("Could not extract text from the document.")
        outcome.summary = summarize_text(text, complete=complete)
    except Exception:
        logger.exception("Error processing file %r", filename)
        outcome.summary = ""
        outcome.error = PROCESSING_ERROR_MESSAGE

    return outcome


class InFlightUploads:
    """Tracks which users have an upload running; a second one is refused."""

    def __init__(self):
        self._lock = threading.Lock()
        self._active = set()

    def acquire(self, key: Hashable) -> bool:
        with self._lock:
            if key in self._active:
                return False
            self._active.add(key)
            return True

    def release(self, key: Hashable) -> None:
        with self._lock:
            self._active.discard(key)
