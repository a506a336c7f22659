"""Text extraction for uploaded office documents.

Dispatch is a static extension table; every handler is a thin call into a
parsing library and turns whatever that library raises into ExtractionError.
"""
from __future__ import annotations

import io
import logging
import zipfile
from typing import Callable, Dict

import pandas as pd
import PyPDF2
from docx import Document
from docx.oxml.ns import qn as word_qn
from pptx import Presentation
from pptx.oxml.ns import qn as drawing_qn

from doc_summarizer.errors import ExtractionError, UnsupportedFileType

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = ("pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx")

WORD_DOCUMENT_PART = "word/document.xml"
PRESENTATION_PART = "ppt/presentation.xml"


def extract_pdf_text(data: bytes) -> str:
    try:
        reader = PyPDF2.PdfReader(io.BytesIO(data))
        parts = [(page.extract_text() or "") + "\n" for page in reader.pages]
    except Exception as e:
        raise ExtractionError(f"Could not read PDF: {e}") from e
    return "".join(parts)


def _word_text(data: bytes) -> str:
    try:
        document = Document(io.BytesIO(data))
        runs = document.element.body.iter(word_qn("w:t"))
        return "".join(f"{node.text or ''} " for node in runs)
    except Exception as e:
        raise ExtractionError(f"Could not read Word document: {e}") from e


def _presentation_text(data: bytes) -> str:
    try:
        presentation = Presentation(io.BytesIO(data))
        parts = []
        for slide in presentation.slides:
            for node in slide.element.iter(drawing_qn("a:t")):
                parts.append(f"{node.text or ''} ")
        return "".join(parts)
    except Exception as e:
        raise ExtractionError(f"Could not read presentation: {e}") from e


def extract_office_text(data: bytes) -> str:
    """Word and PowerPoint share one path: open the zip package, read its text runs.

    Legacy binary .doc/.ppt files are not zip packages and fail here.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            names = set(archive.namelist())
    except zipfile.BadZipFile as e:
        raise ExtractionError("Not an Office Open XML package") from e

    if WORD_DOCUMENT_PART in names:
        return _word_text(data)
    if PRESENTATION_PART in names:
        return _presentation_text(data)
    raise ExtractionError("Office package has no document or presentation part")


def _cell_text(value) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value)


def _row_text(row) -> str:
    cells = [_cell_text(v) for v in row]
    while cells and cells[-1] == "":
        cells.pop()
    return ",".join(cells)


def extract_spreadsheet_text(data: bytes) -> str:
    """One line per non-empty sheet: cells joined by ',', rows by a space.

    Each row stops at its last non-empty cell.
    """
    try:
        sheets = pd.read_excel(io.BytesIO(data), sheet_name=None, header=None, dtype=object)
    except Exception as e:
        raise ExtractionError(f"Could not read spreadsheet: {e}") from e

    lines = []
    for name, frame in sheets.items():
        frame = frame.dropna(how="all")
        if frame.empty:
            logger.debug("sheet %r is empty, skipping", name)
            continue
        # pandas starts every row at column A; text starts at the first used column
        used = frame.columns[frame.notna().any()]
        frame = frame.loc[:, used[0]:]
        rows = [_row_text(row) for row in frame.itertuples(index=False, name=None)]
        lines.append(" ".join(rows) + "\n")
    return "".join(lines)


EXTRACTORS: Dict[str, Callable[[bytes], str]] = {
    "pdf": extract_pdf_text,
    "doc": extract_office_text,
    "docx": extract_office_text,
    "ppt": extract_office_text,
    "pptx": extract_office_text,
    "xls": extract_spreadsheet_text,
    "xlsx": extract_spreadsheet_text,
}


def file_extension(filename: str) -> str:
    return (filename or "").rsplit(".", 1)[-1].lower()


def accept_attribute() -> str:
    """Value for the file input's ``accept`` attribute."""
    return ",".join(f".{ext}" for ext in ALLOWED_EXTENSIONS)


def select_extractor(filename: str) -> Callable[[bytes], str]:
    ext = file_extension(filename)
    handler = EXTRACTORS.get(ext) if ext in ALLOWED_EXTENSIONS else None
    if handler is None:
        raise UnsupportedFileType(ext)
    return handler
