"""
Text extraction for uploaded PDF and Word documents.
"""
import os
import logging
import zipfile
from dataclasses import dataclass
from enum import Enum

import docx
from docx.opc.exceptions import PackageNotFoundError
from lxml import etree

from errors import ExtractionFailure, UnsupportedMediaType

logger = logging.getLogger(__name__)

PDF_PARSE_FAILED = "Failed to parse PDF. Please try a DOCX file or ensure the PDF is not password protected."
PDF_UNAVAILABLE = "PDF parsing is currently unavailable. Please upload a DOCX file instead."
WORD_PARSE_FAILED = "Failed to parse Word document. Please upload a valid .docx file."
NO_TEXT_FOUND = "No text could be extracted from the document."


class MediaType(str, Enum):
    PDF = "application/pdf"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    DOC = "application/msword"
    UNSUPPORTED = "unsupported"

    @classmethod
    def detect(cls, mimetype, filename=None):
        """
        Resolve the media type of an upload.

        The declared content type wins when it is one we know; generic or
        missing content types fall back to the filename extension.
        """
        for media_type in (cls.PDF, cls.DOCX, cls.DOC):
            if mimetype == media_type.value:
                return media_type
        if mimetype and mimetype != "application/octet-stream":
            return cls.UNSUPPORTED
        ext = os.path.splitext((filename or "").lower())[1]
        return _EXTENSIONS.get(ext, cls.UNSUPPORTED)


_EXTENSIONS = {
    ".pdf": MediaType.PDF,
    ".docx": MediaType.DOCX,
    ".doc": MediaType.DOC,
}


@dataclass(frozen=True)
class Document:
    """An uploaded file saved to the scratch folder for the span of one request."""
    path: str
    media_type: MediaType
    filename: str = ""


class PdfBackend:
    """
    PDF decoder resolved once at startup.

    Built without a loader class when the PyMuPDF stack could not be
    initialised; every extraction then fails with a message pointing the
    caller at DOCX instead.
    """

    def __init__(self, loader_cls=None):
        self._loader_cls = loader_cls

    @property
    def available(self):
        return self._loader_cls is not None

    def extract(self, path):
        if not self.available:
            raise ExtractionFailure(PDF_UNAVAILABLE)
        documents = self._loader_cls(path).load()
        return " ".join(doc.page_content for doc in documents)


def init_pdf_backend():
    """Check the PyMuPDF stack once and return a backend for the lifetime of the app."""
    try:
        import pymupdf  # noqa: F401
        from langchain_community.document_loaders import PyMuPDFLoader
    except ImportError as e:
        logger.warning(f"PDF backend unavailable, PDF uploads will be rejected: {str(e)}")
        return PdfBackend()
    logger.info("PDF backend initialized (PyMuPDF)")
    return PdfBackend(PyMuPDFLoader)


def extract_pdf_text(path, backend):
    try:
        text = backend.extract(path)
    except ExtractionFailure:
        raise
    except Exception as e:
        logger.error(f"PDF parsing error for {path}: {str(e)}")
        raise ExtractionFailure(PDF_PARSE_FAILED) from e
    if not text or not text.strip():
        raise ExtractionFailure(PDF_UNAVAILABLE)
    return text


def extract_word_text(path):
    """Extract text from a Word file, paragraphs first and then table cells."""
    try:
        document = docx.Document(path)
    except (PackageNotFoundError, zipfile.BadZipFile, etree.XMLSyntaxError, KeyError, ValueError) as e:
        logger.error(f"Word parsing error for {path}: {str(e)}")
        raise ExtractionFailure(WORD_PARSE_FAILED) from e

    parts = [para.text.strip() for para in document.paragraphs if para.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                parts.append(" | ".join(cells))
    return "\n".join(parts)


def extract_text(document, pdf_backend):
    """
    Convert a saved upload into plain text.

    Args:
        document: Document saved in the scratch folder
        pdf_backend: PdfBackend initialised at startup

    Returns:
        str: Non-empty extracted text

    Raises:
        UnsupportedMediaType: for anything other than PDF, DOCX or DOC
        ExtractionFailure: when the file cannot be decoded or holds no text
    """
    if document.media_type == MediaType.PDF:
        text = extract_pdf_text(document.path, pdf_backend)
    elif document.media_type in (MediaType.DOCX, MediaType.DOC):
        text = extract_word_text(document.path)
    else:
        raise UnsupportedMediaType("Unsupported file type. Please upload a PDF or DOCX file.")

    if not text.strip():
        raise ExtractionFailure(NO_TEXT_FOUND)
    logger.info(f"Extracted {len(text)} characters from {document.filename or document.path}")
    return text
