"""Shared test configuration and fixtures."""

import io
import json
import os
import tempfile
import threading

# Keep the module-level app's scratch folder out of the working tree.
os.environ.setdefault("UPLOAD_FOLDER", os.path.join(tempfile.gettempdir(), "contract-analyzer-test-uploads"))

import docx
import pymupdf
import pytest

from constants import (
    AUTO_RENEWAL_CLAUSES, KEY_OBLIGATIONS, RECOMMENDATIONS,
    RENEWAL_DATES, RISKS_AND_PENALTIES,
)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

EMPLOYMENT_TEXT = (
    "This Employment Agreement between Employer and Employee includes "
    "confidentiality, termination, and liability clauses"
)
RECIPE_TEXT = (
    "Banana bread. Mash three ripe bananas, stir in melted butter, sugar and one egg. "
    "Fold in flour and baking soda, then bake for an hour at 175 degrees."
)

VALID_ANALYSIS = {
    "isContract": True,
    KEY_OBLIGATIONS: ["Supplier delivers monthly reports"],
    RENEWAL_DATES: [
        {"point": "Term ends 31 December 2025", "riskRating": "Medium", "reason": "Notice is due 60 days earlier"},
    ],
    RISKS_AND_PENALTIES: [
        {"point": "Late payment fee of 2% per month", "riskRating": "High", "reason": "Fees compound quickly"},
    ],
    AUTO_RENEWAL_CLAUSES: [
        {"point": "Renews for 12 months unless cancelled", "riskRating": "Low", "reason": "Cancellation window is generous"},
    ],
    RECOMMENDATIONS: ["Diary the renewal notice date"],
}


def make_docx(*paragraphs) -> bytes:
    document = docx.Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def make_pdf(*lines) -> bytes:
    document = pymupdf.open()
    page = document.new_page()
    page.insert_text((72, 72), "\n".join(lines), fontsize=11)
    data = document.tobytes()
    document.close()
    return data


class FakeLLM:
    """Stands in for AnalysisLLM: records prompts, replays a response or raises."""

    def __init__(self, response=None, error=None):
        self.response = json.dumps(VALID_ANALYSIS) if response is None else response
        self.error = error
        self.prompts = []
        self._lock = threading.Lock()

    @property
    def calls(self):
        return len(self.prompts)

    def generate(self, prompt):
        with self._lock:
            self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


class BrokenPdfBackend:
    """PDF backend whose decoder always throws, like a password-protected file."""

    available = True

    def __init__(self):
        self.seen_paths = []

    def extract(self, path):
        self.seen_paths.append((path, os.path.exists(path)))
        raise RuntimeError("cannot decrypt document")


@pytest.fixture()
def upload_folder(tmp_path):
    folder = tmp_path / "uploads"
    folder.mkdir()
    return folder


@pytest.fixture()
def fake_llm():
    return FakeLLM()


@pytest.fixture()
def employment_docx():
    return make_docx(EMPLOYMENT_TEXT)


@pytest.fixture()
def recipe_docx():
    return make_docx(RECIPE_TEXT)
