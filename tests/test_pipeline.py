"""
Tests for the pipeline orchestrator and scratch file handling.
"""

import io
import json

import pytest
from werkzeug.datastructures import FileStorage

from conftest import (
    DOCX_MIME, EMPLOYMENT_TEXT, PDF_MIME, RECIPE_TEXT, VALID_ANALYSIS,
    BrokenPdfBackend, FakeLLM, make_docx,
)
from constants import ANALYSIS_SECTIONS, REJECTION_MESSAGE
from document_loader import init_pdf_backend
from errors import ExtractionFailure, MissingInput, UnsupportedMediaType, UpstreamTimeout
from pipeline import ContractAnalysisPipeline, scratch_document


def _upload(data, filename, content_type):
    return FileStorage(stream=io.BytesIO(data), filename=filename, content_type=content_type)


@pytest.fixture()
def make_pipeline(upload_folder):
    def factory(llm=None, pdf_backend=None, **kwargs):
        return ContractAnalysisPipeline(
            pdf_backend=pdf_backend or init_pdf_backend(),
            llm=llm or FakeLLM(),
            upload_folder=str(upload_folder),
            **kwargs,
        )
    return factory


class TestScratchDocument:
    def test_file_exists_inside_block_only(self, upload_folder):
        upload = _upload(b"data", "../../etc/contract.docx", DOCX_MIME)
        with scratch_document(upload, str(upload_folder)) as document:
            assert document.path.startswith(str(upload_folder))
            with open(document.path, "rb") as saved:
                assert saved.read() == b"data"
        assert list(upload_folder.iterdir()) == []

    def test_removed_when_block_raises(self, upload_folder):
        upload = _upload(b"data", "contract.docx", DOCX_MIME)
        with pytest.raises(RuntimeError):
            with scratch_document(upload, str(upload_folder)):
                raise RuntimeError("aborted")
        assert list(upload_folder.iterdir()) == []

    def test_unique_names(self, upload_folder):
        first = _upload(b"1", "same.docx", DOCX_MIME)
        second = _upload(b"2", "same.docx", DOCX_MIME)
        with scratch_document(first, str(upload_folder)) as a, scratch_document(second, str(upload_folder)) as b:
            assert a.path != b.path


class TestAnalyzeUpload:
    def test_contract_runs_llm(self, make_pipeline, upload_folder):
        llm = FakeLLM()
        result = make_pipeline(llm=llm).analyze_upload(_upload(make_docx(EMPLOYMENT_TEXT), "offer.docx", DOCX_MIME))
        assert result == VALID_ANALYSIS
        assert llm.calls == 1
        assert EMPLOYMENT_TEXT in llm.prompts[0]
        assert list(upload_folder.iterdir()) == []

    def test_any_llm_output_yields_full_shape_for_employment_contract(self, make_pipeline):
        for raw in ["not json", '{"isContract": true}', json.dumps(VALID_ANALYSIS)]:
            result = make_pipeline(llm=FakeLLM(response=raw)).analyze_upload(
                _upload(make_docx(EMPLOYMENT_TEXT), "offer.docx", DOCX_MIME)
            )
            assert result["isContract"] is True
            assert all(section in result for section in ANALYSIS_SECTIONS)

    def test_non_contract_skips_llm(self, make_pipeline, upload_folder):
        llm = FakeLLM()
        result = make_pipeline(llm=llm).analyze_upload(_upload(make_docx(RECIPE_TEXT), "recipe.docx", DOCX_MIME))
        assert result == {"isContract": False, "analysis": REJECTION_MESSAGE}
        assert llm.calls == 0
        assert list(upload_folder.iterdir()) == []

    def test_prompt_truncated_to_limit(self, make_pipeline):
        llm = FakeLLM()
        long_text = EMPLOYMENT_TEXT + " " + "x" * 10000
        make_pipeline(llm=llm, prompt_text_limit=200).analyze_upload(
            _upload(make_docx(long_text), "long.docx", DOCX_MIME)
        )
        assert "x" * 200 not in llm.prompts[0]

    def test_threshold_override(self, make_pipeline):
        llm = FakeLLM()
        make_pipeline(llm=llm, keyword_threshold=50).analyze_upload(
            _upload(make_docx(EMPLOYMENT_TEXT), "offer.docx", DOCX_MIME)
        )
        assert llm.calls == 0

    @pytest.mark.parametrize("upload", [None, FileStorage(stream=io.BytesIO(b""), filename="")])
    def test_missing_input(self, make_pipeline, upload):
        with pytest.raises(MissingInput):
            make_pipeline().analyze_upload(upload)

    def test_unsupported_type_cleans_up(self, make_pipeline, upload_folder):
        with pytest.raises(UnsupportedMediaType):
            make_pipeline().analyze_upload(_upload(b"hello", "notes.txt", "text/plain"))
        assert list(upload_folder.iterdir()) == []

    def test_pdf_failure_cleans_up(self, make_pipeline, upload_folder):
        backend = BrokenPdfBackend()
        with pytest.raises(ExtractionFailure):
            make_pipeline(pdf_backend=backend).analyze_upload(_upload(b"%PDF-1.7", "locked.pdf", PDF_MIME))
        # The decoder saw the saved file; afterwards it is gone.
        assert backend.seen_paths and backend.seen_paths[0][1] is True
        assert list(upload_folder.iterdir()) == []

    def test_upstream_failure_cleans_up(self, make_pipeline, upload_folder):
        llm = FakeLLM(error=UpstreamTimeout("slow"))
        with pytest.raises(UpstreamTimeout):
            make_pipeline(llm=llm).analyze_upload(_upload(make_docx(EMPLOYMENT_TEXT), "offer.docx", DOCX_MIME))
        assert list(upload_folder.iterdir()) == []
