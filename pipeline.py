"""
Orchestrates one contract analysis request: save upload, extract text,
classify, prompt the LLM, normalize the answer, clean up.
"""
import os
import logging
from contextlib import contextmanager

from ai_processor import build_analysis_prompt
from classifier import is_contract
from config import CONTRACT_KEYWORD_THRESHOLD, PROMPT_TEXT_LIMIT
from constants import REJECTION_MESSAGE
from document_loader import Document, MediaType, extract_text
from errors import MissingInput
from response_normalizer import normalize_response
from schemas import NonContractResult
from utils import get_unique_filename, safe_file_cleanup

logger = logging.getLogger(__name__)


@contextmanager
def scratch_document(file_storage, upload_folder):
    """
    Save an uploaded file under a unique name and delete it on exit.

    The file is removed however the block exits, including when the
    request is aborted mid-way.
    """
    filename = file_storage.filename or ""
    media_type = MediaType.detect(file_storage.mimetype, filename)
    filepath = os.path.join(upload_folder, get_unique_filename(filename))
    try:
        file_storage.save(filepath)
        yield Document(path=filepath, media_type=media_type, filename=filename)
    finally:
        safe_file_cleanup(filepath)


class ContractAnalysisPipeline:
    """Runs extractor, classifier, prompt builder, LLM and normalizer in sequence."""

    def __init__(self, pdf_backend, llm, upload_folder,
                 prompt_text_limit=PROMPT_TEXT_LIMIT,
                 keyword_threshold=CONTRACT_KEYWORD_THRESHOLD):
        self.pdf_backend = pdf_backend
        self.llm = llm
        self.upload_folder = upload_folder
        self.prompt_text_limit = prompt_text_limit
        self.keyword_threshold = keyword_threshold

    def analyze_text(self, text):
        """Classify and analyze already-extracted text. Returns the wire dict."""
        if not is_contract(text, threshold=self.keyword_threshold):
            logger.info("Document rejected by contract classifier; skipping LLM call")
            return NonContractResult(analysis=REJECTION_MESSAGE).to_dict()

        prompt = build_analysis_prompt(text, max_chars=self.prompt_text_limit)
        raw_response = self.llm.generate(prompt)
        normalized = normalize_response(raw_response, text)
        if normalized.degraded:
            logger.warning(f"Returning degraded analysis ({normalized.reason})")
        return normalized.record.to_dict()

    def analyze_upload(self, file_storage):
        """
        Run the full pipeline on an uploaded file.

        Args:
            file_storage: werkzeug FileStorage from the multipart request

        Returns:
            dict: AnalysisRecord serialized with its wire field names
        """
        if file_storage is None or not file_storage.filename:
            raise MissingInput("No file uploaded")

        with scratch_document(file_storage, self.upload_folder) as document:
            logger.info(f"Processing document: {document.filename} ({document.media_type.name})")
            text = extract_text(document, self.pdf_backend)
        # The scratch file is gone by now; the LLM only needs the text.
        return self.analyze_text(text)
