"""
Turns raw LLM output into a guaranteed-shape analysis record.

Models rarely emit bare JSON, so the raw text goes through a fixed chain of
steps, each of which either succeeds with a value or fails with a reason:

    raw text -> fences stripped -> JSON object span -> parsed dict -> record

If any step fails the record is synthesised from the *source document*
instead: a canned employment-contract analysis when the document is about
employment, otherwise a "failed to analyze" rejection. Either way the caller
gets a valid record, never an error.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from constants import (
    ANALYSIS_SECTIONS, EMPLOYMENT_CONTRACT_ANALYSIS, EMPLOYMENT_INDICATORS,
    FAILED_ANALYSIS_MESSAGE, REJECTION_MESSAGE, RISK_SECTIONS, STRING_SECTIONS,
)
from schemas import AnalysisRecord, ContractAnalysis, NonContractResult, RiskItem
from utils import contains_any, strip_code_fences, trim_to_json_object

logger = logging.getLogger(__name__)

_RISK_RATINGS = {"high": "High", "medium": "Medium", "low": "Low"}


@dataclass(frozen=True)
class StepResult:
    """Outcome of one normalization step."""
    stage: str
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


@dataclass(frozen=True)
class NormalizedAnalysis:
    """Final record plus how it was obtained. `degraded` never goes on the wire."""
    record: AnalysisRecord
    stage: str
    degraded: bool = False
    reason: Optional[str] = None


# --- STEPS ---

def fence_strip_step(raw_text):
    if not isinstance(raw_text, str) or not raw_text.strip():
        return StepResult("fence_stripped", error="empty response")
    return StepResult("fence_stripped", strip_code_fences(raw_text))


def json_span_step(text):
    span = trim_to_json_object(text)
    if span is None:
        return StepResult("json_span", error="no JSON object in response")
    return StepResult("json_span", span)


def parse_step(text):
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        return StepResult("parsed", error=f"invalid JSON: {str(e)}")
    if not isinstance(data, dict):
        return StepResult("parsed", error="JSON is not an object")
    return StepResult("parsed", data)


def record_step(data):
    flag = data.get("isContract")
    if flag is False:
        analysis = data.get("analysis")
        if not isinstance(analysis, str) or not analysis.strip():
            analysis = REJECTION_MESSAGE
        return StepResult("record", NonContractResult(analysis=analysis))
    if flag is not True and not any(section in data for section in ANALYSIS_SECTIONS):
        return StepResult("record", error="response has neither isContract nor analysis sections")
    return StepResult("record", build_contract_analysis(data))


PIPELINE_STEPS = (fence_strip_step, json_span_step, parse_step, record_step)


# --- SECTION COERCION ---

def _coerce_strings(value):
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _coerce_risk_item(item):
    if not isinstance(item, dict):
        return None
    rating = item.get("riskRating")
    if isinstance(rating, str):
        rating = _RISK_RATINGS.get(rating.strip().lower(), rating)
    try:
        return RiskItem(point=item.get("point"), riskRating=rating, reason=item.get("reason"))
    except ValidationError:
        return None


def _coerce_risk_items(value):
    if not isinstance(value, list):
        return []
    items = (_coerce_risk_item(item) for item in value)
    return [item for item in items if item is not None]


def build_contract_analysis(data):
    """Build a ContractAnalysis, replacing absent or malformed sections with empty lists."""
    sections = {}
    for name in STRING_SECTIONS:
        sections[name] = _coerce_strings(data.get(name))
    for name in RISK_SECTIONS:
        sections[name] = _coerce_risk_items(data.get(name))
    missing = [name for name in ANALYSIS_SECTIONS if not isinstance(data.get(name), list)]
    if missing:
        logger.info(f"Filled missing analysis sections with empty lists: {missing}")
    return ContractAnalysis(**sections)


# --- FALLBACK ---

def fallback_record(source_text):
    """Record used when the model output could not be parsed at all."""
    if source_text and contains_any(source_text, EMPLOYMENT_INDICATORS):
        return ContractAnalysis.model_validate(EMPLOYMENT_CONTRACT_ANALYSIS)
    return NonContractResult(analysis=FAILED_ANALYSIS_MESSAGE)


def normalize_response(raw_text, source_text):
    """
    Normalize raw LLM output into an AnalysisRecord.

    Args:
        raw_text: Text returned by the model
        source_text: Text extracted from the uploaded document

    Returns:
        NormalizedAnalysis: always carries a schema-valid record
    """
    value = raw_text
    for step in PIPELINE_STEPS:
        result = step(value)
        if not result.ok:
            logger.warning(f"LLM response normalization failed at '{result.stage}': {result.error}")
            return NormalizedAnalysis(
                record=fallback_record(source_text),
                stage="fallback",
                degraded=True,
                reason=result.error,
            )
        value = result.value
    return NormalizedAnalysis(record=value, stage="record")
