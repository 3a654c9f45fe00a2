"""
Keyword heuristic that decides whether extracted text looks like a contract.

Runs before any LLM call so obviously unrelated uploads (recipes, CVs,
invoices) never cost a model request.
"""
import re
import logging
from typing import Set

from config import CONTRACT_KEYWORD_THRESHOLD
from constants import CONTRACT_VOCABULARY

logger = logging.getLogger(__name__)


# One named group per term so every inflection maps back to its term.
_TERMS = list(CONTRACT_VOCABULARY)
_VOCABULARY_RE = re.compile(
    r"\b(?:"
    + "|".join(f"(?P<t{i}>{CONTRACT_VOCABULARY[term]})" for i, term in enumerate(_TERMS))
    + r")\b",
    re.IGNORECASE,
)


def find_contract_terms(text: str) -> Set[str]:
    """Return the distinct vocabulary terms present in the text."""
    if not text:
        return set()
    return {_TERMS[int(match.lastgroup[1:])] for match in _VOCABULARY_RE.finditer(text)}


def is_contract(text: str, threshold: int = CONTRACT_KEYWORD_THRESHOLD) -> bool:
    """True when at least `threshold` distinct vocabulary terms occur in the text."""
    if not text or not text.strip():
        return False
    terms = find_contract_terms(text)
    logger.info(f"Contract classifier matched {len(terms)} term(s): {sorted(terms)}")
    return len(terms) >= threshold
