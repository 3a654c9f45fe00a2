import logging

import openai
from langchain_openai import ChatOpenAI
from langchain_core.prompts import PromptTemplate

# Import configuration
from config import (
    OPENAI_API_KEY, ANALYSIS_MODEL, ANALYSIS_TEMPERATURE,
    ANALYSIS_MAX_TOKENS, LLM_TIMEOUT_SECONDS, PROMPT_TEXT_LIMIT
)
from constants import ANALYSIS_PROMPT_TEMPLATE, REJECTION_MESSAGE
from errors import UpstreamTimeout, UpstreamUnavailable

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = PromptTemplate(
    template=ANALYSIS_PROMPT_TEMPLATE,
    input_variables=["document_text"],
    partial_variables={"rejection_message": REJECTION_MESSAGE},
)


# --- PROMPT BUILDER ---

def build_analysis_prompt(document_text, max_chars=PROMPT_TEXT_LIMIT):
    """Render the analysis prompt around the first `max_chars` characters of the document."""
    excerpt = document_text[:max_chars]
    return ANALYSIS_PROMPT.format(document_text=excerpt)


# --- LLM CLIENT ---

class AnalysisLLM:
    """
    Thin adapter over the chat model used for contract analysis.

    Sampling is pinned (low temperature, bounded output) to keep the JSON
    shape stable. The adapter never retries; a timeout or provider error is
    raised to the caller as UpstreamTimeout / UpstreamUnavailable.
    """

    def __init__(self, llm=None, api_key=OPENAI_API_KEY, model=ANALYSIS_MODEL,
                 temperature=ANALYSIS_TEMPERATURE, max_tokens=ANALYSIS_MAX_TOKENS,
                 timeout=LLM_TIMEOUT_SECONDS):
        if llm is None and api_key:
            llm = ChatOpenAI(
                openai_api_key=api_key,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                timeout=timeout,
                max_retries=0,
            )
        elif llm is None:
            logger.error("OPENAI_API_KEY is not set; contract analysis requests will fail")
        self._llm = llm

    @property
    def configured(self):
        return self._llm is not None

    def generate(self, prompt):
        if self._llm is None:
            raise UpstreamUnavailable("The analysis service is not configured. Please contact the administrator.")
        try:
            logger.info("Requesting contract analysis from LLM")
            response = self._llm.invoke(prompt)
        except openai.APITimeoutError as e:
            logger.error(f"LLM request timed out: {str(e)}")
            raise UpstreamTimeout("The analysis service took too long to respond. Please try again.") from e
        except openai.APIError as e:
            logger.error(f"LLM request failed: {str(e)}")
            raise UpstreamUnavailable("The analysis service is currently unavailable. Please try again later.") from e
        logger.info("Received LLM response")
        return response.content if isinstance(response.content, str) else str(response.content)
