"""
Simple configuration for the Contract Analyzer API.
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_list(name, default):
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config:
    """Configuration class for the Contract Analyzer API."""

    # API Configuration
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")

    # Model Settings
    ANALYSIS_MODEL = os.environ.get("ANALYSIS_MODEL", "gpt-4o-mini")
    ANALYSIS_TEMPERATURE = 0.1
    ANALYSIS_MAX_TOKENS = 2048
    LLM_TIMEOUT_SECONDS = float(os.environ.get("LLM_TIMEOUT_SECONDS", "45"))

    # Document Processing (tuning knobs)
    PROMPT_TEXT_LIMIT = int(os.environ.get("PROMPT_TEXT_LIMIT", "4000"))
    CONTRACT_KEYWORD_THRESHOLD = int(os.environ.get("CONTRACT_KEYWORD_THRESHOLD", "3"))

    # File Upload
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", "uploads")
    MAX_FILE_SIZE = 16 * 1024 * 1024  # 16MB

    # API Settings
    ALLOWED_ORIGINS = _env_list("ALLOWED_ORIGINS", "http://localhost:5173")
    API_HOST = os.environ.get("API_HOST", "0.0.0.0")
    API_PORT = int(os.environ.get("PORT", "5000"))
    API_DEBUG = os.environ.get("API_DEBUG", "false").lower() in ("1", "true", "yes", "on")
    API_VERSION = "1.0.0"


# Module-level aliases
OPENAI_API_KEY = Config.OPENAI_API_KEY
ANALYSIS_MODEL = Config.ANALYSIS_MODEL
ANALYSIS_TEMPERATURE = Config.ANALYSIS_TEMPERATURE
ANALYSIS_MAX_TOKENS = Config.ANALYSIS_MAX_TOKENS
LLM_TIMEOUT_SECONDS = Config.LLM_TIMEOUT_SECONDS
PROMPT_TEXT_LIMIT = Config.PROMPT_TEXT_LIMIT
CONTRACT_KEYWORD_THRESHOLD = Config.CONTRACT_KEYWORD_THRESHOLD
UPLOAD_FOLDER = Config.UPLOAD_FOLDER
MAX_FILE_SIZE = Config.MAX_FILE_SIZE
ALLOWED_ORIGINS = Config.ALLOWED_ORIGINS
API_HOST = Config.API_HOST
API_PORT = Config.API_PORT
API_DEBUG = Config.API_DEBUG
API_VERSION = Config.API_VERSION
