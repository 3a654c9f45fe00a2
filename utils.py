"""
Utility functions for the Contract Analyzer API.
"""
import os
import re
import uuid
import logging
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)

_CODE_FENCE_RE = re.compile(r"```[a-zA-Z]*")


def safe_file_cleanup(filepath):
    """
    Safely remove a file with error handling.

    Args:
        filepath: Path to file to remove

    Returns:
        bool: True if successfully removed or file doesn't exist
    """
    try:
        if os.path.exists(filepath):
            os.remove(filepath)
            logger.info(f"Cleaned up file: {filepath}")
        return True
    except OSError as e:
        logger.warning(f"Failed to cleanup file {filepath}: {str(e)}")
        return False


def get_unique_filename(original_filename):
    """
    Get a secure, collision-free filename for an upload.

    Args:
        original_filename: Original filename from upload

    Returns:
        str: Secure filename prefixed with a random hex token
    """
    safe_name = secure_filename(original_filename or "") or "upload"
    return f"{uuid.uuid4().hex}_{safe_name}"


def log_error_and_return(error_msg, status_code=500):
    """
    Log an error and return a formatted error response.

    Args:
        error_msg: Error message to log and return
        status_code: HTTP status code

    Returns:
        tuple: (error_dict, status_code)
    """
    logger.error(error_msg)
    return {"error": error_msg}, status_code


def strip_code_fences(text: str) -> str:
    """Remove Markdown code-fence markers (```json, ```) anywhere in the text."""
    return _CODE_FENCE_RE.sub("", text).strip()


def trim_to_json_object(text: str):
    """Cut the text down to the span between the first '{' and the last '}'."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start:end + 1]


def contains_any(text: str, words) -> bool:
    lowered = text.lower()
    return any(word in lowered for word in words)
