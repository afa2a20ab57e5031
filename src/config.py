import os
from typing import Dict, List, Tuple

from src.common.env import load_project_dotenv

load_project_dotenv()

# Wire keys of the three psychological frameworks, in assignment order.
FRAMEWORK_KEYS: Tuple[str, str, str] = ("benefit", "curiosity", "doubleEntendre")

# Python attribute name for each wire key.
FRAMEWORK_ATTRS: Dict[str, str] = {
    "benefit": "benefit",
    "curiosity": "curiosity",
    "doubleEntendre": "double_entendre",
}

TITLE_FIELDS: List[str] = ["title", "subtitle", "reasoning"]

DEFAULT_SUBTITLE = ""
DEFAULT_REASONING = "Generated title"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return max(int(raw), 0)
    except ValueError:
        return default


# Diagnostic excerpts never echo more than this many characters of untrusted text.
EXCERPT_MAX_CHARS: int = _int_env("TITLE_EXTRACT_EXCERPT_CHARS", 200)

LOG_DIR: str = os.getenv("TITLE_EXTRACT_LOG_DIR", "logs")
