import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def strip_code_fence(text: str) -> str:
    """Remove a ```json ... ``` or ``` ... ``` wrapper around model output."""
    clean = text.strip()
    if clean.startswith("```json"):
        clean = clean[len("```json"):]
    elif clean.startswith("```"):
        clean = clean[len("```"):]
    else:
        return clean
    if clean.endswith("```"):
        clean = clean[:-len("```")]
    return clean.strip()


def interpret_analysis(value: Any) -> tuple[str, dict | None]:
    """Return (display text, parsed mapping or None) for the relay's `analysis` value."""
    if isinstance(value, dict):
        return json.dumps(value, indent=2), value

    text = value if isinstance(value, str) else json.dumps(value)
    try:
        parsed = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        logger.info("Analysis is not JSON, showing raw text: %s", e)
        return text, None

    if not isinstance(parsed, dict):
        return text, None
    return text, parsed
