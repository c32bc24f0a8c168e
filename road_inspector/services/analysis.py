import json
import logging
import re

from road_inspector.config import settings
from road_inspector.services import vision
from road_inspector.services.prompt import build_analysis_prompt
from road_inspector.utils.exceptions import (
    BadRequest,
    EmptyAnalysis,
    ServiceMisconfigured,
    map_upstream_error,
)
from road_inspector.utils.response import analysis_response, raw_analysis_response

logger = logging.getLogger(__name__)

_SECRET_PATTERN = re.compile(r"sk-[A-Za-z0-9_-]+")


def _mask_secrets(text: str) -> str:
    return _SECRET_PATTERN.sub("sk-***", text)


def _format_size_limit(size_bytes: int) -> str:
    return f"{size_bytes // (1024 * 1024)}MB"


def validate_image(content_type: str | None, size: int) -> None:
    """Reject anything that is not an image/* upload within the size limit."""
    if not content_type or not content_type.startswith("image/"):
        raise BadRequest("File must be an image")
    if size > settings.max_image_size_bytes:
        limit = _format_size_limit(settings.max_image_size_bytes)
        raise BadRequest(f"Image file too large. Maximum size is {limit}")


def ensure_configured() -> None:
    if not settings.openai_api_key:
        logger.error("OPENAI_API_KEY not configured")
        raise ServiceMisconfigured()


def build_user_context(
    complaint_type: str | None,
    location: str | None,
    description: str | None,
) -> dict:
    return {
        "complaint_type": complaint_type or None,
        "location": location or None,
        "description": description or None,
    }


def normalize_analysis(raw_text: str, image_size: int, user_context: dict) -> dict:
    """Wrap parsed model output with metadata, or pass unparseable text through as raw."""
    if not raw_text or not raw_text.strip():
        logger.error("No analysis content received")
        raise EmptyAnalysis()

    try:
        parsed = json.loads(raw_text)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse analysis JSON, returning raw text: %s", e)
        return raw_analysis_response(raw_text)

    return analysis_response(parsed, image_size, user_context, model=settings.openai_model)


async def analyze_road_image(
    image_bytes: bytes,
    content_type: str | None,
    complaint_type: str | None = None,
    location: str | None = None,
    description: str | None = None,
) -> dict:
    validate_image(content_type, len(image_bytes))
    ensure_configured()

    logger.info("Starting road analysis (%s, %d bytes)", content_type, len(image_bytes))
    prompt = build_analysis_prompt(complaint_type, location, description)

    try:
        raw_text = await vision.request_analysis(prompt, image_bytes, content_type)
    except Exception as e:
        mapped = map_upstream_error(e)
        logger.error(
            "Road analysis FAILED (%s -> %d): %s",
            type(e).__name__, mapped.status_code, _mask_secrets(str(e)),
        )
        raise mapped from e

    logger.info("Road analysis completed")
    user_context = build_user_context(complaint_type, location, description)
    return normalize_analysis(raw_text, len(image_bytes), user_context)
