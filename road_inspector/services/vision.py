import base64
import logging

from openai import AsyncOpenAI

from road_inspector.config import settings

logger = logging.getLogger(__name__)

REASONING_MODEL_PREFIXES = ("o1", "o3", "o4")


def _encode_image_base64(image_bytes: bytes) -> str:
    return base64.b64encode(image_bytes).decode("utf-8")


def _is_reasoning_model(model: str) -> bool:
    return any(model == p or model.startswith(p + "-") for p in REASONING_MODEL_PREFIXES)


def _build_api_kwargs(model: str, content: list[dict]) -> dict:
    """Build OpenAI API kwargs based on model type."""
    api_kwargs: dict = {
        "model": model,
        "messages": [{"role": "user", "content": content}],
    }

    if _is_reasoning_model(model):
        # o-series reasoning models: no temperature, max_completion_tokens only
        api_kwargs["max_completion_tokens"] = settings.analysis_max_tokens
    else:
        api_kwargs["max_tokens"] = settings.analysis_max_tokens
        api_kwargs["temperature"] = settings.analysis_temperature

    return api_kwargs


def build_content(prompt: str, image_bytes: bytes, mime_type: str) -> list[dict]:
    """One text part with the prompt, one inline image part tagged with its MIME type."""
    b64 = _encode_image_base64(image_bytes)
    return [
        {"type": "text", "text": prompt},
        {
            "type": "image_url",
            "image_url": {
                "url": f"data:{mime_type};base64,{b64}",
                "detail": "high",
            },
        },
    ]


def _make_client() -> AsyncOpenAI:
    kwargs: dict = {
        "api_key": settings.openai_api_key,
        "timeout": settings.openai_timeout_seconds,
        # single attempt, failures are reported to the caller
        "max_retries": 0,
    }
    if settings.openai_base_url:
        kwargs["base_url"] = settings.openai_base_url
    return AsyncOpenAI(**kwargs)


async def request_analysis(prompt: str, image_bytes: bytes, mime_type: str) -> str:
    """Send prompt and image to the vision model and return its raw text answer.

    SDK exceptions propagate unchanged; callers map them to HTTP errors.
    """
    model = settings.openai_model
    logger.info("Calling OpenAI model=%s with %s image (%d bytes)", model, mime_type, len(image_bytes))

    content = build_content(prompt, image_bytes, mime_type)
    api_kwargs = _build_api_kwargs(model, content)

    async with _make_client() as client:
        response = await client.chat.completions.create(**api_kwargs)

    raw_text = ""
    if response.choices:
        raw_text = response.choices[0].message.content or ""
    logger.info("OpenAI raw response (%d chars): %s", len(raw_text), raw_text[:500])
    return raw_text
