from datetime import datetime, timezone
from typing import Any


def analysis_response(analysis: Any, image_size: int, user_context: dict, model: str | None = None) -> dict:
    return {
        "analysis": analysis,
        "metadata": {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "image_size": image_size,
            "model": model,
            "user_context": user_context,
        },
    }


def raw_analysis_response(text: str) -> dict:
    return {"analysis": text, "raw": True}


def error_response(message: str) -> dict:
    return {"error": message}
