from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from fakes import completion


@pytest.fixture(autouse=True)
def relay_settings(monkeypatch):
    from road_inspector.config import settings

    # No relay access key, a fake upstream credential; restored after each test
    monkeypatch.setattr(settings, "api_key", "")
    monkeypatch.setattr(settings, "openai_api_key", "sk-test-key")
    monkeypatch.setattr(settings, "openai_model", "gpt-4o")
    monkeypatch.setattr(settings, "openai_base_url", "")
    monkeypatch.setattr(settings, "openai_timeout_seconds", 60.0)
    monkeypatch.setattr(settings, "max_image_size_bytes", 10 * 1024 * 1024)
    return settings


@pytest.fixture
def openai_mock():
    """Patched AsyncOpenAI class; its instance answers with an empty JSON object by default."""
    with patch("road_inspector.services.vision.AsyncOpenAI") as mock_cls:
        mock_client = MagicMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client.chat.completions.create = AsyncMock(return_value=completion("{}"))
        mock_cls.return_value = mock_client
        yield mock_cls
