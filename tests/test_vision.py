import base64

import pytest

from road_inspector.services import vision
from fakes import completion


def test_build_content_tags_image_with_mime_type():
    content = vision.build_content("inspect", b"\x89PNG-bytes", "image/png")

    assert content[0] == {"type": "text", "text": "inspect"}
    image_part = content[1]
    assert image_part["type"] == "image_url"
    expected = base64.b64encode(b"\x89PNG-bytes").decode()
    assert image_part["image_url"]["url"] == f"data:image/png;base64,{expected}"
    assert image_part["image_url"]["detail"] == "high"


def test_api_kwargs_gpt_model_bounded_and_low_temperature(relay_settings):
    kwargs = vision._build_api_kwargs("gpt-4o", [])

    assert kwargs["max_tokens"] == relay_settings.analysis_max_tokens
    assert kwargs["temperature"] == relay_settings.analysis_temperature
    assert "max_completion_tokens" not in kwargs


@pytest.mark.parametrize("model", ["o1", "o3-mini", "o4-mini"])
def test_api_kwargs_reasoning_model(model):
    kwargs = vision._build_api_kwargs(model, [])

    assert "temperature" not in kwargs
    assert "max_tokens" not in kwargs
    assert kwargs["max_completion_tokens"] > 0


@pytest.mark.asyncio
async def test_request_analysis_single_user_message(openai_mock):
    create = openai_mock.return_value.chat.completions.create
    create.return_value = completion('{"issue_count": 0}')

    text = await vision.request_analysis("inspect", b"jpeg", "image/jpeg")

    assert text == '{"issue_count": 0}'
    create.assert_called_once()
    messages = create.call_args.kwargs["messages"]
    assert len(messages) == 1
    assert messages[0]["role"] == "user"
    assert [part["type"] for part in messages[0]["content"]] == ["text", "image_url"]


@pytest.mark.asyncio
async def test_request_analysis_client_has_timeout_and_no_retries(openai_mock, relay_settings):
    relay_settings.openai_timeout_seconds = 30.0
    relay_settings.openai_base_url = "https://proxy.example/v1"

    await vision.request_analysis("inspect", b"jpeg", "image/jpeg")

    kwargs = openai_mock.call_args.kwargs
    assert kwargs["api_key"] == "sk-test-key"
    assert kwargs["timeout"] == 30.0
    assert kwargs["max_retries"] == 0
    assert kwargs["base_url"] == "https://proxy.example/v1"


@pytest.mark.asyncio
async def test_request_analysis_none_content_is_empty_string(openai_mock):
    openai_mock.return_value.chat.completions.create.return_value = completion(None)

    assert await vision.request_analysis("inspect", b"jpeg", "image/jpeg") == ""


@pytest.mark.asyncio
async def test_request_analysis_closes_client(openai_mock):
    await vision.request_analysis("inspect", b"jpeg", "image/jpeg")

    openai_mock.return_value.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_request_analysis_closes_client_on_failure(openai_mock):
    openai_mock.return_value.chat.completions.create.side_effect = RuntimeError("upstream down")

    with pytest.raises(RuntimeError):
        await vision.request_analysis("inspect", b"jpeg", "image/jpeg")

    openai_mock.return_value.__aexit__.assert_awaited_once()
