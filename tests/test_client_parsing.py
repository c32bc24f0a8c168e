import json

import pytest

from road_inspector.client.parsing import interpret_analysis, strip_code_fence

RESULT = {"issue_count": 2, "issues": [{"type": "pothole"}, {"type": "litter"}], "tags": ["a"]}


@pytest.mark.parametrize(
    "wrapped",
    [
        "```json\n{body}\n```",
        "```\n{body}\n```",
        "  ```json{body}```  ",
        "{body}",
    ],
)
def test_fence_stripping_yields_same_object(wrapped):
    text = wrapped.replace("{body}", json.dumps(RESULT))

    display, parsed = interpret_analysis(text)

    assert parsed == RESULT
    assert display == text


def test_strip_code_fence_leaves_plain_text_alone():
    assert strip_code_fence("  just words  ") == "just words"


def test_strip_code_fence_without_closing_fence():
    assert strip_code_fence('```json\n{"a": 1}') == '{"a": 1}'


def test_mapping_is_used_directly():
    display, parsed = interpret_analysis(RESULT)

    assert parsed is RESULT
    assert json.loads(display) == RESULT


def test_unparseable_text_falls_back_to_raw():
    text = "Road looks **fine**, nothing to report."

    display, parsed = interpret_analysis(text)

    assert parsed is None
    assert display == text


@pytest.mark.parametrize("text", ["[1, 2, 3]", '"just a string"', "42"])
def test_json_that_is_not_an_object_is_raw(text):
    display, parsed = interpret_analysis(text)

    assert parsed is None
    assert display == text
