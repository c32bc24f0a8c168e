import httpx
import pytest

from road_inspector.client import cli
from road_inspector.client.relay import RelayClient
from fakes import FAKE_JPEG


def _relay(status, body):
    return RelayClient("http://relay.test", transport=httpx.MockTransport(lambda request: httpx.Response(status, json=body)))


@pytest.mark.asyncio
async def test_resolved_run_prints_report(tmp_path, capsys):
    photo = tmp_path / "road.jpg"
    photo.write_bytes(FAKE_JPEG)
    args = cli.build_parser().parse_args([str(photo), "--note", "pothole near gate"])

    code = await cli.run(args, relay=_relay(200, {"analysis": {"issue_count": 0, "summary": "Clean road."}}))

    assert code == cli.EXIT_OK
    assert "Clean road." in capsys.readouterr().out


@pytest.mark.asyncio
async def test_failed_run_prints_error(tmp_path, capsys):
    photo = tmp_path / "road.png"
    photo.write_bytes(b"\x89PNG")
    args = cli.build_parser().parse_args([str(photo)])

    code = await cli.run(args, relay=_relay(503, {"error": "AI service is overloaded. Please try again"}))

    out = capsys.readouterr().out
    assert code == cli.EXIT_FAILED
    assert "AI service is overloaded" in out
    assert "Try Again" in out


@pytest.mark.asyncio
async def test_non_image_file_is_refused(tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("not a photo")
    args = cli.build_parser().parse_args([str(notes)])

    assert await cli.run(args, relay=_relay(200, {})) == cli.EXIT_NOT_IMAGE


def test_parser_defaults(monkeypatch):
    monkeypatch.delenv("ROAD_INSPECTOR_RELAY_URL", raising=False)
    args = cli.build_parser().parse_args(["road.jpg"])

    assert args.relay_url == "http://localhost:8000"
    assert args.note is None
