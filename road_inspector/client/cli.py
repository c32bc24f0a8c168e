"""road-inspector: analyze one road photo through the relay and print the report."""
import argparse
import asyncio
import logging
import mimetypes
import os
import sys
from pathlib import Path

from road_inspector.client.relay import DEFAULT_RELAY_URL, RelayClient, StagedImage
from road_inspector.client.render import render
from road_inspector.client.session import InspectionSession, SessionState

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NOT_IMAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="road-inspector", description=__doc__)
    parser.add_argument("image", type=Path, help="road photo to analyze")
    parser.add_argument("--note", help="free-text description sent with the image")
    parser.add_argument("--complaint-type", help="reported complaint type")
    parser.add_argument("--location", help="reported location")
    parser.add_argument(
        "--relay-url",
        default=os.getenv("ROAD_INSPECTOR_RELAY_URL", DEFAULT_RELAY_URL),
        help="base URL of the relay (default: %(default)s)",
    )
    parser.add_argument("--api-key", default=os.getenv("ROAD_INSPECTOR_API_KEY"), help="relay access key")
    parser.add_argument("-v", "--verbose", action="store_true", help="log requests to stderr")
    return parser


def load_image(path: Path) -> StagedImage:
    content_type, _ = mimetypes.guess_type(path.name)
    return StagedImage(
        filename=path.name,
        content_type=content_type or "application/octet-stream",
        data=path.read_bytes(),
    )


async def run(args: argparse.Namespace, relay: RelayClient | None = None) -> int:
    session = InspectionSession()
    staged = session.stage(
        load_image(args.image),
        note=args.note,
        complaint_type=args.complaint_type,
        location=args.location,
    )
    if not staged:
        print(f"{args.image}: not an image file", file=sys.stderr)
        return EXIT_NOT_IMAGE

    relay = relay or RelayClient(args.relay_url, api_key=args.api_key)
    state = await session.run_analysis(relay)
    print(render(session))
    return EXIT_OK if state is SessionState.RESOLVED else EXIT_FAILED


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
