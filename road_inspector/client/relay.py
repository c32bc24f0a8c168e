"""HTTP client for the relay's analyze-image endpoint."""
import logging
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/analyze-image"
DEFAULT_RELAY_URL = "http://localhost:8000"

MSG_INVALID_FORMAT = "Server error. Please try again in a moment."
MSG_NETWORK = "Network error. Please check your connection and try again."
MSG_NO_ANALYSIS = "No analysis received from server"


@dataclass(frozen=True)
class StagedImage:
    filename: str
    content_type: str
    data: bytes

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")


class RelayError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RelayClient:

    def __init__(
        self,
        base_url: str = DEFAULT_RELAY_URL,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._transport = transport
        # None = wait for the relay; its upstream call carries its own bound
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        if self._api_key:
            return {"X-API-Key": self._api_key}
        return {}

    @staticmethod
    def _form_fields(
        note: str | None,
        complaint_type: str | None,
        location: str | None,
    ) -> dict[str, str]:
        fields = {}
        if complaint_type:
            fields["complaintType"] = complaint_type
        if location:
            fields["location"] = location
        if note:
            fields["description"] = note
        return fields

    async def analyze(
        self,
        image: StagedImage,
        note: str | None = None,
        complaint_type: str | None = None,
        location: str | None = None,
    ) -> dict:
        """POST one image to the relay and return the decoded JSON body.

        Raises RelayError with a user-facing message on any failure.
        """
        files = {"image": (image.filename, image.data, image.content_type)}
        data = self._form_fields(note, complaint_type, location)

        logger.info("Sending %s (%d bytes) to relay", image.filename, len(image.data))
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                transport=self._transport,
                timeout=self._timeout,
            ) as client:
                response = await client.post(ANALYZE_PATH, files=files, data=data, headers=self._headers())
        except httpx.TransportError as e:
            logger.error("Relay unreachable: %s", e)
            raise RelayError(MSG_NETWORK) from e

        logger.info("Relay response status: %d", response.status_code)

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            logger.error("Non-JSON response: %s", response.text[:500])
            raise RelayError(MSG_INVALID_FORMAT, response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise RelayError(MSG_INVALID_FORMAT, response.status_code) from e

        if not response.is_success:
            message = body.get("error") if isinstance(body, dict) else None
            raise RelayError(message or f"Server error: {response.status_code}", response.status_code)

        if not isinstance(body, dict) or body.get("analysis") in (None, ""):
            raise RelayError(MSG_NO_ANALYSIS, response.status_code)

        return body
