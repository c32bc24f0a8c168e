from fastapi import APIRouter, File, Form, Request, UploadFile

from road_inspector.schemas.analysis import AnalysisResponse, ErrorResponse
from road_inspector.services.analysis import analyze_road_image
from road_inspector.utils.exceptions import BadRequest

router = APIRouter(tags=["analysis"])

_RESPONSES: dict = {200: {"model": AnalysisResponse}}
_RESPONSES.update({
    status: {"model": ErrorResponse}
    for status in (400, 401, 403, 408, 429, 500, 502, 503)
})


def _has_body(request: Request) -> bool:
    content_length = request.headers.get("content-length")
    if content_length is not None:
        return content_length.strip() not in ("", "0")
    return "transfer-encoding" in request.headers


@router.post("/analyze-image", responses=_RESPONSES)
async def analyze_image(
    request: Request,
    image: UploadFile | None = File(None),
    complaint_type: str | None = Form(None, alias="complaintType"),
    location: str | None = Form(None),
    description: str | None = Form(None),
):
    if not _has_body(request):
        raise BadRequest("No request body provided")
    if image is None:
        raise BadRequest("No image file provided")

    content = await image.read()
    return await analyze_road_image(
        content,
        image.content_type,
        complaint_type=complaint_type,
        location=location,
        description=description,
    )
